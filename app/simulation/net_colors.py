"""
simulation/net_colors.py

Propagates named-node colors across joined nets for display.

Nets that carry NET components with the same label are merged; a valid
palette color on any NET component of a merged group tints every wire
and named node of that group.
"""

from dataclasses import dataclass, field

from models.component import ComponentType, normalize_net_color
from models.coordinates import coord_key, normalize_point

from .connectivity import build_nets
from .net_namer import normalize_node_label_key
from .union_find import UnionFind


@dataclass
class NetColorResult:
    """Colors keyed by wire id and by NET component id."""

    wire_colors: dict[str, str] = field(default_factory=dict)
    net_colors: dict[str, str] = field(default_factory=dict)


def _point_index(nets) -> dict[tuple[float, float], int]:
    index = {}
    for position, net in enumerate(nets):
        for node in net.nodes:
            point = normalize_point(node)
            if point is not None:
                index[coord_key(point)] = position
    return index


def resolve_net_colors(model, nets=None) -> NetColorResult:
    """
    Resolve display colors for wires and named nodes.

    Args:
        model: The SchematicModel to color.
        nets: Nets of the model; built on demand when omitted.

    Returns:
        NetColorResult. Invalid or off-palette colors are ignored.
    """
    if nets is None:
        nets = build_nets(model)
    result = NetColorResult()
    if not nets:
        return result

    component_map = model.component_map()
    point_to_net = _point_index(nets)
    groups = UnionFind(len(nets))

    labeled_owner: dict[str, int] = {}
    for position, net in enumerate(nets):
        label_keys = []
        for pin in net.pins:
            component = component_map.get(pin.component_id)
            if component is None or component.kind is not ComponentType.NET:
                continue
            key = normalize_node_label_key(component.label)
            if key and key not in label_keys:
                label_keys.append(key)
        for key in label_keys:
            owner = labeled_owner.get(key)
            if owner is None:
                labeled_owner[key] = position
            else:
                groups.union(position, owner)

    color_by_root: dict[int, str] = {}
    for component in model.components:
        if component.kind is not ComponentType.NET:
            continue
        color = normalize_net_color(component.net_color)
        if not color or not component.pins:
            continue
        point = normalize_point(component.pins[0])
        if point is None:
            continue
        position = point_to_net.get(coord_key(point))
        if position is None:
            continue
        color_by_root.setdefault(groups.find(position), color)

    for position, net in enumerate(nets):
        color = color_by_root.get(groups.find(position))
        if not color:
            continue
        for pin in net.pins:
            component = component_map.get(pin.component_id)
            if component is not None and component.kind is ComponentType.NET:
                result.net_colors[pin.component_id] = color

    for wire in model.wires:
        for raw in wire.points:
            point = normalize_point(raw)
            if point is None:
                continue
            position = point_to_net.get(coord_key(point))
            if position is None:
                continue
            color = color_by_root.get(groups.find(position))
            if color:
                result.wire_colors[wire.wire_id] = color
                break

    return result
