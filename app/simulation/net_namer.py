"""
simulation/net_namer.py

Assigns SPICE node names to nets.

Rules, in order:
    1. A net touching a ground pin is "0", whatever labels it carries.
    2. Other nets get N1, N2, ... in (y, x) order of their first junction.
    3. Named-node (NET) labels on one net must agree case-insensitively;
       conflicting or reserved labels are compile errors and the net
       keeps its default name. A label that spells another net's
       default name is a warning.
    4. Nets sharing a label are grouped across the schematic; the first
       net to claim a label fixes its display casing.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from models.component import ComponentType

from .union_find import UnionFind

logger = logging.getLogger(__name__)

GROUND_NET_NAME = "0"
RESERVED_NODE_NAMES = frozenset({"0", "gnd"})


@dataclass
class NetNaming:
    """Outcome of net naming."""

    net_names: dict[str, str] = field(default_factory=dict)
    compile_errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    named_node_signals: list[str] = field(default_factory=list)

    def has_ground(self) -> bool:
        return GROUND_NET_NAME in self.net_names.values()


@dataclass(frozen=True)
class _LabelCandidate:
    label: str
    key: str


def normalize_node_label(value) -> str:
    return str(value if value is not None else "").strip()


def normalize_node_label_key(value) -> str:
    return normalize_node_label(value).lower()


def is_ground_pin(component, pin) -> bool:
    """A pin is ground if it belongs to a GND component or is named 0/gnd."""
    if component is None:
        return False
    if component.kind is ComponentType.GROUND:
        return True
    pin_name = str(pin.name or pin.pin_id or "").strip().lower()
    return pin_name in RESERVED_NODE_NAMES


def sorted_nets(nets):
    """Nets ordered by their first junction, y before x. The sort is stable."""
    return sorted(nets, key=lambda net: (net.anchor[1], net.anchor[0]))


def net_labels(net, component_map) -> list[_LabelCandidate]:
    """Non-empty labels of the NET components attached to a net."""
    labels = []
    for pin in net.pins:
        component = component_map.get(pin.component_id)
        if component is None or component.kind is not ComponentType.NET:
            continue
        label = normalize_node_label(component.label)
        if not label:
            continue
        labels.append(_LabelCandidate(label=label, key=normalize_node_label_key(label)))
    return labels


def _pick_label(labels, errors: list[str]) -> Optional[_LabelCandidate]:
    distinct: dict[str, _LabelCandidate] = {}
    for entry in labels:
        distinct.setdefault(entry.key, entry)

    reserved = next((entry for entry in distinct.values() if entry.key in RESERVED_NODE_NAMES), None)
    if reserved is not None:
        errors.append(f'Named node label "{reserved.label}" is reserved; use a different label.')
        return None

    if len(distinct) > 1:
        names = ", ".join(entry.label for entry in distinct.values())
        errors.append(f"Named node conflict: one net has multiple labels ({names}).")
        return None

    return next(iter(distinct.values()), None)


def resolve_net_names(model, nets) -> NetNaming:
    """
    Name every net of a schematic.

    Args:
        model: The SchematicModel the nets were built from.
        nets: Nets returned by build_nets().

    Returns:
        NetNaming with a name for every net id, the naming errors and one
        v(<label>) signal per canonical named node.
    """
    component_map = model.component_map()
    ordered = sorted_nets(nets)
    naming = NetNaming()
    candidates: dict[int, _LabelCandidate] = {}
    net_index = 1

    for position, net in enumerate(ordered):
        if any(is_ground_pin(component_map.get(pin.component_id), pin) for pin in net.pins):
            naming.net_names[net.net_id] = GROUND_NET_NAME
            continue
        naming.net_names[net.net_id] = f"N{net_index}"
        net_index += 1

        labels = net_labels(net, component_map)
        if not labels:
            continue
        chosen = _pick_label(labels, naming.compile_errors)
        if chosen is not None:
            candidates[position] = chosen

    # Group labeled nets schematic-wide; each group's root is the first
    # net (in sorted order) that claimed the label.
    groups = UnionFind(len(ordered))
    first_claim: dict[str, int] = {}
    canonical_by_root: dict[int, str] = {}
    for position in sorted(candidates):
        candidate = candidates[position]
        owner = first_claim.get(candidate.key)
        if owner is None:
            first_claim[candidate.key] = position
            canonical_by_root[position] = candidate.label
            naming.named_node_signals.append(f"v({candidate.label})")
        else:
            groups.union(owner, position)
        naming.net_names[ordered[position].net_id] = canonical_by_root[groups.find(position)]

    # A label spelled like another net's default name shorts the two in SPICE
    default_names = {
        naming.net_names[net.net_id].lower()
        for position, net in enumerate(ordered)
        if position not in candidates and naming.net_names[net.net_id] != GROUND_NET_NAME
    }
    for label in canonical_by_root.values():
        if label.lower() in default_names:
            naming.warnings.append(
                f'Named node label "{label}" matches the default name of another net; the two nets will be joined.'
            )

    logger.debug(
        "Named %d nets (%d labeled, %d errors)",
        len(naming.net_names),
        len(candidates),
        len(naming.compile_errors),
    )
    return naming
