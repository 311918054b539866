"""
simulation/connectivity.py

Builds the junction graph of a schematic and extracts its nets.

Every wire point and every electrical pin position becomes a graph node
keyed by its rounded coordinate. Consecutive wire points are edges. Each
connected component that carries at least one pin is a net.
"""

import logging
from dataclasses import dataclass, field

from models.component import is_electrical_component_type
from models.coordinates import coord_key, normalize_point
from models.net import NetData, PinRef

logger = logging.getLogger(__name__)


@dataclass
class GraphNode:
    """One junction point of the schematic."""

    x: float
    y: float
    pins: list[PinRef] = field(default_factory=list)


class ConnectivityGraph:
    """
    Undirected junction graph.

    Nodes live in an arena indexed by integer id; a side map resolves a
    coordinate key to its node index and adjacency is stored as index
    lists.
    """

    def __init__(self):
        self.nodes: list[GraphNode] = []
        self.adjacency: list[list[int]] = []
        self._index: dict[tuple[float, float], int] = {}
        self._edges: set[tuple[int, int]] = set()

    def __len__(self) -> int:
        return len(self.nodes)

    def ensure_node(self, point: tuple[float, float]) -> int:
        """Return the index of the node at point, creating it if needed."""
        key = coord_key(point)
        index = self._index.get(key)
        if index is None:
            index = len(self.nodes)
            self.nodes.append(GraphNode(x=key[0], y=key[1]))
            self.adjacency.append([])
            self._index[key] = index
        return index

    def node_index(self, point) -> int | None:
        """Index of the node at point, or None if no node is there."""
        normalized = normalize_point(point)
        if normalized is None:
            return None
        return self._index.get(coord_key(normalized))

    def connect(self, a: int, b: int) -> None:
        """Add an undirected edge; repeated edges are ignored."""
        edge = (a, b) if a <= b else (b, a)
        if edge in self._edges:
            return
        self._edges.add(edge)
        self.adjacency[a].append(b)
        if a != b:
            self.adjacency[b].append(a)

    def add_wire(self, points) -> None:
        """Register a wire polyline; invalid points are skipped."""
        previous = None
        for raw in points:
            point = normalize_point(raw)
            if point is None:
                previous = None
                continue
            index = self.ensure_node(point)
            if previous is not None:
                self.connect(previous, index)
            previous = index

    def attach_pin(self, component_id: str, pin) -> None:
        """Attach a component pin to the node at its position."""
        point = normalize_point(pin)
        if point is None:
            return
        index = self.ensure_node(point)
        self.nodes[index].pins.append(
            PinRef(
                component_id=str(component_id if component_id is not None else ""),
                pin_id=str(pin.pin_id if pin.pin_id is not None else ""),
                name=str(pin.name or pin.pin_id or ""),
                x=point[0],
                y=point[1],
            )
        )

    def flood_fill(self) -> list[NetData]:
        """
        Split the graph into nets.

        Nodes are visited in creation order with a depth-first stack, so a
        fixed input order always yields the same nets. Components without
        any pin are dropped.
        """
        visited = [False] * len(self.nodes)
        nets: list[NetData] = []
        for start in range(len(self.nodes)):
            if visited[start]:
                continue
            visited[start] = True
            stack = [start]
            net_nodes = []
            net_pins = []
            while stack:
                current = stack.pop()
                node = self.nodes[current]
                net_nodes.append((node.x, node.y))
                net_pins.extend(node.pins)
                for neighbor in self.adjacency[current]:
                    if not visited[neighbor]:
                        visited[neighbor] = True
                        stack.append(neighbor)
            if net_pins:
                nets.append(NetData(net_id=f"N{len(nets) + 1}", nodes=net_nodes, pins=net_pins))
        return nets


def build_graph(model) -> ConnectivityGraph:
    """Build the junction graph for a schematic model."""
    graph = ConnectivityGraph()
    for wire in model.wires:
        graph.add_wire(wire.points)
    for component in model.components:
        if not is_electrical_component_type(component.component_type):
            continue
        for pin in component.pins:
            graph.attach_pin(component.component_id, pin)
    return graph


def build_nets(model) -> list[NetData]:
    """
    Extract the nets of a schematic.

    Args:
        model: A SchematicModel (or any object with components and wires).

    Returns:
        Nets in discovery order, ids N1, N2, ... Nets with no attached
        pin (bare wire loops) are not included.
    """
    graph = build_graph(model)
    nets = graph.flood_fill()
    logger.debug("Built %d nets from %d junctions", len(nets), len(graph))
    return nets
