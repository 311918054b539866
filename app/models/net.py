"""
NetData - Pure Python data model for electrical nets.

This module contains no UI dependencies. A net is a set of wire
junctions and component pins that share the same voltage. Nets are
derived on every compile and never stored with the schematic.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PinRef:
    """Reference to one component pin attached to a net."""

    component_id: str
    pin_id: str
    name: str
    x: float
    y: float

    @property
    def key(self) -> tuple[str, str]:
        return (self.component_id, self.pin_id)


@dataclass
class NetData:
    """
    A connected component of the junction graph.

    nodes[0] is the junction the flood fill started from; net naming
    sorts nets by it.
    """

    net_id: str
    nodes: list[tuple[float, float]] = field(default_factory=list)
    pins: list[PinRef] = field(default_factory=list)

    @property
    def anchor(self) -> tuple[float, float]:
        """First junction of the net, or the origin for an empty net."""
        return self.nodes[0] if self.nodes else (0.0, 0.0)

    def component_ids(self) -> list[str]:
        seen = []
        for pin in self.pins:
            if pin.component_id not in seen:
                seen.append(pin.component_id)
        return seen

    def is_empty(self) -> bool:
        return len(self.pins) == 0

    def __repr__(self) -> str:
        return f"NetData({self.net_id}, nodes={len(self.nodes)}, pins={len(self.pins)})"
