"""
SchematicModel - Central data store for schematic state.

This module contains no UI dependencies. It holds the components and
wires the editing layer owns; the netlist compiler only reads it.
"""

from dataclasses import dataclass, field
from typing import Optional

from .component import ComponentData, PinData, normalize_net_color
from .coordinates import normalize_point
from .wire import WireData


@dataclass
class SchematicModel:
    """
    Components and wires of one schematic.

    Components keep insertion order; netlist lines are emitted in the
    same order.
    """

    components: list[ComponentData] = field(default_factory=list)
    wires: list[WireData] = field(default_factory=list)

    # --- Component operations ---

    def add_component(self, component: ComponentData) -> ComponentData:
        """
        Normalize and add a component.

        Pin coordinates are rounded, pin names default to pin ids and an
        off-palette net color is dropped.

        Returns:
            The normalized component that was stored.
        """
        pins = []
        for pin in component.pins:
            point = normalize_point(pin) or (0.0, 0.0)
            pins.append(
                PinData(
                    pin_id=str(pin.pin_id if pin.pin_id is not None else ""),
                    name=str(pin.name or pin.pin_id or ""),
                    x=point[0],
                    y=point[1],
                )
            )
        normalized = ComponentData(
            component_id=str(component.component_id if component.component_id is not None else ""),
            component_type=str(component.component_type if component.component_type is not None else ""),
            value=str(component.value) if component.value else "",
            pins=pins,
            name=str(component.name) if component.name is not None else None,
            net_color=normalize_net_color(component.net_color),
        )
        self.components.append(normalized)
        return normalized

    def remove_component(self, component_id: str) -> bool:
        """Remove every component with the given id. Returns True if any was removed."""
        before = len(self.components)
        self.components = [c for c in self.components if c.component_id != component_id]
        return len(self.components) < before

    def get_component(self, component_id: str) -> Optional[ComponentData]:
        for component in self.components:
            if component.component_id == component_id:
                return component
        return None

    def component_map(self) -> dict[str, ComponentData]:
        """Components keyed by id; a later duplicate id shadows an earlier one."""
        return {component.component_id: component for component in self.components}

    # --- Wire operations ---

    def add_wire(self, wire: WireData) -> WireData:
        """Add a wire, dropping points that are missing or not finite."""
        points = [p for p in (normalize_point(point) for point in wire.points) if p is not None]
        normalized = WireData(wire_id=str(wire.wire_id if wire.wire_id is not None else ""), points=points)
        self.wires.append(normalized)
        return normalized

    def remove_wire(self, wire_id: str) -> bool:
        before = len(self.wires)
        self.wires = [w for w in self.wires if w.wire_id != wire_id]
        return len(self.wires) < before

    # --- Schematic operations ---

    def clear(self) -> None:
        """Clear all schematic data."""
        self.components.clear()
        self.wires.clear()

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize to a plain {components, wires} mapping."""
        return {
            "components": [c.to_dict() for c in self.components],
            "wires": [w.to_dict() for w in self.wires],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SchematicModel":
        """
        Deserialize from a plain mapping.

        Every component and wire goes through add_component/add_wire so
        loaded data is normalized the same way as edited data.
        """
        model = cls()
        for comp_data in data.get("components", []):
            model.add_component(ComponentData.from_dict(comp_data))
        for wire_data in data.get("wires", []):
            model.add_wire(WireData.from_dict(wire_data))
        return model
