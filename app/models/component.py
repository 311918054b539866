"""
ComponentData - Pure Python data model for schematic components.

This module contains no UI dependencies. Pin positions are stored as
plain floats in schematic coordinates.

Component types use short SPICE-style tags as canonical identifiers:
'R', 'C', 'L', 'V', 'I', 'VM', 'AM', 'SW', 'PV', 'PI', 'PD', 'PP',
'GND', 'NET', 'TEXT'
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ComponentType(str, Enum):
    """Closed set of component tags understood by the schematic editor."""

    RESISTOR = "R"
    CAPACITOR = "C"
    INDUCTOR = "L"
    VOLTAGE_SOURCE = "V"
    CURRENT_SOURCE = "I"
    VOLTMETER = "VM"
    AMMETER = "AM"
    SWITCH = "SW"
    VOLTAGE_PROBE = "PV"
    CURRENT_PROBE = "PI"
    DIFFERENTIAL_PROBE = "PD"
    POWER_PROBE = "PP"
    GROUND = "GND"
    NET = "NET"
    TEXT = "TEXT"

    @classmethod
    def parse(cls, value) -> Optional["ComponentType"]:
        """Return the member for a tag (case-insensitive), or None if unknown."""
        try:
            return cls(str(value if value is not None else "").strip().upper())
        except ValueError:
            return None


COMPONENT_TYPES = [member.value for member in ComponentType]

PROBE_COMPONENT_TYPES = frozenset({"PV", "PI", "PD", "PP"})
NON_ELECTRICAL_COMPONENT_TYPES = frozenset({"TEXT"} | PROBE_COMPONENT_TYPES)

# Default pin layout per component type, relative to the symbol origin.
# Format: list of (pin_id, x, y); pin name equals pin id.
DEFAULT_PINS = {
    "R": [("1", -20, 0), ("2", 20, 0)],
    "C": [("1", -20, 0), ("2", 20, 0)],
    "L": [("1", -20, 0), ("2", 20, 0)],
    "V": [("+", 0, -20), ("-", 0, 20)],
    "I": [("+", 0, -20), ("-", 0, 20)],
    "SW": [("C", -20, 0), ("A", 20, -10), ("B", 20, 10)],
    "VM": [("1", -20, 0), ("2", 20, 0)],
    "AM": [("1", -20, 0), ("2", 20, 0)],
    "PV": [("P", 0, 0)],
    "PI": [("P", 0, 0)],
    "PD": [("P+", 0, 0), ("P-", 20, 0)],
    "PP": [("P", 0, 0)],
    "GND": [("0", 0, 0)],
    "NET": [("1", 0, 0)],
    "TEXT": [("A", 0, 0)],
}

# Fixed palette a named node may use to tint its net
NET_COLOR_PALETTE = (
    "#1d1d1f",
    "#808080",
    "#4d8bff",
    "#0043ce",
    "#104b22",
    "#24a148",
    "#007d79",
    "#139c9c",
    "#f1c21b",
    "#ff832b",
    "#8f4b00",
    "#da1e28",
    "#8a151b",
    "#ff7eb6",
    "#8a3ffc",
    "#5722a1",
)
_NET_COLOR_SET = frozenset(NET_COLOR_PALETTE)
_NET_COLOR_RE = re.compile(r"^#[0-9a-f]{6}$")


def normalize_component_type(value) -> str:
    """Uppercase and trim a component type tag."""
    return str(value if value is not None else "").strip().upper()


def is_electrical_component_type(component_type) -> bool:
    """Text annotations and probes do not take part in connectivity."""
    return normalize_component_type(component_type) not in NON_ELECTRICAL_COMPONENT_TYPES


def is_probe_component_type(component_type) -> bool:
    return normalize_component_type(component_type) in PROBE_COMPONENT_TYPES


def normalize_net_color(value) -> Optional[str]:
    """
    Validate a named-node color.

    Returns:
        The lowercase hex color if it is well formed and in the palette,
        otherwise None. Invalid colors are ignored rather than reported.
    """
    if not isinstance(value, str):
        return None
    trimmed = value.strip().lower()
    if not _NET_COLOR_RE.match(trimmed):
        return None
    return trimmed if trimmed in _NET_COLOR_SET else None


def get_net_color_palette() -> list[str]:
    return list(NET_COLOR_PALETTE)


@dataclass
class PinData:
    """A connection point of a component, in schematic coordinates."""

    pin_id: str
    name: str = ""
    x: float = 0.0
    y: float = 0.0

    def __post_init__(self):
        if not self.name:
            self.name = self.pin_id

    def to_dict(self) -> dict:
        return {"id": self.pin_id, "name": self.name, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "PinData":
        pin_id = str(data.get("id", ""))
        return cls(
            pin_id=pin_id,
            name=str(data.get("name") or pin_id),
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
        )


@dataclass
class ComponentData:
    """
    Pure Python data class representing a schematic component.

    The compiler treats instances as read-only; only the editing layer
    mutates them.
    """

    component_id: str
    component_type: str
    value: str = ""
    pins: list[PinData] = field(default_factory=list)

    # Display name; None means "fall back to component_id"
    name: Optional[str] = None

    # Only meaningful for NET components
    net_color: Optional[str] = None

    @property
    def kind(self) -> Optional[ComponentType]:
        """The ComponentType member for this component, or None if unknown."""
        return ComponentType.parse(self.component_type)

    @property
    def type_key(self) -> str:
        return normalize_component_type(self.component_type)

    @property
    def label(self) -> str:
        """Trimmed named-node label: the name, or the id when no name was given."""
        raw = self.name if self.name is not None else self.component_id
        return str(raw if raw is not None else "").strip()

    def is_electrical(self) -> bool:
        return is_electrical_component_type(self.component_type)

    def get_pin(self, pin_id: str) -> Optional[PinData]:
        for pin in self.pins:
            if pin.pin_id == pin_id:
                return pin
        return None

    def to_dict(self) -> dict:
        data = {
            "id": self.component_id,
            "type": self.component_type,
            "value": self.value,
            "pins": [pin.to_dict() for pin in self.pins],
        }
        if self.name is not None:
            data["name"] = self.name
        if self.net_color:
            data["netColor"] = self.net_color
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ComponentData":
        """
        Deserialize a component from a plain mapping.

        Accepts both 'netColor' and 'net_color' spellings.
        """
        return cls(
            component_id=str(data.get("id", "")),
            component_type=str(data.get("type", "")),
            value=str(data.get("value") or ""),
            pins=[PinData.from_dict(pin) for pin in data.get("pins") or []],
            name=str(data["name"]) if data.get("name") is not None else None,
            net_color=data.get("netColor", data.get("net_color")),
        )

    def __repr__(self) -> str:
        return (
            f"ComponentData(id={self.component_id!r}, type={self.component_type!r}, "
            f"value={self.value!r}, pins={len(self.pins)})"
        )


def make_default_pins(component_type: str, origin: tuple[float, float] = (0.0, 0.0)) -> list[PinData]:
    """Build the default pin layout for a component type placed at origin."""
    layout = DEFAULT_PINS.get(normalize_component_type(component_type), [("1", -20, 0), ("2", 20, 0)])
    ox, oy = origin
    return [PinData(pin_id=pin_id, name=pin_id, x=ox + dx, y=oy + dy) for pin_id, dx, dy in layout]
