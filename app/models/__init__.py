"""
Pure Python data models for the schematic netlist compiler.

This package contains UI-free data classes that represent schematic
elements. All models use only Python standard library types.
"""

from .component import (
    COMPONENT_TYPES,
    DEFAULT_PINS,
    NET_COLOR_PALETTE,
    NON_ELECTRICAL_COMPONENT_TYPES,
    PROBE_COMPONENT_TYPES,
    ComponentData,
    ComponentType,
    PinData,
    get_net_color_palette,
    is_electrical_component_type,
    is_probe_component_type,
    make_default_pins,
    normalize_net_color,
)
from .coordinates import coord_key, normalize_point, round_coord
from .net import NetData, PinRef
from .schematic import SchematicModel
from .wire import WireData

__all__ = [
    "SchematicModel",
    "ComponentData",
    "ComponentType",
    "PinData",
    "COMPONENT_TYPES",
    "DEFAULT_PINS",
    "NET_COLOR_PALETTE",
    "NON_ELECTRICAL_COMPONENT_TYPES",
    "PROBE_COMPONENT_TYPES",
    "is_electrical_component_type",
    "is_probe_component_type",
    "make_default_pins",
    "normalize_net_color",
    "get_net_color_palette",
    "WireData",
    "NetData",
    "PinRef",
    "round_coord",
    "normalize_point",
    "coord_key",
]
