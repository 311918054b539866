"""
Shared test fixtures for the schematic netlist compiler test suite.

All fixtures build pure-Python model objects.
"""

import sys
from pathlib import Path

# Ensure app/ is on sys.path so bare imports (models, simulation, controllers)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

import pytest
from models.component import ComponentData, PinData, make_default_pins
from models.schematic import SchematicModel
from models.wire import WireData


def make_component(component_type, component_id, value="", origin=(0.0, 0.0), name=None, net_color=None, pins=None):
    """Helper to create a ComponentData with minimal boilerplate.

    pins may be a list of (pin_id, x, y) tuples in absolute coordinates;
    by default the type's standard layout is placed at origin.
    """
    if pins is None:
        pin_data = make_default_pins(component_type, origin)
    else:
        pin_data = [PinData(pin_id=pin_id, x=x, y=y) for pin_id, x, y in pins]
    return ComponentData(
        component_id=component_id,
        component_type=component_type,
        value=value,
        pins=pin_data,
        name=name,
        net_color=net_color,
    )


def make_wire(wire_id, *points):
    """Helper to create a WireData from (x, y) points."""
    return WireData(wire_id=wire_id, points=list(points))


def build_model(components, wires=()):
    """Helper to build a SchematicModel through the normalizing add_* calls."""
    model = SchematicModel()
    for component in components:
        model.add_component(component)
    for wire in wires:
        model.add_wire(wire)
    return model


@pytest.fixture
def voltage_divider():
    """
    V1 (5) -- R1 (1k) -- R2 (2k) -- GND

    V1 at the origin: + at (0, -20), - at (0, 20)
    R1 spans (20, -20)-(60, -20), R2 spans (80, -20)-(120, -20)
    GND pin at (0, 60)

    Expected nets: top-left "N1" (V1+, R1.1), middle "N2" (R1.2, R2.1),
    ground "0" (R2.2, GND, V1-).
    """
    components = [
        make_component("V", "V1", "5", (0, 0)),
        make_component("R", "R1", "1k", (40, -20)),
        make_component("R", "R2", "2k", (100, -20)),
        make_component("GND", "GND1", "", (0, 60)),
    ]
    wires = [
        make_wire("W1", (0, -20), (20, -20)),
        make_wire("W2", (60, -20), (80, -20)),
        make_wire("W3", (120, -20), (120, 60), (0, 60)),
        make_wire("W4", (0, 20), (0, 60)),
    ]
    return build_model(components, wires)


@pytest.fixture
def labeled_divider():
    """
    V1 (10) -- [in] -- R1 (10k) -- [out] -- R2 (10k) -- GND

    Same layout as voltage_divider, with NET labels "in" on the
    V1/R1 junction and "out" on the R1/R2 junction.
    """
    components = [
        make_component("V", "V1", "10", (0, 0)),
        make_component("R", "R1", "10k", (40, -20)),
        make_component("R", "R2", "10k", (100, -20)),
        make_component("GND", "GND1", "", (0, 60)),
        make_component("NET", "NET1", "", (20, -20), name="in"),
        make_component("NET", "NET2", "", (70, -20), name="out"),
    ]
    wires = [
        make_wire("W1", (0, -20), (20, -20)),
        make_wire("W2", (60, -20), (70, -20), (80, -20)),
        make_wire("W3", (120, -20), (120, 60), (0, 60)),
        make_wire("W4", (0, 20), (0, 60)),
    ]
    return build_model(components, wires)


@pytest.fixture
def voltage_divider_data(voltage_divider):
    """Plain {components, wires} mapping of the voltage divider."""
    return voltage_divider.to_dict()
