"""
Tests for simulation/circuit_validator.py - pre-simulation validation.
"""

from simulation.circuit_validator import ErcIssue, validate_circuit
from tests.conftest import build_model, make_component, make_wire


class TestValidCircuit:
    def test_voltage_divider_valid(self, voltage_divider):
        is_valid, errors, warnings = validate_circuit(voltage_divider)
        assert is_valid
        assert errors == []
        assert warnings == []

    def test_labeled_divider_valid(self, labeled_divider):
        is_valid, errors, warnings = validate_circuit(labeled_divider)
        assert is_valid
        assert warnings == []


class TestNoComponents:
    def test_only_ground(self):
        model = build_model([make_component("GND", "GND1")])
        is_valid, errors, warnings = validate_circuit(model)
        assert not is_valid
        assert [e.code for e in errors] == ["erc:empty-circuit"]

    def test_empty_circuit(self):
        is_valid, errors, warnings = validate_circuit(build_model([]))
        assert not is_valid
        assert {e.code for e in errors} == {"erc:empty-circuit", "erc:missing-ground"}

    def test_text_and_probes_do_not_count(self):
        model = build_model([make_component("TEXT", "T1", "note"), make_component("PV", "P1"), make_component("GND", "G1")])
        is_valid, errors, _ = validate_circuit(model)
        assert not is_valid
        assert any("no components" in str(e).lower() for e in errors)


class TestNoGround:
    def test_missing_ground(self):
        model = build_model(
            [make_component("R", "R1", "1k", (20, 0)), make_component("V", "V1", "5", (0, 20))],
        )
        is_valid, errors, warnings = validate_circuit(model)
        assert not is_valid
        assert [str(e) for e in errors] == ["Missing ground reference."]

    def test_pin_named_gnd_counts_as_ground(self):
        model = build_model([make_component("R", "R1", "1k", pins=[("1", 0, 0), ("gnd", 20, 0)])])
        is_valid, errors, _ = validate_circuit(model)
        assert is_valid


class TestUnconnectedPins:
    def test_dangling_pin_warns(self):
        model = build_model(
            [
                make_component("R", "R1", "1k", pins=[("1", 0, 0), ("2", 20, 0)]),
                make_component("GND", "G1", pins=[("0", 0, 0)]),
            ]
        )
        is_valid, errors, warnings = validate_circuit(model)
        assert is_valid
        assert warnings == [ErcIssue("erc:unconnected-pin", "Unconnected pin.", "R1", "2")]
        assert str(warnings[0]) == "Unconnected pin. (R1:2)"

    def test_lone_ground_is_not_dangling(self):
        model = build_model(
            [
                make_component("R", "R1", "1k", pins=[("1", 0, 0), ("2", 20, 0)]),
                make_component("GND", "G1", pins=[("0", 100, 100)]),
            ],
            [make_wire("W1", (0, 0), (20, 0))],
        )
        is_valid, errors, warnings = validate_circuit(model)
        assert is_valid
        assert warnings == []

    def test_prebuilt_nets_reused(self, voltage_divider):
        is_valid, _, _ = validate_circuit(voltage_divider, nets=[])
        assert not is_valid
