"""Tests for simulation/compiler.py - the compile orchestrator."""

import pytest
from simulation.compiler import MISSING_GROUND_WARNING, NetlistCompiler, compile_netlist, insert_directives
from simulation.connectivity import build_nets
from tests.conftest import build_model, make_component, make_wire


class TestCompile:
    def test_voltage_divider(self, voltage_divider):
        result = compile_netlist(voltage_divider, title="divider")
        assert result.netlist_text == "\n".join(
            ["* divider", "V1 N1 0 5", "R1 N1 N2 1k", "R2 N2 0 2k", ".end"]
        )
        assert result.success
        assert result.warnings == []
        assert result.net_for_pin("R2", "2") == "0"
        assert result.net_for_pin("R9", "1") is None

    def test_missing_ground_warning(self):
        model = build_model([make_component("R", "R1", "1k")])
        result = compile_netlist(model)
        assert result.warnings == [MISSING_GROUND_WARNING]
        assert result.success

    def test_label_collision_warning_reported(self):
        model = build_model(
            [
                make_component("R", "R1", "1k", pins=[("1", 0, 0), ("2", 20, 0)]),
                make_component("R", "R2", "1k", pins=[("1", 0, 100), ("2", 20, 100)]),
                make_component("NET", "NET1", name="N1", pins=[("1", 20, 100)]),
                make_component("GND", "G1", pins=[("0", 0, 0)]),
            ]
        )
        result = compile_netlist(model)
        assert result.netlist_text.split("\n")[1:3] == ["R1 0 N1 1k", "R2 N2 N1 1k"]
        assert len(result.warnings) == 1
        assert '"N1" matches the default name' in result.warnings[0]
        assert result.success

    def test_errors_from_naming_and_switches_are_merged(self):
        model = build_model(
            [
                make_component("GND", "G1", pins=[("0", -20, 0)]),
                make_component("SW", "SW1", "A nope"),
                make_component("NET", "NET1", name="0", pins=[("1", 20, -10)]),
            ]
        )
        result = compile_netlist(model)
        assert not result.success
        assert result.compile_errors[0] == 'Named node label "0" is reserved; use a different label.'
        assert result.compile_errors[1].startswith("Switch 'SW1' value parse error")

    def test_component_lines_and_line_map(self, voltage_divider):
        result = compile_netlist(voltage_divider)
        assert result.component_lines["R2"].net_a == "N2"
        assert len(result.line_map) == len(result.netlist_text.split("\n"))

    def test_deterministic(self, labeled_divider):
        first = compile_netlist(labeled_divider)
        second = compile_netlist(labeled_divider)
        assert first.netlist_text == second.netlist_text
        assert first.net_names == second.net_names

    def test_model_not_modified(self, voltage_divider):
        before = voltage_divider.to_dict()
        compile_netlist(voltage_divider)
        assert voltage_divider.to_dict() == before

    def test_injected_net_builder(self, voltage_divider):
        calls = []

        def net_builder(model):
            calls.append(model)
            return build_nets(model)

        result = NetlistCompiler(net_builder=net_builder).compile(voltage_divider)
        assert calls == [voltage_divider]
        assert result.success

    def test_non_callable_collaborator(self):
        with pytest.raises(TypeError):
            NetlistCompiler(net_builder=None)
        with pytest.raises(TypeError):
            NetlistCompiler(switch_parser="A")

    def test_empty_schematic(self):
        result = compile_netlist(build_model([], [make_wire("W1", (0, 0), (5, 0))]))
        assert result.netlist_text == "* schematic\n.end"
        assert result.net_names == {}


class TestInsertDirectives:
    def test_before_end(self):
        assert insert_directives("* t\nR1 a 0 1\n.end", [".op"]) == "* t\nR1 a 0 1\n.op\n.end"

    def test_last_end_wins(self):
        text = "* .end\n.END\nR1 a 0 1\n.end"
        assert insert_directives(text, [".save all", ".tran 1u 1m 0"]) == (
            "* .end\n.END\nR1 a 0 1\n.save all\n.tran 1u 1m 0\n.end"
        )

    def test_appends_missing_end(self):
        assert insert_directives("* t", [".op"]) == "* t\n.op\n.end"
