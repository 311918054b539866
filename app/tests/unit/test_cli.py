"""Tests for the command-line interface (app/cli.py)."""

import json

import pytest
from cli import build_parser, load_schematic, main, try_load_schematic
from models.schematic import SchematicModel


@pytest.fixture
def divider_file(tmp_path, voltage_divider_data):
    """Write the voltage divider schematic to disk."""
    filepath = tmp_path / "divider.json"
    filepath.write_text(json.dumps(voltage_divider_data))
    return str(filepath)


@pytest.fixture
def no_ground_file(tmp_path):
    data = {
        "components": [
            {"id": "R1", "type": "R", "value": "1k", "pins": [{"id": "1", "x": 0, "y": 0}, {"id": "2", "x": 20, "y": 0}]}
        ],
        "wires": [],
    }
    filepath = tmp_path / "floating.json"
    filepath.write_text(json.dumps(data))
    return str(filepath)


@pytest.fixture
def bad_switch_file(tmp_path):
    data = {
        "components": [
            {
                "id": "SW1",
                "type": "SW",
                "value": "A bogus",
                "pins": [
                    {"id": "C", "x": 0, "y": 0},
                    {"id": "A", "x": 20, "y": -10},
                    {"id": "B", "x": 20, "y": 10},
                ],
            },
            {"id": "G1", "type": "GND", "pins": [{"id": "0", "x": 0, "y": 0}]},
        ],
        "wires": [],
    }
    filepath = tmp_path / "bad_switch.json"
    filepath.write_text(json.dumps(data))
    return str(filepath)


class TestLoadSchematic:
    def test_load_valid(self, divider_file):
        model = load_schematic(divider_file)
        assert isinstance(model, SchematicModel)
        assert len(model.components) == 4
        assert len(model.wires) == 4

    def test_load_nonexistent(self):
        with pytest.raises(SystemExit):
            load_schematic("/nonexistent/file.json")

    def test_try_load_invalid_json(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("not json")
        model, error = try_load_schematic(str(bad))
        assert model is None
        assert "invalid JSON" in error

    def test_try_load_invalid_structure(self, tmp_path):
        bad = tmp_path / "bad_struct.json"
        bad.write_text('{"foo": "bar"}')
        model, error = try_load_schematic(str(bad))
        assert model is None
        assert "invalid schematic file" in error

    def test_malformed_wire_point_exits_cleanly(self, tmp_path, capsys):
        bad = tmp_path / "bad_point.json"
        bad.write_text(json.dumps({"components": [], "wires": [{"id": "W1", "points": [5]}]}))
        with pytest.raises(SystemExit) as exc_info:
            main(["compile", str(bad)])
        assert exc_info.value.code == 1
        assert "invalid schematic file" in capsys.readouterr().err


class TestParser:
    def test_compile_defaults(self):
        args = build_parser().parse_args(["compile", "x.json"])
        assert args.analysis == "op"
        assert not args.json
        assert not args.verbose

    def test_rejects_unknown_analysis(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["compile", "x.json", "--analysis", "noise"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCompileCommand:
    def test_prints_netlist(self, divider_file, capsys):
        assert main(["compile", divider_file]) == 0
        out = capsys.readouterr().out
        assert out.splitlines() == ["* divider", "V1 N1 0 5", "R1 N1 N2 1k", "R2 N2 0 2k", ".op", ".end"]

    def test_title_and_output(self, divider_file, tmp_path):
        out_path = tmp_path / "out.cir"
        assert main(["compile", divider_file, "--title", "my circuit", "-o", str(out_path)]) == 0
        assert out_path.read_text().startswith("* my circuit\n")

    def test_preset(self, divider_file, tmp_path, capsys):
        preset_file = tmp_path / "presets.json"
        code = main(
            ["compile", divider_file, "--analysis", "tran", "--preset", "Quick Transient", "--preset-file", str(preset_file)]
        )
        assert code == 0
        assert ".tran 10u 10m 0" in capsys.readouterr().out.splitlines()

    def test_unknown_preset(self, divider_file, tmp_path, capsys):
        preset_file = tmp_path / "presets.json"
        code = main(["compile", divider_file, "--preset", "Nope", "--preset-file", str(preset_file)])
        assert code == 1
        assert "no op preset named 'Nope'" in capsys.readouterr().err

    def test_invalid_directive_config(self, divider_file, capsys):
        assert main(["compile", divider_file, "--analysis", "dc"]) == 1
        assert "DC sweep requires a source" in capsys.readouterr().err

    def test_json_output(self, divider_file, capsys):
        assert main(["compile", divider_file, "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["success"]
        assert data["analysis"] == "op"
        assert data["lineMap"][1]["netlistId"] == "V1"
        assert len(data["lineMap"]) == len(data["netlist"].split("\n")) - 1

    def test_json_output_on_failure(self, bad_switch_file, capsys):
        assert main(["compile", bad_switch_file, "--json"]) == 1
        data = json.loads(capsys.readouterr().out)
        assert not data["success"]
        assert data["netlist"] == ""
        assert data["errors"][0].startswith("Switch 'SW1'")

    def test_warning_on_stderr(self, no_ground_file, capsys):
        assert main(["compile", no_ground_file]) == 0
        assert "No ground reference found" in capsys.readouterr().err


class TestValidateCommand:
    def test_valid(self, divider_file, capsys):
        assert main(["validate", divider_file]) == 0
        assert "Schematic is valid" in capsys.readouterr().out

    def test_missing_ground(self, no_ground_file, capsys):
        assert main(["validate", no_ground_file]) == 1
        err = capsys.readouterr().err
        assert "Missing ground reference." in err
        assert "Unconnected pin. (R1:1)" in err

    def test_compile_errors_reported(self, bad_switch_file, capsys):
        assert main(["validate", bad_switch_file]) == 1
        assert "Unknown switch token 'bogus'" in capsys.readouterr().err


class TestNetsCommand:
    def test_lists_nets(self, divider_file, capsys):
        assert main(["nets", divider_file]) == 0
        out = capsys.readouterr().out.splitlines()
        rows = [line.split()[0] for line in out[2:]]
        assert rows == ["N1", "N2", "0"]
        assert "V1.+" in out[2]


class TestPresetsCommand:
    def test_lists_builtins(self, tmp_path, capsys):
        assert main(["presets", "--analysis", "ac", "--preset-file", str(tmp_path / "p.json")]) == 0
        out = capsys.readouterr().out
        assert "Audio AC Sweep" in out
        assert "Quick Transient" not in out

    def test_verbose_flag(self, tmp_path, capsys):
        assert main(["--verbose", "presets", "--preset-file", str(tmp_path / "p.json")]) == 0
