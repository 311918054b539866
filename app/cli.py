"""
Command-line interface for schematic netlist compilation.

Compile schematics, check them for electrical rule violations and inspect
their nets without a graphical editor.

Usage::

    python -m cli compile divider.json
    python -m cli compile divider.json --analysis tran --preset "Quick Transient"
    python -m cli compile divider.json --json --output divider.cir.json
    python -m cli validate divider.json
    python -m cli nets divider.json
    python -m cli presets --analysis ac
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from controllers.file_controller import validate_schematic_data
from controllers.simulation_controller import SimulationController
from models.schematic import SchematicModel
from simulation.analysis_directives import ANALYSIS_KINDS
from simulation.connectivity import build_nets
from simulation.net_colors import resolve_net_colors
from simulation.net_namer import resolve_net_names, sorted_nets
from simulation.preset_manager import PresetManager

logger = logging.getLogger(__name__)


def try_load_schematic(filepath: str) -> tuple[SchematicModel | None, str]:
    """Load and validate a schematic JSON file without exiting.

    Args:
        filepath: Path to the schematic JSON file.

    Returns:
        (model, "") on success, or (None, error_message) on failure.
    """
    path = Path(filepath)
    if not path.exists():
        return None, f"file not found: {filepath}"

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        return None, f"invalid JSON in {filepath}: {e}"

    try:
        validate_schematic_data(data)
    except ValueError as e:
        return None, f"invalid schematic file: {e}"

    return SchematicModel.from_dict(data), ""


def load_schematic(filepath: str) -> SchematicModel:
    """Load and validate a schematic JSON file.

    Raises:
        SystemExit: On file read or validation errors.
    """
    model, error = try_load_schematic(filepath)
    if model is None:
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)
    return model


def _line_map_to_json(line_map) -> list[dict]:
    return [
        {
            "line": entry.line,
            "kind": entry.kind,
            "componentId": entry.component_id,
            "componentType": entry.component_type,
            "netlistId": entry.netlist_id,
            "netA": entry.net_a,
            "netB": entry.net_b,
            "nets": list(entry.nets),
        }
        for entry in line_map
    ]


def _request_to_json(request) -> str:
    """Format a simulation request as JSON."""
    result = request.compile_result
    output = {
        "success": request.success,
        "analysis": request.analysis_kind,
        "netlist": request.netlist,
        "directives": request.directives,
        "errors": request.errors,
        "warnings": request.warnings,
    }
    if result is not None:
        output["netNames"] = result.net_names
        output["lineMap"] = _line_map_to_json(result.line_map)
        output["namedNodeSignals"] = result.named_node_signals
    return json.dumps(output, indent=2)


def cmd_compile(args: argparse.Namespace) -> int:
    """Compile a schematic into a netlist with analysis directives."""
    model = load_schematic(args.schematic)
    logger.debug("Loaded %d components and %d wires from %s", len(model.components), len(model.wires), args.schematic)
    sim = SimulationController(model)

    params = None
    if args.preset:
        preset = PresetManager(args.preset_file).get_config(args.preset, args.analysis)
        if preset is None:
            print(f"Error: no {args.analysis} preset named '{args.preset}'", file=sys.stderr)
            return 1
        params = preset
    sim.set_analysis(args.analysis, params)

    title = args.title if args.title is not None else Path(args.schematic).stem
    request = sim.prepare_simulation(title)

    for warning in request.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    if args.json:
        output_text = _request_to_json(request)
    elif request.success:
        output_text = request.netlist
    else:
        print(f"Compile failed: {args.schematic}", file=sys.stderr)
        for err in request.errors:
            print(f"  - {err}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(output_text + "\n")
        print(f"Netlist written to {args.output}", file=sys.stderr)
    else:
        print(output_text)

    return 0 if request.success else 1


def cmd_validate(args: argparse.Namespace) -> int:
    """Run the electrical rule check and the compiler without emitting output."""
    model = load_schematic(args.schematic)
    sim = SimulationController(model)

    erc = sim.validate_circuit()
    compiled = sim.compile()
    errors = erc.errors + compiled.compile_errors
    warnings = erc.warnings + [w for w in compiled.warnings if w not in erc.warnings]

    if not errors:
        print(f"Schematic is valid: {args.schematic}")
        for warning in warnings:
            print(f"  Warning: {warning}")
        return 0

    print(f"Schematic has errors: {args.schematic}", file=sys.stderr)
    for err in errors:
        print(f"  - {err}", file=sys.stderr)
    for warning in warnings:
        print(f"  Warning: {warning}", file=sys.stderr)
    return 1


def cmd_nets(args: argparse.Namespace) -> int:
    """List nets with their names, member pins and display colors."""
    model = load_schematic(args.schematic)
    nets = build_nets(model)
    naming = resolve_net_names(model, nets)
    colors = resolve_net_colors(model, nets)
    component_map = model.component_map()

    print(f"{'Net':<12} {'Color':<9} {'Pins'}")
    print("-" * 60)
    for net in sorted_nets(nets):
        name = naming.net_names.get(net.net_id, net.net_id)
        color = ""
        for pin in net.pins:
            if pin.component_id in colors.net_colors:
                color = colors.net_colors[pin.component_id]
                break
        members = ", ".join(
            f"{component_map[pin.component_id].label}.{pin.name}"
            if pin.component_id in component_map
            else f"{pin.component_id}.{pin.name}"
            for pin in net.pins
        )
        print(f"{name:<12} {color:<9} {members}")

    for err in naming.compile_errors:
        print(f"Error: {err}", file=sys.stderr)
    return 1 if naming.compile_errors else 0


def cmd_presets(args: argparse.Namespace) -> int:
    """List analysis presets."""
    manager = PresetManager(args.preset_file)
    presets = manager.get_presets(args.analysis)
    if not presets:
        print("No presets found.")
        return 0

    print(f"{'Name':<28} {'Analysis':<9} {'Source'}")
    print("-" * 50)
    for preset in presets:
        source = "built-in" if preset.get("builtin") else "user"
        print(f"{preset['name']:<28} {preset['analysis']:<9} {source}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="schematic-netlist",
        description="Compile schematic JSON files into SPICE netlists from the command line.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # compile
    comp_parser = subparsers.add_parser("compile", help="Compile a schematic into a netlist")
    comp_parser.add_argument("schematic", help="Path to schematic JSON file")
    comp_parser.add_argument("--analysis", choices=ANALYSIS_KINDS, default="op", help="Analysis kind (default: op)")
    comp_parser.add_argument("--preset", help="Use the named analysis preset for the chosen analysis")
    comp_parser.add_argument("--preset-file", help="User preset file (default: ~/.schematic-netlist/analysis_presets.json)")
    comp_parser.add_argument("--title", help="Netlist title (default: schematic file name)")
    comp_parser.add_argument("--json", action="store_true", help="Emit netlist and metadata as JSON")
    comp_parser.add_argument("--output", "-o", help="Write output to file instead of stdout")

    # validate
    val_parser = subparsers.add_parser("validate", help="Check a schematic for errors without emitting a netlist")
    val_parser.add_argument("schematic", help="Path to schematic JSON file")

    # nets
    nets_parser = subparsers.add_parser("nets", help="List the nets of a schematic")
    nets_parser.add_argument("schematic", help="Path to schematic JSON file")

    # presets
    preset_parser = subparsers.add_parser("presets", help="List analysis presets")
    preset_parser.add_argument("--analysis", choices=ANALYSIS_KINDS, help="Only list presets of this kind")
    preset_parser.add_argument("--preset-file", help="User preset file")

    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    handlers = {
        "compile": cmd_compile,
        "validate": cmd_validate,
        "nets": cmd_nets,
        "presets": cmd_presets,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
