"""
simulation/compiler.py

Compiles a schematic model into SPICE netlist text plus diagnostics.

Pipeline: build nets -> name nets -> generate component lines. The
compile is pure: nothing is cached between calls, so the same schematic
always yields byte-identical output.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .connectivity import build_nets
from .net_namer import GROUND_NET_NAME, resolve_net_names
from .netlist_generator import ComponentLine, LineMapEntry, NetlistGenerator, build_pin_net_map
from .switch_value import parse_spdt_switch_value

logger = logging.getLogger(__name__)

MISSING_GROUND_WARNING = "No ground reference found; add a GND symbol."


@dataclass
class CompileResult:
    """Netlist text and the metadata needed to trace it back to the schematic."""

    netlist_text: str = ""
    line_map: list[LineMapEntry] = field(default_factory=list)
    net_names: dict[str, str] = field(default_factory=dict)
    pin_net_map: dict[tuple[str, str], str] = field(default_factory=dict)
    component_lines: dict[str, ComponentLine] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    compile_errors: list[str] = field(default_factory=list)
    named_node_signals: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """False while any compile error is present; simulation must not run."""
        return not self.compile_errors

    def net_for_pin(self, component_id: str, pin_id: str) -> Optional[str]:
        return self.pin_net_map.get((component_id, pin_id))


class NetlistCompiler:
    """
    Compiles schematics with explicitly supplied collaborators.

    Args:
        net_builder: Callable returning the nets of a model.
        switch_parser: Callable parsing an SPDT switch value.

    Raises:
        TypeError: If a collaborator is not callable.
    """

    def __init__(self, net_builder=build_nets, switch_parser=parse_spdt_switch_value):
        for name, collaborator in (("net_builder", net_builder), ("switch_parser", switch_parser)):
            if not callable(collaborator):
                raise TypeError(f"NetlistCompiler requires a callable {name}, got {collaborator!r}")
        self.net_builder = net_builder
        self.switch_parser = switch_parser

    def compile(self, model, title: Optional[str] = None) -> CompileResult:
        """
        Compile a schematic.

        Args:
            model: SchematicModel to compile. It is not modified.
            title: Text for the header comment line (default "schematic").

        Returns:
            CompileResult. User-data problems are reported in
            compile_errors and warnings, never raised.
        """
        nets = self.net_builder(model)
        naming = resolve_net_names(model, nets)
        pin_net_map = build_pin_net_map(nets, naming.net_names)

        generator = NetlistGenerator(model.components, pin_net_map, switch_parser=self.switch_parser)
        netlist_text = generator.generate(title)

        result = CompileResult(
            netlist_text=netlist_text,
            line_map=generator.line_map,
            net_names=dict(naming.net_names),
            pin_net_map=pin_net_map,
            component_lines=generator.component_lines,
            compile_errors=naming.compile_errors + generator.compile_errors,
            named_node_signals=list(naming.named_node_signals),
            warnings=list(naming.warnings),
        )
        if GROUND_NET_NAME not in result.net_names.values():
            result.warnings.append(MISSING_GROUND_WARNING)

        logger.debug(
            "Compiled %d nets into %d lines (%d errors, %d warnings)",
            len(nets),
            len(generator.lines),
            len(result.compile_errors),
            len(result.warnings),
        )
        return result


def compile_netlist(model, title: Optional[str] = None) -> CompileResult:
    """Compile a schematic with the default collaborators."""
    return NetlistCompiler().compile(model, title=title)


def insert_directives(netlist_text: str, directive_lines: list[str]) -> str:
    """
    Insert analysis directives ahead of the closing .end line.

    If the netlist has no .end line, the directives and a new .end are
    appended.
    """
    lines = netlist_text.split("\n") if netlist_text else []
    end_index = None
    for index in range(len(lines) - 1, -1, -1):
        if lines[index].strip().lower() == ".end":
            end_index = index
            break
    if end_index is None:
        return "\n".join(lines + list(directive_lines) + [".end"])
    return "\n".join(lines[:end_index] + list(directive_lines) + lines[end_index:])
