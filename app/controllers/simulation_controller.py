"""
SimulationController - Prepares simulator input from a schematic.

This module contains no UI dependencies. It coordinates analysis
configuration, electrical rule checks, netlist compilation and directive
generation. Running the simulation engine is left to the caller.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from models.schematic import SchematicModel
from simulation.analysis_directives import ANALYSIS_KINDS, AnalysisConfig, build_analysis_directives
from simulation.circuit_validator import validate_circuit
from simulation.compiler import CompileResult, NetlistCompiler, insert_directives

logger = logging.getLogger(__name__)


@dataclass
class SimulationRequest:
    """Simulator input, or the reasons it could not be produced."""

    success: bool
    analysis_kind: str = "op"
    netlist: str = ""
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    directives: list[str] = field(default_factory=list)
    compile_result: Optional[CompileResult] = None

    @property
    def error(self) -> str:
        return "; ".join(self.errors)


@dataclass
class ValidationResult:
    success: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class SimulationController:
    """
    Controller for the simulation preparation pipeline.

    Coordinates: compile netlist -> build directives -> assemble request
    """

    def __init__(self, model: Optional[SchematicModel] = None, compiler: Optional[NetlistCompiler] = None):
        self.model = model or SchematicModel()
        self.compiler = compiler or NetlistCompiler()
        self.analysis_kind = "op"
        self.analysis_config = AnalysisConfig()

    def set_analysis(self, kind: str, params=None) -> None:
        """
        Set the analysis kind and its configuration.

        Args:
            kind: One of "op", "dc", "tran", "ac".
            params: AnalysisConfig or a plain mapping for AnalysisConfig.from_dict.

        Raises:
            ValueError: If kind is not a known analysis.
        """
        kind = str(kind or "").strip().lower()
        if kind not in ANALYSIS_KINDS:
            raise ValueError(f"Unknown analysis kind '{kind}'. Expected one of: {', '.join(ANALYSIS_KINDS)}")
        self.analysis_kind = kind
        if isinstance(params, AnalysisConfig):
            self.analysis_config = params
        else:
            self.analysis_config = AnalysisConfig.from_dict(params)

    def compile(self, title: Optional[str] = None) -> CompileResult:
        """Compile the current schematic."""
        return self.compiler.compile(self.model, title=title)

    def validate_circuit(self) -> ValidationResult:
        """
        Run the electrical rule check.

        Returns a ValidationResult with success=False and errors if invalid.
        """
        is_valid, errors, warnings = validate_circuit(self.model)
        return ValidationResult(
            success=is_valid,
            errors=[str(e) for e in errors],
            warnings=[str(w) for w in warnings],
        )

    def prepare_simulation(self, title: Optional[str] = None) -> SimulationRequest:
        """
        Build the complete simulator input for the configured analysis.

        The compiled netlist gets the analysis directives inserted before
        .end. Named-node signals are saved when no explicit signals are
        configured. Any compile or directive error refuses the request.
        """
        result = self.compile(title)
        directives = build_analysis_directives(
            self.analysis_kind,
            self.analysis_config,
            fallback_signals=result.named_node_signals,
        )
        errors = list(result.compile_errors) + list(directives.errors)
        if errors:
            logger.debug("Simulation request refused: %s", "; ".join(errors))
            return SimulationRequest(
                success=False,
                analysis_kind=self.analysis_kind,
                errors=errors,
                warnings=list(result.warnings),
                compile_result=result,
            )

        return SimulationRequest(
            success=True,
            analysis_kind=self.analysis_kind,
            netlist=insert_directives(result.netlist_text, directives.lines),
            warnings=list(result.warnings),
            directives=list(directives.lines),
            compile_result=result,
        )
