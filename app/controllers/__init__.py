"""
Controllers for the schematic netlist compiler.

This package contains UI-free controller classes that orchestrate
operations between models and the compiler.
"""

from .file_controller import FileController, validate_schematic_data
from .simulation_controller import SimulationController, SimulationRequest, ValidationResult

__all__ = [
    "FileController",
    "validate_schematic_data",
    "SimulationController",
    "SimulationRequest",
    "ValidationResult",
]
