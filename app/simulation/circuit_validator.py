"""
simulation/circuit_validator.py

Electrical rule check run before simulation, with no UI dependencies.
"""

from dataclasses import dataclass
from typing import Optional

from models.component import ComponentType

from .connectivity import build_nets
from .net_namer import is_ground_pin


@dataclass(frozen=True)
class ErcIssue:
    """One rule-check finding."""

    code: str
    message: str
    component_id: Optional[str] = None
    pin_id: Optional[str] = None

    def __str__(self) -> str:
        if self.component_id and self.pin_id:
            return f"{self.message} ({self.component_id}:{self.pin_id})"
        return self.message


def validate_circuit(model, nets=None):
    """
    Validate a schematic before simulation.

    Args:
        model: SchematicModel to check.
        nets: Nets of the model; built on demand when omitted.

    Returns:
        (is_valid, errors, warnings) where:
            is_valid: bool - False if any errors found
            errors: list[ErcIssue] - problems that block simulation
            warnings: list[ErcIssue] - non-blocking issues
    """
    errors = []
    warnings = []
    if nets is None:
        nets = build_nets(model)
    component_map = model.component_map()

    # 1. Schematic must have something beyond ground and named nodes
    simulated = [
        c
        for c in model.components
        if c.is_electrical() and c.kind not in (ComponentType.GROUND, ComponentType.NET)
    ]
    if not simulated:
        errors.append(
            ErcIssue(
                code="erc:empty-circuit",
                message="Circuit has no components. Add at least one component to simulate.",
            )
        )

    # 2. Must have a ground reference
    has_ground = any(
        is_ground_pin(component_map.get(pin.component_id), pin) for net in nets for pin in net.pins
    )
    if not has_ground:
        errors.append(ErcIssue(code="erc:missing-ground", message="Missing ground reference."))

    # 3. A net holding a single non-ground pin is a dangling pin
    for net in nets:
        if len(net.pins) != 1:
            continue
        pin = net.pins[0]
        if is_ground_pin(component_map.get(pin.component_id), pin):
            continue
        warnings.append(
            ErcIssue(
                code="erc:unconnected-pin",
                message="Unconnected pin.",
                component_id=pin.component_id,
                pin_id=pin.pin_id,
            )
        )

    is_valid = len(errors) == 0
    return is_valid, errors, warnings
