"""
simulation/netlist_generator.py

Handles SPICE netlist line generation from named nets.

Every emitted component line has the form

    <Id> <netA> <netB> <value>

and every leading identifier is unique across the netlist
(case-insensitive). Lines are tracked in a line map so any line can be
traced back to the component and nets it came from.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from models.component import ComponentType

from .switch_value import parse_spdt_switch_value

logger = logging.getLogger(__name__)

# Two-terminal elements: SPICE prefix and value used when none is stored
TWO_TERMINAL_DEFAULTS = {
    ComponentType.RESISTOR: ("R", "1k"),
    ComponentType.CAPACITOR: ("C", "1u"),
    ComponentType.INDUCTOR: ("L", "1m"),
    ComponentType.VOLTAGE_SOURCE: ("V", "1"),
    ComponentType.CURRENT_SOURCE: ("I", "1"),
}

VOLTMETER_FALLBACK = "1M"
AMMETER_FALLBACK = "0"

# Types that never produce a line of their own
NON_EMITTING_TYPES = frozenset(
    {
        ComponentType.GROUND,
        ComponentType.NET,
        ComponentType.TEXT,
        ComponentType.VOLTAGE_PROBE,
        ComponentType.CURRENT_PROBE,
        ComponentType.DIFFERENTIAL_PROBE,
        ComponentType.POWER_PROBE,
    }
)

SWITCH_ROLES = ("C", "A", "B")


@dataclass
class NetlistLine:
    """One component line before identifier uniquing."""

    netlist_id: str
    net_a: str
    net_b: str
    value: str

    @property
    def text(self) -> str:
        return f"{self.netlist_id} {self.net_a} {self.net_b} {self.value}"


@dataclass
class ComponentLine:
    """Primary line emitted for a component, for UI cross-referencing."""

    component_type: str
    netlist_id: str
    net_a: Optional[str]
    net_b: Optional[str]
    value: Optional[str]


@dataclass
class LineMapEntry:
    """Origin of one physical netlist line (1-indexed)."""

    line: int
    kind: str
    component_id: Optional[str] = None
    component_type: Optional[str] = None
    netlist_id: Optional[str] = None
    net_a: Optional[str] = None
    net_b: Optional[str] = None
    nets: list[str] = field(default_factory=list)


def normalize_id(value) -> str:
    return str(value if value is not None else "").strip()


def ensure_prefixed_id(prefix: str, value) -> str:
    """Prepend prefix unless the id already starts with it (case-insensitive)."""
    base = normalize_id(value)
    if not base:
        return prefix
    if base.upper().startswith(prefix.upper()):
        return base
    return f"{prefix}{base}"


def normalize_spice_value(value):
    """
    Rewrite a trailing "M" to "Meg".

    SPICE reads a bare M as milli; an uppercase M typed by the user means
    mega. Every other suffix passes through unchanged.
    """
    if not isinstance(value, str):
        return value
    if value.endswith("M"):
        return value[:-1] + "Meg"
    return value


class NetlistIdAllocator:
    """
    Hands out identifiers that are unique case-insensitively.

    A colliding id gets _2, _3, ... The counter per base id only moves
    forward during one compile pass.
    """

    def __init__(self):
        self._used: set[str] = set()
        self._next_suffix: dict[str, int] = {}

    @staticmethod
    def _key(value: str) -> str:
        return normalize_id(value).upper()

    def allocate(self, candidate) -> str:
        base_id = normalize_id(candidate) or "X"
        base_key = self._key(base_id)
        if base_key not in self._used:
            self._used.add(base_key)
            self._next_suffix.setdefault(base_key, 2)
            return base_id

        suffix = self._next_suffix.get(base_key, 2)
        while True:
            next_id = f"{base_id}_{suffix}"
            suffix += 1
            next_key = self._key(next_id)
            if next_key in self._used:
                continue
            self._used.add(next_key)
            self._next_suffix[base_key] = suffix
            return next_id


def build_pin_net_map(nets, net_names: dict[str, str]) -> dict[tuple[str, str], str]:
    """Map (component_id, pin_id) to the name of the net the pin sits on."""
    pin_net_map = {}
    for net in nets:
        net_name = net_names.get(net.net_id)
        if not net_name:
            continue
        for pin in net.pins:
            pin_net_map[(pin.component_id, pin.pin_id)] = net_name
    return pin_net_map


def _switch_pin_token(pin) -> set[str]:
    return {str(pin.pin_id or "").strip().upper(), str(pin.name or "").strip().upper()}


def resolve_spdt_pins(component) -> Optional[dict]:
    """
    Assign switch pins to the C, A and B roles.

    Pins whose id or name is a role letter take that role; the remaining
    pins fill the empty roles in encounter order.

    Returns:
        {"C": pin, "A": pin, "B": pin}, or None if a role stays empty.
    """
    pins = list(component.pins)
    if len(pins) < len(SWITCH_ROLES):
        return None

    used: list[int] = []
    roles = {}
    for role in SWITCH_ROLES:
        for index, pin in enumerate(pins):
            if index not in used and role in _switch_pin_token(pin):
                used.append(index)
                roles[role] = pin
                break
    for role in SWITCH_ROLES:
        if role in roles:
            continue
        for index, pin in enumerate(pins):
            if index not in used:
                used.append(index)
                roles[role] = pin
                break
    if len(roles) < len(SWITCH_ROLES):
        return None
    return roles


class NetlistGenerator:
    """Generates SPICE component lines for a schematic with named nets"""

    def __init__(self, components, pin_net_map, switch_parser=parse_spdt_switch_value):
        self.components = components
        self.pin_net_map = pin_net_map
        self.switch_parser = switch_parser

        self.lines: list[str] = []
        self.line_map: list[LineMapEntry] = []
        self.component_lines: dict[str, ComponentLine] = {}
        self.compile_errors: list[str] = []
        self._ids = NetlistIdAllocator()

        self._builders = {
            ComponentType.RESISTOR: self._build_two_terminal,
            ComponentType.CAPACITOR: self._build_two_terminal,
            ComponentType.INDUCTOR: self._build_two_terminal,
            ComponentType.VOLTAGE_SOURCE: self._build_two_terminal,
            ComponentType.CURRENT_SOURCE: self._build_two_terminal,
            ComponentType.VOLTMETER: self._build_voltmeter,
            ComponentType.AMMETER: self._build_ammeter,
            ComponentType.SWITCH: self._build_switch,
        }
        missing = set(ComponentType) - set(self._builders) - NON_EMITTING_TYPES
        if missing:
            raise KeyError(f"No netlist line builder for component types: {sorted(m.value for m in missing)}")

    def generate(self, title: Optional[str] = None) -> str:
        """Generate the netlist text: header comment, component lines, .end"""
        self._push(f"* {title or 'schematic'}", LineMapEntry(line=0, kind="directive"))

        for component in self.components:
            kind = component.kind
            if kind is None or kind in NON_EMITTING_TYPES:
                continue
            lines = self._builders[kind](component)
            for index, line in enumerate(lines):
                self._emit(component, line, primary=index == 0)

        self._push(".end", LineMapEntry(line=0, kind="directive"))
        logger.debug("Generated %d netlist lines", len(self.lines))
        return "\n".join(self.lines)

    # --- Line bookkeeping ---

    def _push(self, text: str, entry: LineMapEntry) -> None:
        self.lines.append(text)
        entry.line = len(self.lines)
        self.line_map.append(entry)

    def _emit(self, component, line: NetlistLine, primary: bool) -> None:
        line.netlist_id = self._ids.allocate(line.netlist_id)
        type_key = component.type_key
        self._push(
            line.text,
            LineMapEntry(
                line=0,
                kind="component",
                component_id=component.component_id,
                component_type=type_key,
                netlist_id=line.netlist_id,
                net_a=line.net_a,
                net_b=line.net_b,
                nets=[line.net_a, line.net_b],
            ),
        )
        if primary:
            self.component_lines[component.component_id] = ComponentLine(
                component_type=type_key,
                netlist_id=line.netlist_id,
                net_a=line.net_a,
                net_b=line.net_b,
                value=line.value,
            )

    def _net_for(self, component, pin) -> Optional[str]:
        if pin is None:
            return None
        return self.pin_net_map.get((component.component_id, pin.pin_id))

    # --- Per-type builders ---

    def _terminal_line(self, component, prefix: str, fallback: str) -> list[NetlistLine]:
        if len(component.pins) < 2:
            return []
        first = self._net_for(component, component.pins[0])
        second = self._net_for(component, component.pins[1])
        if not first or not second:
            return []
        stored = (component.value or "").strip()
        value = normalize_spice_value(stored) if stored else fallback
        if not value:
            return []
        base_id = normalize_id(component.component_id)
        netlist_id = ensure_prefixed_id(prefix, base_id or f"{prefix}{first}")
        return [NetlistLine(netlist_id, first, second, value)]

    def _build_two_terminal(self, component) -> list[NetlistLine]:
        prefix, fallback = TWO_TERMINAL_DEFAULTS[component.kind]
        return self._terminal_line(component, prefix, fallback)

    def _build_voltmeter(self, component) -> list[NetlistLine]:
        # Modeled as a sense resistor, only when a value is given
        if not (component.value or "").strip():
            return []
        return self._terminal_line(component, "R", VOLTMETER_FALLBACK)

    def _build_ammeter(self, component) -> list[NetlistLine]:
        if (component.value or "").strip():
            return self._terminal_line(component, "R", AMMETER_FALLBACK)
        # Ideal ammeter: zero-volt source
        return self._terminal_line(component, "V", AMMETER_FALLBACK)

    def _build_switch(self, component) -> list[NetlistLine]:
        roles = resolve_spdt_pins(component)
        if roles is None:
            self.compile_errors.append(f"Switch '{component.component_id}' is missing C/A/B pins.")
            return []
        try:
            parsed = self.switch_parser(component.value)
        except ValueError as e:
            self.compile_errors.append(f"Switch '{component.component_id}' value parse error: {e}")
            return []

        active = "B" if str(parsed.active_throw).upper() == "B" else "A"
        inactive = "B" if active == "A" else "A"
        center_net = self._net_for(component, roles["C"])
        active_net = self._net_for(component, roles[active])
        inactive_net = self._net_for(component, roles[inactive])
        base_id = normalize_id(component.component_id)

        lines = []
        ron = normalize_spice_value(str(parsed.ron if parsed.ron is not None else "0"))
        if center_net and active_net and ron:
            lines.append(NetlistLine(ensure_prefixed_id("R", f"{base_id}{active}"), center_net, active_net, ron))

        # Without roff the inactive throw floats, like a real SPDT switch
        if parsed.roff is not None:
            roff = normalize_spice_value(str(parsed.roff))
            if center_net and inactive_net and roff:
                lines.append(
                    NetlistLine(ensure_prefixed_id("R", f"{base_id}{inactive}"), center_net, inactive_net, roff)
                )
        return lines
