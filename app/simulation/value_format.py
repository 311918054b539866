"""
simulation/value_format.py

Parses and formats component values with SI prefixes for display.

Display formatting only: netlist lines use normalize_spice_value() from
netlist_generator and never go through this module.
"""
import re
from typing import Optional

from models.component import ComponentType

from .switch_value import parse_spdt_switch_value

# Unit shown after the value of each component type
COMPONENT_VALUE_UNITS = {
    "R": "Ω",
    "C": "F",
    "L": "H",
    "V": "V",
    "I": "A",
    "VM": "Ω",
    "AM": "Ω",
}

# Dictionary of SI prefixes and their multipliers
# Includes 'u' and 'K' as typed variants of 'µ' and 'k'
SI_PREFIX_MULTIPLIERS = {
    'T': 1e12,   # Tera
    'G': 1e9,    # Giga
    'M': 1e6,    # Mega
    'k': 1e3,    # Kilo
    'K': 1e3,    # Kilo
    'm': 1e-3,   # Milli
    'u': 1e-6,   # Micro
    'µ': 1e-6,   # Micro
    'n': 1e-9,   # Nano
    'p': 1e-12,  # Pico
}

# For formatting, the first prefix whose threshold fits wins
FORMATTING_PREFIXES = [
    (12, 'T'), (9, 'G'), (6, 'M'), (3, 'k'), (0, ''),
    (-3, 'm'), (-6, 'µ'), (-9, 'n'), (-12, 'p'),
]

_METRIC_RE = re.compile(r'^([-+]?\d*\.?\d+(?:[eE][-+]?\d+)?)(?:\s*([TGMkKmunpµ]))?$')
_WHITESPACE_RE = re.compile(r'\s+')


def get_component_value_unit(component_type) -> str:
    return COMPONENT_VALUE_UNITS.get(str(component_type or "").strip().upper(), "")


def strip_unit_suffix(value: str, unit: str) -> str:
    """Remove a trailing unit (case-insensitive) and surrounding whitespace."""
    if not unit:
        return value
    return re.sub(re.escape(unit) + r'$', '', value, flags=re.IGNORECASE).strip()


def _to_float(text: str) -> Optional[float]:
    try:
        number = float(text)
    except ValueError:
        return None
    if number != number or number in (float('inf'), float('-inf')):
        return None
    return number


def parse_metric_value(raw, unit: str = "") -> Optional[float]:
    """
    Parses a string with an optional SI prefix and unit into a float.
    Examples: "10k" -> 10000.0, "4.7 kΩ" -> 4700.0, "25m" -> 0.025

    Returns None when the text is not a number.
    """
    if not raw:
        return None
    trimmed = strip_unit_suffix(str(raw).strip(), unit)
    if not trimmed:
        return None

    match = _METRIC_RE.match(trimmed)
    if match:
        numeric = _to_float(match.group(1))
        if numeric is not None:
            return numeric * SI_PREFIX_MULTIPLIERS.get(match.group(2) or "", 1)
    return _to_float(trimmed)


def _format_number(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return repr(value)


def format_metric_value(value: float) -> Optional[tuple[str, str]]:
    """
    Scales a float to the most appropriate SI prefix.
    Examples: 0.015 -> ("15", "m"), 4700 -> ("4.7", "k")

    Returns (number, prefix), or None for a non-finite value.
    """
    if value != value or value in (float('inf'), float('-inf')):
        return None
    if value == 0:
        return ("0", "")

    abs_value = abs(value)
    exponent, prefix = FORMATTING_PREFIXES[-1]
    for candidate_exponent, candidate_prefix in FORMATTING_PREFIXES:
        if abs_value >= 10.0 ** candidate_exponent:
            exponent, prefix = candidate_exponent, candidate_prefix
            break
    return (_format_number(value / 10.0 ** exponent), prefix)


def format_with_unit(display: str, unit: str, prefix: str) -> str:
    unit_text = f"{prefix}{unit}" if prefix else unit
    if not unit_text:
        return display
    return f"{display} {unit_text}".strip()


def format_switch_display_value(value) -> str:
    """Switch label: active throw plus Ron/Roff when their show flags are on."""
    parsed = parse_spdt_switch_value(value)
    parts = [parsed.active_throw]
    if parsed.show_ron:
        parts.append(f"Ron={parsed.ron.strip() or '0'}")
    if parsed.show_roff:
        roff = "open" if parsed.roff is None else (parsed.roff.strip() or "open")
        parts.append(f"Roff={roff}")
    return " ".join(parts)


def format_component_display_value(component) -> str:
    """
    Format the value shown next to a component symbol.

    Numbers are rescaled to the best SI prefix with the type's unit;
    anything unparseable is shown with whitespace collapsed.
    """
    trimmed = (component.value or "").strip()
    if not trimmed:
        return ""
    collapsed = _WHITESPACE_RE.sub(" ", trimmed)

    if component.kind is ComponentType.SWITCH:
        try:
            return format_switch_display_value(component.value)
        except ValueError:
            return collapsed

    unit = get_component_value_unit(component.component_type)
    numeric = parse_metric_value(trimmed, unit)
    if numeric is not None:
        formatted = format_metric_value(numeric)
        if formatted:
            number, prefix = formatted
            return format_with_unit(number, unit, prefix)

    if not unit:
        return collapsed
    without_unit = strip_unit_suffix(collapsed, unit)
    if not without_unit:
        return unit
    return f"{without_unit} {unit}"
