"""
simulation/switch_value.py

Parser and formatter for SPDT switch values.

A switch value is a small token language, case-insensitive, with tokens
separated by whitespace, commas or semicolons:

    A | B               active throw (default A)
    ron=<value>         on resistance of the active throw (default 0)
    roff=<value>        resistance of the inactive throw (default: open)
    showron | hideron   display Ron on the symbol
    showroff | hideroff display Roff on the symbol
    showron=<bool>      same, with 1/true/on/yes or 0/false/off/no
    showroff=<bool>

Example: "B ron=10 roff=1Meg showron"
"""

import re
from dataclasses import dataclass
from typing import Optional

_TOKEN_SPLIT_RE = re.compile(r"[\s,;]+")
_ASSIGNMENT_RE = re.compile(r"^(ron|roff|showron|showroff)=(.*)$", re.IGNORECASE)

_TRUE_WORDS = frozenset({"1", "true", "on", "yes"})
_FALSE_WORDS = frozenset({"0", "false", "off", "no"})

ALLOWED_TOKENS_HINT = "A, B, ron=<value>, roff=<value>, showron/showroff, hideron/hideroff"


class SwitchValueError(ValueError):
    """Raised when a switch value contains an invalid token."""

    def __init__(self, message: str, token: Optional[str] = None):
        super().__init__(message)
        self.token = token


@dataclass(frozen=True)
class SpdtSwitchValue:
    """Parsed switch configuration. show_* flags only affect display."""

    active_throw: str = "A"
    ron: str = "0"
    roff: Optional[str] = None
    show_ron: bool = False
    show_roff: bool = False

    @property
    def inactive_throw(self) -> str:
        return "B" if self.active_throw == "A" else "A"

    @property
    def is_open(self) -> bool:
        """True when the inactive throw is left floating."""
        return self.roff is None


def tokenize_switch_value(value) -> list[str]:
    return [token for token in _TOKEN_SPLIT_RE.split(str(value if value is not None else "")) if token]


def _parse_bool(name: str, raw: str) -> bool:
    normalized = raw.strip().lower()
    if not normalized:
        raise SwitchValueError(f"Switch token '{name}=' requires a boolean value.", token=f"{name}=")
    if normalized in _TRUE_WORDS:
        return True
    if normalized in _FALSE_WORDS:
        return False
    raise SwitchValueError(f"Switch token '{name}=' must be true/false.", token=f"{name}={raw}")


def parse_spdt_switch_value(value) -> SpdtSwitchValue:
    """
    Parse a switch value string.

    Args:
        value: Raw component value; None and "" give the defaults.

    Returns:
        SpdtSwitchValue with every field resolved.

    Raises:
        SwitchValueError: On an unknown token or an empty assignment. The
            offending token is kept on the exception.
    """
    state = {"active_throw": "A", "ron": "0", "roff": None, "show_ron": False, "show_roff": False}
    flags = {
        "a": ("active_throw", "A"),
        "b": ("active_throw", "B"),
        "showron": ("show_ron", True),
        "hideron": ("show_ron", False),
        "showroff": ("show_roff", True),
        "hideroff": ("show_roff", False),
    }

    for token in tokenize_switch_value(value):
        lowered = token.lower()
        if lowered in flags:
            name, setting = flags[lowered]
            state[name] = setting
            continue

        match = _ASSIGNMENT_RE.match(token)
        if match is None:
            raise SwitchValueError(
                f"Unknown switch token '{token}'. Allowed tokens: {ALLOWED_TOKENS_HINT}.",
                token=token,
            )
        name = match.group(1).lower()
        raw = match.group(2).strip()
        if name in ("ron", "roff"):
            if not raw:
                raise SwitchValueError(f"Switch token '{name}=' requires a value.", token=token)
            state[name] = raw
        elif name == "showron":
            state["show_ron"] = _parse_bool(name, raw)
        else:
            state["show_roff"] = _parse_bool(name, raw)

    return SpdtSwitchValue(**state)


def format_spdt_switch_value(parsed: SpdtSwitchValue) -> str:
    """
    Render a parsed switch back to its canonical token string.

    parse_spdt_switch_value(format_spdt_switch_value(x)) == x.
    """
    tokens = [parsed.active_throw]
    if parsed.ron != "0":
        tokens.append(f"ron={parsed.ron}")
    if parsed.roff is not None:
        tokens.append(f"roff={parsed.roff}")
    if parsed.show_ron:
        tokens.append("showron")
    if parsed.show_roff:
        tokens.append("showroff")
    return " ".join(tokens)
