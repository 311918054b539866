"""
simulation/analysis_directives.py

Builds .save and analysis directives (.op, .dc, .tran, .ac) from an
analysis configuration.

The builder never raises: it always returns the directive lines and a
list of validation errors. Any error suppresses every directive of that
analysis.
"""

from dataclasses import dataclass, field
from typing import Optional

ANALYSIS_KINDS = ("op", "dc", "tran", "ac")
WILDCARD_SIGNALS = frozenset({"all", "*"})


def _text(value) -> str:
    return str(value if value is not None else "").strip()


def _section(data: dict, key: str) -> dict:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _signal_list(values) -> list[str]:
    if not isinstance(values, (list, tuple)):
        return []
    return [token for token in (_text(v) for v in values) if token]


@dataclass
class SaveConfig:
    signals: list[str] = field(default_factory=list)


@dataclass
class DcSweepConfig:
    source: str = ""
    start: str = ""
    stop: str = ""
    step: str = ""


@dataclass
class TransientConfig:
    step: str = ""
    stop: str = ""
    start: str = "0"
    max_step: str = ""


@dataclass
class AcSweepConfig:
    sweep: str = "dec"
    points: str = ""
    start: str = ""
    stop: str = ""


@dataclass
class AnalysisConfig:
    """Settings for every analysis kind; only the selected kind is read."""

    save: SaveConfig = field(default_factory=SaveConfig)
    dc: DcSweepConfig = field(default_factory=DcSweepConfig)
    tran: TransientConfig = field(default_factory=TransientConfig)
    ac: AcSweepConfig = field(default_factory=AcSweepConfig)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "AnalysisConfig":
        """
        Build a config from a plain mapping.

        Accepts {"save": {"signals": [...]}, "dc": {...}, "tran": {...},
        "ac": {...}}; the transient max step may be spelled maxStep or
        max_step. Missing sections, or sections that are not mappings, keep
        their defaults.
        """
        if not isinstance(data, dict):
            return cls()
        save = _section(data, "save")
        dc = _section(data, "dc")
        tran = _section(data, "tran")
        ac = _section(data, "ac")
        return cls(
            save=SaveConfig(signals=_signal_list(save.get("signals"))),
            dc=DcSweepConfig(
                source=_text(dc.get("source")),
                start=_text(dc.get("start")),
                stop=_text(dc.get("stop")),
                step=_text(dc.get("step")),
            ),
            tran=TransientConfig(
                step=_text(tran.get("step")),
                stop=_text(tran.get("stop")),
                start=_text(tran.get("start", "0")),
                max_step=_text(tran.get("maxStep", tran.get("max_step"))),
            ),
            ac=AcSweepConfig(
                sweep=_text(ac.get("sweep", "dec")),
                points=_text(ac.get("points")),
                start=_text(ac.get("start")),
                stop=_text(ac.get("stop")),
            ),
        )

    def to_dict(self) -> dict:
        return {
            "save": {"signals": list(self.save.signals)},
            "dc": {
                "source": self.dc.source,
                "start": self.dc.start,
                "stop": self.dc.stop,
                "step": self.dc.step,
            },
            "tran": {
                "step": self.tran.step,
                "stop": self.tran.stop,
                "start": self.tran.start,
                "maxStep": self.tran.max_step,
            },
            "ac": {
                "sweep": self.ac.sweep,
                "points": self.ac.points,
                "start": self.ac.start,
                "stop": self.ac.stop,
            },
        }


@dataclass
class DirectiveResult:
    lines: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def build_save_directive(signals, fallback) -> str:
    """
    Build a .save line.

    Explicit signals win, unless they are empty or only wildcard tokens
    (all, *) and a fallback list exists.

    Returns:
        The .save line, or "" when there is nothing to save.
    """
    tokens = _signal_list(signals)
    fallback_tokens = _signal_list(fallback)
    wildcard_only = bool(tokens) and all(token.lower() in WILDCARD_SIGNALS for token in tokens)
    if (not tokens or wildcard_only) and fallback_tokens:
        chosen = fallback_tokens
    else:
        chosen = tokens or fallback_tokens
    if not chosen:
        return ""
    return f".save {' '.join(chosen)}"


def build_analysis_directives(kind, config=None, fallback_signals=None) -> DirectiveResult:
    """
    Build the directive lines of one analysis.

    Args:
        kind: "op", "dc", "tran" or "ac" (case-insensitive). Anything
            else is treated as an operating point.
        config: AnalysisConfig, a plain mapping for AnalysisConfig.from_dict,
            or None.
        fallback_signals: Signals to save when no explicit selection is
            configured, typically the named-node signals of the compile.

    Returns:
        DirectiveResult. On validation errors, lines is empty.
    """
    if not isinstance(config, AnalysisConfig):
        config = AnalysisConfig.from_dict(config if isinstance(config, dict) else None)
    fallback = _signal_list(fallback_signals) or ["all"]
    result = DirectiveResult()
    kind = _text(kind).lower()

    def append_save():
        save_line = build_save_directive(config.save.signals, fallback)
        if save_line:
            result.lines.append(save_line)

    if kind == "dc":
        dc = config.dc
        source, start, stop, step = _text(dc.source), _text(dc.start), _text(dc.stop), _text(dc.step)
        if not source:
            result.errors.append("DC sweep requires a source (e.g., V1).")
        if not start or not stop or not step:
            result.errors.append("DC sweep needs start, stop, and step values.")
        if not result.errors:
            append_save()
            result.lines.append(f".dc {source} {start} {stop} {step}")

    elif kind == "tran":
        tran = config.tran
        step, stop = _text(tran.step), _text(tran.stop)
        if not step or not stop:
            result.errors.append("TRAN analysis needs step and stop time.")
        if not result.errors:
            start = _text(tran.start) or "0"
            max_step = _text(tran.max_step)
            append_save()
            suffix = f" {max_step}" if max_step else ""
            result.lines.append(f".tran {step} {stop} {start}{suffix}")

    elif kind == "ac":
        ac = config.ac
        points, start, stop = _text(ac.points), _text(ac.start), _text(ac.stop)
        if not points or not start or not stop:
            result.errors.append("AC analysis needs sweep points, start freq, and stop freq.")
        if not result.errors:
            sweep = _text(ac.sweep) or "dec"
            append_save()
            result.lines.append(f".ac {sweep} {points} {start} {stop}")

    else:
        result.lines.append(".op")

    return result
