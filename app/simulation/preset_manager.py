"""Analysis preset manager - save/load analysis configurations as named presets."""

import json
import logging
from pathlib import Path
from typing import Optional

from .analysis_directives import ANALYSIS_KINDS, AnalysisConfig

logger = logging.getLogger(__name__)

# Built-in presets shipped with the compiler
BUILTIN_PRESETS = [
    {
        "name": "Operating Point",
        "analysis": "op",
        "builtin": True,
        "params": {},
    },
    {
        "name": "Fine DC Sweep 0-5V",
        "analysis": "dc",
        "builtin": True,
        "params": {"dc": {"source": "V1", "start": "0", "stop": "5", "step": "0.01"}},
    },
    {
        "name": "Quick Transient",
        "analysis": "tran",
        "builtin": True,
        "params": {"tran": {"step": "10u", "stop": "10m", "start": "0"}},
    },
    {
        "name": "Audio AC Sweep",
        "analysis": "ac",
        "builtin": True,
        "params": {"ac": {"sweep": "dec", "points": "100", "start": "20", "stop": "20k"}},
    },
    {
        "name": "Wide AC Sweep",
        "analysis": "ac",
        "builtin": True,
        "params": {"ac": {"sweep": "dec", "points": "100", "start": "1", "stop": "1G"}},
    },
]


class PresetManager:
    """Manages analysis presets (built-in + user-defined).

    Presets are stored as JSON in a user-writable file. Built-in presets
    are always available and cannot be deleted.
    """

    def __init__(self, preset_file: Optional[Path] = None):
        if preset_file is None:
            preset_file = self._default_preset_path()
        self._preset_file = Path(preset_file)
        self._user_presets: list[dict] = []
        self._load()

    @staticmethod
    def _default_preset_path() -> Path:
        """Return the default path for the user presets file."""
        return Path.home() / ".schematic-netlist" / "analysis_presets.json"

    # --- Public API ---

    def get_presets(self, analysis: Optional[str] = None) -> list[dict]:
        """Return all presets, optionally filtered by analysis kind."""
        all_presets = BUILTIN_PRESETS + self._user_presets
        if analysis:
            return [p for p in all_presets if p["analysis"] == analysis]
        return list(all_presets)

    def get_preset_by_name(self, name: str, analysis: Optional[str] = None) -> Optional[dict]:
        """Look up a preset by name (and optionally analysis kind)."""
        for p in self.get_presets(analysis):
            if p["name"] == name:
                return p
        return None

    def get_config(self, name: str, analysis: Optional[str] = None) -> Optional[AnalysisConfig]:
        """Return the AnalysisConfig of a preset, or None if it does not exist."""
        preset = self.get_preset_by_name(name, analysis)
        if preset is None:
            return None
        return AnalysisConfig.from_dict(preset["params"])

    def save_preset(self, name: str, analysis: str, params: dict) -> dict:
        """Save a user preset. Overwrites if name+kind already exists."""
        if analysis not in ANALYSIS_KINDS:
            raise ValueError(f"Unknown analysis kind '{analysis}'")

        # Don't overwrite built-in presets
        for bp in BUILTIN_PRESETS:
            if bp["name"] == name and bp["analysis"] == analysis:
                raise ValueError(f"Cannot overwrite built-in preset '{name}'")

        # Remove existing user preset with same name+kind
        self._user_presets = [
            p for p in self._user_presets if not (p["name"] == name and p["analysis"] == analysis)
        ]

        preset = {
            "name": name,
            "analysis": analysis,
            "params": json.loads(json.dumps(params)),
        }
        self._user_presets.append(preset)
        self._save()
        return preset

    def delete_preset(self, name: str, analysis: Optional[str] = None) -> bool:
        """Delete a user preset. Returns True if deleted, False if not found or built-in."""
        for bp in BUILTIN_PRESETS:
            if bp["name"] == name and (analysis is None or bp["analysis"] == analysis):
                return False  # Can't delete built-in

        before = len(self._user_presets)
        self._user_presets = [
            p
            for p in self._user_presets
            if not (p["name"] == name and (analysis is None or p["analysis"] == analysis))
        ]
        if len(self._user_presets) < before:
            self._save()
            return True
        return False

    # --- Persistence ---

    def _load(self):
        """Load user presets from disk."""
        if not self._preset_file.exists():
            self._user_presets = []
            return
        try:
            data = json.loads(self._preset_file.read_text())
            presets = data.get("presets", [])
        except (json.JSONDecodeError, OSError, AttributeError) as e:
            logger.warning("Failed to load presets from %s: %s", self._preset_file, e)
            self._user_presets = []
            return
        self._user_presets = [
            p for p in presets if isinstance(p, dict) and p.get("name") and p.get("analysis") in ANALYSIS_KINDS
        ]
        for p in self._user_presets:
            p.setdefault("params", {})

    def _save(self):
        """Write user presets to disk."""
        try:
            self._preset_file.parent.mkdir(parents=True, exist_ok=True)
            data = {"presets": self._user_presets}
            self._preset_file.write_text(json.dumps(data, indent=2))
        except OSError as e:
            logger.error("Failed to save presets to %s: %s", self._preset_file, e)
