"""
FileController - Reads and writes schematic mappings as JSON.

The JSON mirrors the in-memory data model ({components, wires}); file
dialogs and session handling belong to the application shell.
"""

import json
from pathlib import Path
from typing import Optional

from models.schematic import SchematicModel


def _is_point(point) -> bool:
    if isinstance(point, dict):
        return "x" in point and "y" in point
    return isinstance(point, list) and len(point) == 2


def validate_schematic_data(data) -> None:
    """
    Validate JSON structure before loading.

    Raises ValueError with a descriptive message if anything is wrong.
    """
    if not isinstance(data, dict):
        raise ValueError("File does not contain a valid schematic object.")

    if "components" not in data or not isinstance(data["components"], list):
        raise ValueError("Missing or invalid 'components' list.")
    if "wires" not in data or not isinstance(data["wires"], list):
        raise ValueError("Missing or invalid 'wires' list.")

    for i, comp in enumerate(data["components"]):
        if not isinstance(comp, dict):
            raise ValueError(f"Component #{i + 1} is not an object.")
        for key in ("id", "type"):
            if key not in comp:
                raise ValueError(f"Component #{i + 1} is missing required field '{key}'.")
        pins = comp.get("pins", [])
        if not isinstance(pins, list):
            raise ValueError(f"Component '{comp['id']}' has an invalid 'pins' list.")
        for j, pin in enumerate(pins):
            if not isinstance(pin, dict) or "id" not in pin:
                raise ValueError(f"Pin #{j + 1} of component '{comp['id']}' is missing its 'id'.")
            if not isinstance(pin.get("x"), (int, float)) or not isinstance(pin.get("y"), (int, float)):
                raise ValueError(f"Pin '{pin['id']}' of component '{comp['id']}' must have numeric x and y.")

    for i, wire in enumerate(data["wires"]):
        if not isinstance(wire, dict):
            raise ValueError(f"Wire #{i + 1} is not an object.")
        if not isinstance(wire.get("points", []), list):
            raise ValueError(f"Wire #{i + 1} has an invalid 'points' list.")
        for j, point in enumerate(wire.get("points", [])):
            if not _is_point(point):
                raise ValueError(f"Point #{j + 1} of wire #{i + 1} must be an {{x, y}} object or an [x, y] pair.")


class FileController:
    """
    Loads and saves schematic files.

    Tracks the current file path so a caller can re-save in place.
    """

    def __init__(self, model: Optional[SchematicModel] = None):
        self.model = model or SchematicModel()
        self.current_file: Optional[Path] = None

    def load_schematic(self, filepath) -> SchematicModel:
        """
        Load a schematic from a JSON file.

        Updates the model in place (preserving the reference) and returns it.

        Raises:
            json.JSONDecodeError: If file is not valid JSON.
            ValueError: If file structure is invalid.
            OSError: If the file cannot be read.
        """
        filepath = Path(filepath)
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)

        validate_schematic_data(data)
        loaded = SchematicModel.from_dict(data)

        self.model.clear()
        self.model.components = loaded.components
        self.model.wires = loaded.wires
        self.current_file = filepath
        return self.model

    def save_schematic(self, filepath) -> None:
        """
        Save the schematic to a JSON file.

        Raises:
            OSError: If the file cannot be written.
        """
        filepath = Path(filepath)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.model.to_dict(), f, indent=2)
        self.current_file = filepath
