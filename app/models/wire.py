"""
WireData - Pure Python data model for schematic wires.

This module contains no UI dependencies. Points are stored as
tuples (x, y) rather than toolkit point objects.
"""

from dataclasses import dataclass, field


@dataclass
class WireData:
    """
    Pure Python data class representing a wire polyline.

    Each consecutive pair of points is one connectivity edge; the wire
    itself carries no terminal references.
    """

    wire_id: str
    points: list[tuple[float, float]] = field(default_factory=list)

    def segments(self) -> list[tuple[tuple[float, float], tuple[float, float]]]:
        """Return the consecutive point pairs of this wire."""
        return list(zip(self.points, self.points[1:]))

    def to_dict(self) -> dict:
        return {
            "id": self.wire_id,
            "points": [{"x": x, "y": y} for x, y in self.points],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WireData":
        """
        Deserialize wire from dictionary.

        Points may be {"x", "y"} mappings or [x, y] pairs; anything else
        is dropped.
        """
        points = []
        for point in data.get("points") or []:
            if isinstance(point, dict):
                points.append((point.get("x"), point.get("y")))
            elif isinstance(point, (list, tuple)) and len(point) == 2:
                points.append((point[0], point[1]))
        return cls(wire_id=str(data.get("id", "")), points=points)

    def __repr__(self) -> str:
        return f"WireData({self.wire_id!r}, points={len(self.points)})"
