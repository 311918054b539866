"""
Coordinate keying for schematic points.

Floating point positions are rounded to a fixed precision so that two
endpoints drawn at "the same" place compare equal by value.
"""

import math
from typing import Optional

COORD_PRECISION = 1e6


def round_coord(value: float) -> float:
    """Round half-up to 1e-6."""
    return math.floor(value * COORD_PRECISION + 0.5) / COORD_PRECISION


def _coerce(value) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def normalize_point(point) -> Optional[tuple[float, float]]:
    """
    Canonicalize a point.

    Args:
        point: An (x, y) sequence, a mapping with "x"/"y" keys, or any
            object with x and y attributes.

    Returns:
        The rounded (x, y) tuple, or None when either coordinate is
        missing or not finite.
    """
    if point is None:
        return None
    if isinstance(point, dict):
        raw_x, raw_y = point.get("x"), point.get("y")
    elif hasattr(point, "x") and hasattr(point, "y"):
        raw_x, raw_y = point.x, point.y
    else:
        try:
            raw_x, raw_y = point[0], point[1]
        except (TypeError, IndexError, KeyError):
            return None
    x = _coerce(raw_x)
    y = _coerce(raw_y)
    if x is None or y is None:
        return None
    return (round_coord(x), round_coord(y))


def coord_key(point: tuple[float, float]) -> tuple[float, float]:
    """Lookup key for an already normalized point."""
    # -0.0 and 0.0 hash alike, so the rounded tuple is a stable key as is
    return (point[0] + 0.0, point[1] + 0.0)
