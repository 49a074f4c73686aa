"""
Geometry helpers for hand landmarks.
"""
from typing import Any, Sequence, Tuple

import numpy as np

from .errors import InvalidObservation
from .types import LANDMARK_COUNT


def as_observation(hand: Any) -> np.ndarray:
    """
    Convert a hand observation into a (21, 3) float array.

    Args:
        hand: 21 landmarks as Point3D, (x, y, z) tuples, objects with
            x/y/z attributes, or an array of shape (21, 3)

    Returns:
        Array of shape (21, 3)

    Raises:
        InvalidObservation: if the hand does not hold 21 finite 3D points
    """
    try:
        if isinstance(hand, np.ndarray):
            points = hand.astype(float, copy=False)
        else:
            points = np.asarray([_coords(p) for p in hand], dtype=float)
    except (TypeError, ValueError, AttributeError) as e:
        raise InvalidObservation(f"Unreadable hand observation: {e}") from e

    if points.shape != (LANDMARK_COUNT, 3):
        raise InvalidObservation(
            f"Expected {LANDMARK_COUNT} landmarks with 3 coordinates, got shape {points.shape}"
        )
    if not np.all(np.isfinite(points)):
        raise InvalidObservation("Hand observation contains non-finite coordinates")
    return points


def _coords(p: Any) -> Tuple[float, float, float]:
    if hasattr(p, "x") and hasattr(p, "y"):
        return (p.x, p.y, getattr(p, "z", 0.0))
    x, y, z = p
    return (x, y, z)


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two 3D points."""
    return float(np.linalg.norm(np.asarray(a, dtype=float) - np.asarray(b, dtype=float)))


def centroid(points: Any) -> np.ndarray:
    """Mean point of a point set."""
    return np.asarray(points, dtype=float).mean(axis=0)


def midpoint(a: Sequence[float], b: Sequence[float]) -> np.ndarray:
    return (np.asarray(a, dtype=float) + np.asarray(b, dtype=float)) / 2.0


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
