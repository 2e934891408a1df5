from __future__ import annotations

from typing import Sequence

import numpy as np

from strokekit.validation import InvalidSegmentError

ORIGIN = np.zeros(2, dtype=float)
ORIGIN.flags.writeable = False

# Vectors shorter than this have no usable direction.
_ZERO_LENGTH = 1e-12


def to_vec2(value: Sequence[float]) -> np.ndarray:
    arr = np.asarray(value, dtype=float).reshape(2)
    return arr


def require_vec2(value: Sequence[float], label: str) -> np.ndarray:
    try:
        arr = np.array(value, dtype=float).reshape(2)
    except Exception as exc:
        raise ValueError(f"{label} must be a 2D coordinate.") from exc
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{label} must be finite.")
    arr.flags.writeable = False
    return arr


def norm(v: np.ndarray) -> float:
    return float(np.hypot(v[0], v[1]))


def is_zero(v: np.ndarray, tol: float = _ZERO_LENGTH) -> bool:
    return norm(v) <= tol


def cross(a: np.ndarray, b: np.ndarray) -> float:
    return float(a[0] * b[1] - a[1] * b[0])


def perp(v: np.ndarray) -> np.ndarray:
    """Rotate a vector by +90 degrees."""
    return np.array([-v[1], v[0]], dtype=float)


def normalized(v: np.ndarray) -> np.ndarray:
    length = norm(v)
    if length <= _ZERO_LENGTH:
        raise InvalidSegmentError("Cannot normalize a zero-length vector.")
    return np.asarray(v, dtype=float) / length


def unit_perp(v: np.ndarray) -> np.ndarray:
    return normalized(perp(v))


def offset_normal(v: np.ndarray) -> np.ndarray:
    """Unit normal on the positive offset side, to the right of ``v``."""
    return -unit_perp(v)


def angle_of(v: np.ndarray) -> float:
    return float(np.arctan2(v[1], v[0]))


__all__ = [
    "ORIGIN",
    "angle_of",
    "cross",
    "is_zero",
    "norm",
    "normalized",
    "offset_normal",
    "perp",
    "require_vec2",
    "to_vec2",
    "unit_perp",
]
