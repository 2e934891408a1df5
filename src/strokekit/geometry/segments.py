"""Positionless path segments.

A segment is described relative to its own local origin: a linear segment by
its end offset, a cubic Bezier by its two control offsets and its end offset.
Segments carry no position; see :mod:`strokekit.geometry.located`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from strokekit.geometry.vectors import ORIGIN, is_zero, require_vec2


def _lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    return a + (b - a) * t


@dataclass(frozen=True, eq=False)
class Linear:
    end: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "end", require_vec2(self.end, "end"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Linear):
            return NotImplemented
        return bool(np.array_equal(self.end, other.end))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Linear(end={self.end.tolist()})"

    def offset(self) -> np.ndarray:
        return self.end

    def at_param(self, t: float) -> np.ndarray:
        return self.end * t

    def derivative(self, t: float) -> np.ndarray:
        return np.array(self.end, dtype=float)

    def second_derivative(self, t: float) -> np.ndarray:
        return np.zeros(2, dtype=float)

    def split_at_param(self, t: float) -> tuple["Linear", "Linear"]:
        mid = self.end * t
        return Linear(mid), Linear(self.end - mid)

    def reverse(self) -> "Linear":
        return Linear(-self.end)

    def is_degenerate(self) -> bool:
        return is_zero(self.end)

    def start_tangent(self) -> np.ndarray:
        return np.array(self.end, dtype=float)

    def end_tangent(self) -> np.ndarray:
        return np.array(self.end, dtype=float)

    def tangent_at(self, t: float) -> np.ndarray:
        return np.array(self.end, dtype=float)


@dataclass(frozen=True, eq=False)
class Cubic:
    c1: np.ndarray
    c2: np.ndarray
    end: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "c1", require_vec2(self.c1, "c1"))
        object.__setattr__(self, "c2", require_vec2(self.c2, "c2"))
        object.__setattr__(self, "end", require_vec2(self.end, "end"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cubic):
            return NotImplemented
        return bool(
            np.array_equal(self.c1, other.c1)
            and np.array_equal(self.c2, other.c2)
            and np.array_equal(self.end, other.end)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Cubic(c1={self.c1.tolist()}, c2={self.c2.tolist()}, end={self.end.tolist()})"

    def offset(self) -> np.ndarray:
        return self.end

    def at_param(self, t: float) -> np.ndarray:
        mt = 1.0 - t
        return 3 * mt**2 * t * self.c1 + 3 * mt * t**2 * self.c2 + t**3 * self.end

    def derivative(self, t: float) -> np.ndarray:
        mt = 1.0 - t
        return 3 * (mt**2 * self.c1 + 2 * mt * t * (self.c2 - self.c1) + t**2 * (self.end - self.c2))

    def second_derivative(self, t: float) -> np.ndarray:
        mt = 1.0 - t
        return 6 * (mt * (self.c2 - 2 * self.c1) + t * (self.end - 2 * self.c2 + self.c1))

    def split_at_param(self, t: float) -> tuple["Cubic", "Cubic"]:
        """Exact de Casteljau split; the right half is re-based at the split point."""
        p0 = ORIGIN
        q0 = _lerp(p0, self.c1, t)
        q1 = _lerp(self.c1, self.c2, t)
        q2 = _lerp(self.c2, self.end, t)
        r0 = _lerp(q0, q1, t)
        r1 = _lerp(q1, q2, t)
        s = _lerp(r0, r1, t)
        return Cubic(q0, r0, s), Cubic(r1 - s, q2 - s, self.end - s)

    def reverse(self) -> "Cubic":
        return Cubic(self.c2 - self.end, self.c1 - self.end, -self.end)

    def is_degenerate(self) -> bool:
        return is_zero(self.c1) and is_zero(self.c2) and is_zero(self.end)

    def start_tangent(self) -> np.ndarray:
        for candidate in (self.c1, self.c2, self.end):
            if not is_zero(candidate):
                return np.array(candidate, dtype=float)
        return np.zeros(2, dtype=float)

    def end_tangent(self) -> np.ndarray:
        for candidate in (self.end - self.c2, self.end - self.c1, self.end):
            if not is_zero(candidate):
                return np.array(candidate, dtype=float)
        return np.zeros(2, dtype=float)

    def tangent_at(self, t: float) -> np.ndarray:
        # At a cusp the first derivative vanishes; the direction the curve
        # leaves the cusp with is given by the second derivative.
        d1 = self.derivative(t)
        if not is_zero(d1):
            return d1
        d2 = self.second_derivative(t)
        if not is_zero(d2):
            return d2
        return np.array(self.end, dtype=float)


Segment = Union[Linear, Cubic]


def straight(offset: Sequence[float]) -> Linear:
    return Linear(offset)


def bezier3(c1: Sequence[float], c2: Sequence[float], end: Sequence[float]) -> Cubic:
    return Cubic(c1, c2, end)


__all__ = ["Cubic", "Linear", "Segment", "bezier3", "straight"]
