"""Radius of curvature of segments.

The result is a tagged value rather than a float so that callers never have
to compare against infinity: a segment is either curving with a finite
radius, locally straight, or has a cusp where its tangent vanishes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from strokekit.geometry.segments import Linear, Segment
from strokekit.geometry.vectors import cross, norm

# Curvature magnitudes below this are treated as straight.
_FLAT_CURVATURE = 1e-12
# Speeds below this are treated as a vanished tangent.
_CUSP_SPEED = 1e-12


@dataclass(frozen=True)
class Finite:
    """Signed radius: positive turning counter-clockwise, negative clockwise."""

    radius: float

    @property
    def magnitude(self) -> float:
        return abs(self.radius)


@dataclass(frozen=True)
class Infinite:
    pass


@dataclass(frozen=True)
class Cusp:
    pass


Curvature = Union[Finite, Infinite, Cusp]


def radius_of_curvature(segment: Segment, t: float) -> Curvature:
    if isinstance(segment, Linear):
        return Infinite()
    d1 = segment.derivative(t)
    speed = norm(d1)
    if speed <= _CUSP_SPEED:
        return Cusp()
    turn = cross(d1, segment.second_derivative(t))
    if abs(turn) <= _FLAT_CURVATURE * speed**3:
        return Infinite()
    return Finite(speed**3 / turn)


def curvature(segment: Segment, t: float) -> float:
    """Signed curvature; ``0.0`` when straight and ``inf`` at a cusp."""
    roc = radius_of_curvature(segment, t)
    if isinstance(roc, Finite):
        return 1.0 / roc.radius
    if isinstance(roc, Cusp):
        return float("inf")
    return 0.0


__all__ = ["Curvature", "Cusp", "Finite", "Infinite", "curvature", "radius_of_curvature"]
