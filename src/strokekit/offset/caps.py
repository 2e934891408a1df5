from __future__ import annotations

from typing import Callable

import numpy as np

from strokekit.geometry.arcs import arc_between
from strokekit.geometry.segments import Linear
from strokekit.geometry.trail import Trail
from strokekit.geometry.vectors import norm, perp, to_vec2
from strokekit.offset.options import LineCap

CapFunction = Callable[[float, np.ndarray, np.ndarray, np.ndarray], Trail]

_COINCIDENT = 1e-9


def cap_butt(r: float, center: np.ndarray, from_point: np.ndarray, to_point: np.ndarray) -> Trail:
    """Connect the two offset ends directly."""
    return Trail(segments=(Linear(to_vec2(to_point) - to_vec2(from_point)),))


def cap_round(r: float, center: np.ndarray, from_point: np.ndarray, to_point: np.ndarray) -> Trail:
    """Half-circle-like arc around ``center``; negative ``r`` sweeps clockwise."""
    return arc_between(center, from_point, to_point, clockwise=r < 0)


def cap_square(r: float, center: np.ndarray, from_point: np.ndarray, to_point: np.ndarray) -> Trail:
    """Rectangle projecting past ``center`` on the side a round cap would bulge to."""
    a = to_vec2(from_point)
    b = to_vec2(to_point)
    radial = a - to_vec2(center)
    if norm(radial) <= _COINCIDENT:
        return cap_butt(r, center, a, b)
    v = -perp(radial) if r < 0 else perp(radial)
    return Trail(segments=(Linear(v), Linear(b - a), Linear(-v)))


def cap_function(cap: LineCap) -> CapFunction:
    cap = LineCap(cap)
    if cap is LineCap.ROUND:
        return cap_round
    if cap is LineCap.SQUARE:
        return cap_square
    return cap_butt


__all__ = ["CapFunction", "cap_butt", "cap_function", "cap_round", "cap_square"]
