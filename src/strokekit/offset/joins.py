"""Joins between consecutive offset trails.

Each join receives the offset distance, the original vertex, the offset
trail ending at the vertex and the offset trail starting there, and returns
the positionless trail connecting the end of the first to the start of the
second. Joins never trim: on the inside of a corner they overlap or loop,
which the fill rule resolves.
"""

from __future__ import annotations

import math
from functools import partial
from typing import Callable

import numpy as np

from strokekit.geometry.arcs import arc_between
from strokekit.geometry.located import Located
from strokekit.geometry.segments import Linear
from strokekit.geometry.trail import Trail
from strokekit.geometry.vectors import cross, is_zero, norm, normalized
from strokekit.offset.options import DEFAULT_MITER_LIMIT, LineJoin

JoinFunction = Callable[[float, np.ndarray, Located[Trail], Located[Trail]], Trail]

_COINCIDENT = 1e-9
_PARALLEL = 1e-9


def _ends(prev: Located[Trail], nxt: Located[Trail]) -> tuple[np.ndarray, np.ndarray]:
    return prev.end_point(), nxt.start_point()


def join_bevel(r: float, vertex: np.ndarray, prev: Located[Trail], nxt: Located[Trail]) -> Trail:
    """Connect the two ends with a straight segment."""
    a, b = _ends(prev, nxt)
    if norm(b - a) <= _COINCIDENT:
        return Trail.empty()
    return Trail(segments=(Linear(b - a),))


def join_round(r: float, vertex: np.ndarray, prev: Located[Trail], nxt: Located[Trail]) -> Trail:
    """Arc around the original vertex; negative ``r`` sweeps clockwise."""
    a, b = _ends(prev, nxt)
    return arc_between(vertex, a, b, clockwise=r < 0)


def join_miter(
    r: float,
    vertex: np.ndarray,
    prev: Located[Trail],
    nxt: Located[Trail],
    miter_limit: float = DEFAULT_MITER_LIMIT,
) -> Trail:
    """Extend both trails along their tangents to where they meet.

    Falls back to a bevel when the tangents are parallel, when the meeting
    point lies behind either end (the inside of a corner), or when the miter
    is longer than ``miter_limit`` times the stroke half-width.
    """
    a, b = _ends(prev, nxt)
    if norm(b - a) <= _COINCIDENT:
        return Trail.empty()
    t_in = prev.value.end_tangent()
    t_out = nxt.value.start_tangent()
    if is_zero(t_in) or is_zero(t_out):
        return join_bevel(r, vertex, prev, nxt)
    d_in = normalized(t_in)
    d_out = normalized(t_out)
    denom = cross(d_in, d_out)
    if abs(denom) <= _PARALLEL:
        return join_bevel(r, vertex, prev, nxt)

    cos_half = math.sqrt(max(0.0, (1.0 + float(np.dot(d_in, d_out))) / 2.0))
    if cos_half <= 1e-12 or 1.0 / cos_half > miter_limit:
        return join_bevel(r, vertex, prev, nxt)

    diff = b - a
    along_in = cross(diff, d_out) / denom
    along_out = cross(diff, d_in) / denom
    if along_in < 0 or along_out > 0:
        return join_bevel(r, vertex, prev, nxt)

    tip = a + d_in * along_in
    return Trail(segments=(Linear(tip - a), Linear(b - tip)))


def join_function(join: LineJoin, miter_limit: float = DEFAULT_MITER_LIMIT) -> JoinFunction:
    join = LineJoin(join)
    if join is LineJoin.MITER:
        return partial(join_miter, miter_limit=miter_limit)
    if join is LineJoin.ROUND:
        return join_round
    return join_bevel


__all__ = ["JoinFunction", "join_bevel", "join_function", "join_miter", "join_round"]
