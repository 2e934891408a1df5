from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from strokekit.geometry.segments import Cubic, Linear, Segment
from strokekit.geometry.trail import Trail
from strokekit.geometry.vectors import angle_of, norm, to_vec2

# Points closer than this are considered coincident.
_COINCIDENT = 1e-9


def _arc_control_points(
    center: np.ndarray, radius: float, start_angle: float, sweep: float
) -> list[tuple[np.ndarray, np.ndarray, np.ndarray]]:
    """Cubic approximations of an arc, at most a quarter turn each."""
    pieces = max(1, int(math.ceil(abs(sweep) / (math.pi / 2) - 1e-12)))
    step = sweep / pieces
    alpha = 4.0 * math.tan(step / 4.0) / 3.0
    result = []
    for i in range(pieces):
        a0 = start_angle + i * step
        a1 = a0 + step
        cos0, sin0 = math.cos(a0), math.sin(a0)
        cos1, sin1 = math.cos(a1), math.sin(a1)
        p1 = center + radius * np.array([cos0 - alpha * sin0, sin0 + alpha * cos0])
        p2 = center + radius * np.array([cos1 + alpha * sin1, sin1 - alpha * cos1])
        p3 = center + radius * np.array([cos1, sin1])
        result.append((p1, p2, p3))
    return result


def arc_sweep(start_angle: float, end_angle: float, clockwise: bool) -> float:
    """Signed sweep from ``start_angle`` to ``end_angle`` in the given direction."""
    if clockwise:
        return -((start_angle - end_angle) % (2 * math.pi))
    return (end_angle - start_angle) % (2 * math.pi)


def arc_between(
    center: Sequence[float],
    start: Sequence[float],
    end: Sequence[float],
    clockwise: bool = False,
) -> Trail:
    """Circular arc around ``center`` from ``start`` to ``end``.

    The radius is taken from ``start``; the final piece is snapped so the trail
    ends exactly at ``end``.
    """
    c = to_vec2(center)
    p_start = to_vec2(start)
    p_end = to_vec2(end)
    if norm(p_end - p_start) <= _COINCIDENT:
        return Trail.empty()
    radius = norm(p_start - c)
    sweep = arc_sweep(angle_of(p_start - c), angle_of(p_end - c), clockwise)
    if radius <= _COINCIDENT or abs(sweep) <= 1e-12:
        return Trail(segments=(Linear(p_end - p_start),))

    segments: list[Segment] = []
    cursor = p_start
    pieces = _arc_control_points(c, radius, angle_of(p_start - c), sweep)
    for index, (p1, p2, p3) in enumerate(pieces):
        if index == len(pieces) - 1:
            p2 = p2 + (p_end - p3)
            p3 = p_end
        segments.append(Cubic(p1 - cursor, p2 - cursor, p3 - cursor))
        cursor = p3
    return Trail(segments=tuple(segments))


__all__ = ["arc_between", "arc_sweep"]
