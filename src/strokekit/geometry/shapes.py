from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from strokekit.geometry.arcs import arc_between
from strokekit.geometry.located import Located
from strokekit.geometry.segments import Cubic
from strokekit.geometry.trail import Trail
from strokekit.geometry.vectors import require_vec2, to_vec2


def make_polyline(points: Iterable[Sequence[float]], closed: bool = False) -> Located[Trail]:
    return Trail.from_vertices(points, closed=closed)


def make_polygon(points: Iterable[Sequence[float]]) -> Located[Trail]:
    pts = list(points)
    if len(pts) < 3:
        raise ValueError("make_polygon requires at least three points.")
    return Trail.from_vertices(pts, closed=True)


def make_rect(
    size: Sequence[float] = (1.0, 1.0),
    center: Sequence[float] = (0.0, 0.0),
) -> Located[Trail]:
    sx, sy = float(size[0]), float(size[1])
    if sx <= 0 or sy <= 0:
        raise ValueError("size must be positive.")
    cx, cy = to_vec2(center)
    hx, hy = sx / 2.0, sy / 2.0
    points = [
        (cx - hx, cy - hy),
        (cx + hx, cy - hy),
        (cx + hx, cy + hy),
        (cx - hx, cy + hy),
    ]
    return Trail.from_vertices(points, closed=True)


def make_circle(
    radius: float = 0.5,
    center: Sequence[float] = (0.0, 0.0),
) -> Located[Trail]:
    """Counter-clockwise circle starting on the positive x axis."""
    if radius <= 0:
        raise ValueError("radius must be positive.")
    c = to_vec2(center)
    start = c + np.array([radius, 0.0])
    opposite = c - np.array([radius, 0.0])
    upper = arc_between(c, start, opposite, clockwise=False)
    lower = arc_between(c, opposite, start, clockwise=False)
    return Located(start, (upper + lower).close())


def make_curve(
    start: Sequence[float],
    c1: Sequence[float],
    c2: Sequence[float],
    end: Sequence[float],
) -> Located[Trail]:
    """Single cubic Bezier trail from absolute control points."""
    p0 = require_vec2(start, "start")
    p1 = require_vec2(c1, "c1")
    p2 = require_vec2(c2, "c2")
    p3 = require_vec2(end, "end")
    return Located(p0, Trail(segments=(Cubic(p1 - p0, p2 - p0, p3 - p0),)))


__all__ = ["make_circle", "make_curve", "make_polygon", "make_polyline", "make_rect"]
