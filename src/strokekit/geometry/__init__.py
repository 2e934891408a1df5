"""Geometry primitives: segments, located values, trails and paths."""

from __future__ import annotations

from .arcs import arc_between
from .curvature import Cusp, Finite, Infinite, radius_of_curvature
from .located import Located, at
from .segments import Cubic, Linear, Segment, bezier3, straight
from .shapes import make_circle, make_curve, make_polygon, make_polyline, make_rect
from .trail import Path, Trail, located_segments, vertices

__all__ = [
    "Cubic",
    "Cusp",
    "Finite",
    "Infinite",
    "Linear",
    "Located",
    "Path",
    "Segment",
    "Trail",
    "arc_between",
    "at",
    "bezier3",
    "located_segments",
    "make_circle",
    "make_curve",
    "make_polygon",
    "make_polyline",
    "make_rect",
    "radius_of_curvature",
    "straight",
    "vertices",
]
