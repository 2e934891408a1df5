"""Offset curves, joins, caps and stroke expansion."""

from __future__ import annotations

from .caps import cap_butt, cap_function, cap_round, cap_square
from .joins import join_bevel, join_function, join_miter, join_round
from .options import DEFAULT_EPSILON, ExpandOpts, LineCap, LineJoin, OffsetOpts
from .segment import offset_segment
from .trail import expand_path, expand_trail, offset_path, offset_trail

__all__ = [
    "DEFAULT_EPSILON",
    "ExpandOpts",
    "LineCap",
    "LineJoin",
    "OffsetOpts",
    "cap_butt",
    "cap_function",
    "cap_round",
    "cap_square",
    "expand_path",
    "expand_trail",
    "join_bevel",
    "join_function",
    "join_miter",
    "join_round",
    "offset_path",
    "offset_segment",
    "offset_trail",
]
