"""strokekit – offset curves and stroke outlines for 2D paths."""

from __future__ import annotations

from .geometry import Cubic, Linear, Located, Path, Trail, at, bezier3, straight
from .offset import (
    DEFAULT_EPSILON,
    ExpandOpts,
    LineCap,
    LineJoin,
    OffsetOpts,
    expand_path,
    expand_trail,
    offset_path,
    offset_segment,
    offset_trail,
)
from .validation import InvalidSegmentError, ToleranceWarning, ValidationError

__all__ = [
    "__version__",
    "Cubic",
    "DEFAULT_EPSILON",
    "ExpandOpts",
    "InvalidSegmentError",
    "LineCap",
    "LineJoin",
    "Linear",
    "Located",
    "OffsetOpts",
    "Path",
    "ToleranceWarning",
    "Trail",
    "ValidationError",
    "at",
    "bezier3",
    "expand_path",
    "expand_trail",
    "offset_path",
    "offset_segment",
    "offset_trail",
    "straight",
]

__version__ = "0.1.0"
