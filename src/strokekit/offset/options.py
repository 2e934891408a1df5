from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_EPSILON = 1e-3
DEFAULT_MITER_LIMIT = 10.0
DEFAULT_MAX_DEPTH = 16


class LineJoin(str, Enum):
    MITER = "miter"
    ROUND = "round"
    BEVEL = "bevel"


class LineCap(str, Enum):
    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"


def _check_common(epsilon: float, miter_limit: float, max_depth: int) -> None:
    if not epsilon > 0:
        raise ValueError("epsilon must be positive.")
    if not miter_limit >= 1.0:
        raise ValueError("miter_limit must be >= 1.")
    if max_depth < 0:
        raise ValueError("max_depth must be non-negative.")


@dataclass(frozen=True)
class OffsetOpts:
    """Controls how trails are offset."""

    join: LineJoin = LineJoin.MITER
    epsilon: float = DEFAULT_EPSILON
    miter_limit: float = DEFAULT_MITER_LIMIT
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        object.__setattr__(self, "join", LineJoin(self.join))
        _check_common(self.epsilon, self.miter_limit, self.max_depth)


@dataclass(frozen=True)
class ExpandOpts:
    """Controls how trails are expanded into stroke outlines."""

    join: LineJoin = LineJoin.MITER
    cap: LineCap = LineCap.BUTT
    epsilon: float = DEFAULT_EPSILON
    miter_limit: float = DEFAULT_MITER_LIMIT
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        object.__setattr__(self, "join", LineJoin(self.join))
        object.__setattr__(self, "cap", LineCap(self.cap))
        _check_common(self.epsilon, self.miter_limit, self.max_depth)

    def offset_opts(self) -> OffsetOpts:
        return OffsetOpts(
            join=self.join,
            epsilon=self.epsilon,
            miter_limit=self.miter_limit,
            max_depth=self.max_depth,
        )


__all__ = [
    "DEFAULT_EPSILON",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_MITER_LIMIT",
    "ExpandOpts",
    "LineCap",
    "LineJoin",
    "OffsetOpts",
]
