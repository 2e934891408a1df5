from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence

import numpy as np

from strokekit.geometry.located import Located
from strokekit.geometry.segments import Cubic, Linear, Segment
from strokekit.geometry.vectors import ORIGIN, is_zero, norm, require_vec2

# Closed trails may miss their start point by this much, relative to segment size.
_CLOSURE_TOL = 1e-9


@dataclass(frozen=True)
class Trail:
    """An ordered chain of segments, each starting where the previous ends.

    A closed trail's segments return to its start point.
    """

    segments: tuple[Segment, ...] = ()
    closed: bool = False

    def __post_init__(self) -> None:
        segments = tuple(self.segments)
        for segment in segments:
            if not isinstance(segment, (Linear, Cubic)):
                raise ValueError(f"Trail segments must be Linear or Cubic, got {type(segment).__name__}.")
        object.__setattr__(self, "segments", segments)
        if self.closed and segments:
            total = self.offset()
            scale = max(1.0, max(norm(s.offset()) for s in segments))
            if norm(total) > _CLOSURE_TOL * scale:
                raise ValueError("Closed trail segments must return to the start point.")

    @classmethod
    def empty(cls) -> "Trail":
        return cls()

    @classmethod
    def from_segments(cls, segments: Iterable[Segment], closed: bool = False) -> "Trail":
        return cls(segments=tuple(segments), closed=closed)

    @classmethod
    def from_offsets(cls, offsets: Iterable[Sequence[float]], closed: bool = False) -> "Trail":
        return cls(segments=tuple(Linear(v) for v in offsets), closed=closed)

    @classmethod
    def from_vertices(cls, points: Iterable[Sequence[float]], closed: bool = False) -> Located["Trail"]:
        pts = [require_vec2(p, "point") for p in points]
        if len(pts) < 2:
            raise ValueError("Trail requires at least two points.")
        segments: list[Segment] = [Linear(pts[i + 1] - pts[i]) for i in range(len(pts) - 1)]
        if closed and not is_zero(pts[0] - pts[-1], tol=_CLOSURE_TOL):
            segments.append(Linear(pts[0] - pts[-1]))
        return Located(pts[0], cls(segments=tuple(segments), closed=closed))

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __add__(self, other: "Trail") -> "Trail":
        if not isinstance(other, Trail):
            return NotImplemented
        return Trail(segments=self.segments + other.segments)

    @property
    def is_empty(self) -> bool:
        return not self.segments

    def concat(self, *others: "Trail") -> "Trail":
        segments = list(self.segments)
        for other in others:
            segments.extend(other.segments)
        return Trail(segments=tuple(segments))

    def offset(self) -> np.ndarray:
        """Displacement from the start point to the end point."""
        total = np.zeros(2, dtype=float)
        for segment in self.segments:
            total = total + segment.offset()
        return total

    def vertex_offsets(self) -> np.ndarray:
        """Start of every segment plus the final end point, relative to the start."""
        pts = [np.zeros(2, dtype=float)]
        for segment in self.segments:
            pts.append(pts[-1] + segment.offset())
        return np.vstack(pts)

    def reverse(self) -> "Trail":
        return Trail(
            segments=tuple(segment.reverse() for segment in reversed(self.segments)),
            closed=self.closed,
        )

    def close(self) -> "Trail":
        if self.closed or not self.segments:
            return self
        gap = -self.offset()
        segments = self.segments
        if not is_zero(gap, tol=_CLOSURE_TOL):
            segments = segments + (Linear(gap),)
        return Trail(segments=segments, closed=True)

    def start_tangent(self) -> np.ndarray:
        for segment in self.segments:
            if not segment.is_degenerate():
                return segment.start_tangent()
        return np.zeros(2, dtype=float)

    def end_tangent(self) -> np.ndarray:
        for segment in reversed(self.segments):
            if not segment.is_degenerate():
                return segment.end_tangent()
        return np.zeros(2, dtype=float)

    def sample(self, start: Sequence[float] = ORIGIN, bezier_samples: int = 32) -> np.ndarray:
        """Polyline approximation in absolute coordinates."""
        base = np.asarray(start, dtype=float).reshape(2)
        if not self.segments:
            return base.reshape(1, 2).copy()
        samples = max(int(bezier_samples), 2)
        points = [base.reshape(1, 2)]
        cursor = base
        for segment in self.segments:
            if isinstance(segment, Linear):
                seg_points = (cursor + segment.end).reshape(1, 2)
            else:
                t = np.linspace(0.0, 1.0, samples, endpoint=True)[1:]
                seg_points = np.vstack([cursor + segment.at_param(float(ti)) for ti in t])
            points.append(seg_points)
            cursor = cursor + segment.offset()
        return np.vstack(points)


def vertices(located: Located[Trail]) -> np.ndarray:
    """Absolute vertex positions; a closed trail does not repeat its start."""
    pts = located.loc + located.value.vertex_offsets()
    if located.value.closed and len(located.value) > 0:
        return pts[:-1]
    return pts


def located_segments(located: Located[Trail]) -> list[Located[Segment]]:
    starts = located.loc + located.value.vertex_offsets()[:-1]
    return [Located(start, segment) for start, segment in zip(starts, located.value.segments)]


@dataclass(frozen=True)
class Path:
    """A collection of independently located trails."""

    trails: tuple[Located[Trail], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        trails = tuple(self.trails)
        for item in trails:
            if not isinstance(item, Located) or not isinstance(item.value, Trail):
                raise ValueError("Path entries must be located trails.")
        object.__setattr__(self, "trails", trails)

    @classmethod
    def of(cls, *trails: Located[Trail]) -> "Path":
        return cls(trails=tuple(trails))

    def __len__(self) -> int:
        return len(self.trails)

    def __iter__(self) -> Iterator[Located[Trail]]:
        return iter(self.trails)

    def __add__(self, other: "Path") -> "Path":
        if not isinstance(other, Path):
            return NotImplemented
        return Path(trails=self.trails + other.trails)

    def translate(self, offset: Sequence[float]) -> "Path":
        return Path(trails=tuple(t.translate(offset) for t in self.trails))

    def sample(self, bezier_samples: int = 32) -> list[np.ndarray]:
        return [t.value.sample(start=t.loc, bezier_samples=bezier_samples) for t in self.trails]


__all__ = ["Path", "Trail", "located_segments", "vertices"]
