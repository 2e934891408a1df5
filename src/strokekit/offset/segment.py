"""Offset curves of single segments.

Linear segments offset exactly. The offset of a cubic is not itself a cubic,
so it is approximated: the handles of the original are scaled by the ratio
between the offset's and the original's radius of curvature at the midpoint,
and the candidate is checked against the ideal offset at t = 0.25, 0.5 and
0.75. Candidates that miss the tolerance are replaced by the offsets of the
two halves of the original, recursively. Subdividing makes each piece closer
to constant curvature, so the scaled handles converge on the true offset.
"""

from __future__ import annotations

import warnings

import numpy as np

from strokekit.geometry.arcs import arc_between
from strokekit.geometry.curvature import Cusp, Finite, radius_of_curvature
from strokekit.geometry.located import Located
from strokekit.geometry.segments import Cubic, Linear, Segment
from strokekit.geometry.trail import Trail
from strokekit.geometry.vectors import ORIGIN, norm, offset_normal
from strokekit.offset.options import DEFAULT_MAX_DEPTH
from strokekit.validation import InvalidSegmentError, ToleranceWarning

SAMPLE_PARAMS = (0.25, 0.5, 0.75)


def ideal_offset_point(segment: Segment, r: float, t: float) -> np.ndarray:
    """Point at distance ``r`` from ``segment`` at parameter ``t``."""
    return segment.at_param(t) + r * offset_normal(segment.tangent_at(t))


def offset_deviation(segment: Segment, r: float, candidate: Located[Trail]) -> float:
    """Largest distance between a single-segment candidate and the ideal offset."""
    (piece,) = candidate.value.segments
    return max(
        norm(candidate.loc + piece.at_param(t) - ideal_offset_point(segment, r, t))
        for t in SAMPLE_PARAMS
    )


def _scaled_candidate(segment: Cubic, r: float, factor: float) -> Located[Trail]:
    va = r * offset_normal(segment.start_tangent())
    vc = r * offset_normal(segment.end_tangent())
    end = segment.end + vc - va
    c1 = segment.c1 * factor
    c2 = (segment.c2 - segment.end) * factor + end
    return Located(ORIGIN + va, Trail(segments=(Cubic(c1, c2, end),)))


def _join_halves(
    r: float,
    epsilon: float,
    split_point: np.ndarray,
    left: Located[Trail],
    right: Located[Trail],
) -> Located[Trail]:
    gap = norm(right.loc - left.end_point())
    if gap <= epsilon:
        return Located(left.loc, left.value + right.value)
    # The tangent reverses at a cusp; round the offset around it.
    bridge = arc_between(split_point, left.end_point(), right.loc, clockwise=r < 0)
    return Located(left.loc, left.value.concat(bridge, right.value))


def _offset_cubic(
    epsilon: float,
    r: float,
    segment: Cubic,
    depth: int,
    max_depth: int,
    misses: list[float],
) -> Located[Trail]:
    """Offset a cubic, appending the deviation of every piece kept at ``max_depth`` to ``misses``."""
    roc = radius_of_curvature(segment, 0.5)
    if isinstance(roc, Cusp) and depth < max_depth:
        return _subdivide(epsilon, r, segment, depth, max_depth, misses)

    factor = 1.0 + r / roc.radius if isinstance(roc, Finite) else 1.0
    candidate = _scaled_candidate(segment, r, factor)
    deviation = offset_deviation(segment, r, candidate)
    if deviation <= epsilon:
        return candidate
    if depth >= max_depth:
        misses.append(deviation)
        return candidate
    return _subdivide(epsilon, r, segment, depth, max_depth, misses)


def _subdivide(
    epsilon: float,
    r: float,
    segment: Cubic,
    depth: int,
    max_depth: int,
    misses: list[float],
) -> Located[Trail]:
    first, second = segment.split_at_param(0.5)
    split_point = first.end
    left = _offset_cubic(epsilon, r, first, depth + 1, max_depth, misses)
    right = _offset_cubic(epsilon, r, second, depth + 1, max_depth, misses).translate(split_point)
    return _join_halves(r, epsilon, split_point, left, right)


def offset_segment(
    epsilon: float,
    r: float,
    segment: Segment,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Located[Trail]:
    """Offset ``segment`` by ``r``, positive to the right of the direction of travel.

    The result is located relative to the segment's own origin. Cubic offsets
    deviate from the ideal offset by at most ``epsilon`` at the sample
    parameters of every piece; when ``max_depth`` subdivisions are not enough
    a single :class:`ToleranceWarning` is emitted and the last candidates are
    kept.
    """
    if not epsilon > 0:
        raise ValueError("epsilon must be positive.")
    if segment.is_degenerate():
        raise InvalidSegmentError(f"Cannot offset zero-length segment {segment!r}.")
    if isinstance(segment, Linear):
        va = r * offset_normal(segment.end)
        return Located(ORIGIN + va, Trail(segments=(segment,)))

    misses: list[float] = []
    result = _offset_cubic(epsilon, r, segment, 0, max_depth, misses)
    if misses:
        warnings.warn(
            f"Offset missed tolerance {epsilon:g} by up to {max(misses) - epsilon:.3g} "
            f"in {len(misses)} piece(s) after {max_depth} subdivisions; keeping the closest candidates.",
            ToleranceWarning,
            stacklevel=2,
        )
    return result


__all__ = ["SAMPLE_PARAMS", "ideal_offset_point", "offset_deviation", "offset_segment"]
