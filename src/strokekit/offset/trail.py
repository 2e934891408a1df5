"""Offsetting and expanding whole trails and paths."""

from __future__ import annotations

import numpy as np

from strokekit.geometry.located import Located, bind_loc
from strokekit.geometry.segments import Segment
from strokekit.geometry.trail import Path, Trail, located_segments
from strokekit.offset.caps import cap_butt, cap_function
from strokekit.offset.joins import JoinFunction, join_function
from strokekit.offset.options import ExpandOpts, OffsetOpts
from strokekit.offset.segment import offset_segment
from strokekit.validation import InvalidSegmentError


def _offset_pieces(
    r: float, located: Located[Trail], opts: OffsetOpts
) -> tuple[list[Located[Trail]], list[np.ndarray]]:
    """Offset every non-degenerate segment; also return each segment's end vertex."""
    pieces: list[Located[Trail]] = []
    ends: list[np.ndarray] = []

    def offset(segment: Segment) -> Located[Trail]:
        return offset_segment(opts.epsilon, r, segment, max_depth=opts.max_depth)

    for seg in located_segments(located):
        if seg.value.is_degenerate():
            continue
        pieces.append(bind_loc(offset, seg))
        ends.append(seg.end_point())
    if not pieces:
        raise InvalidSegmentError("Trail has no segments of non-zero length to offset.")
    return pieces, ends


def join_segments(
    join: JoinFunction,
    r: float,
    ends: list[np.ndarray],
    pieces: list[Located[Trail]],
    closed: bool = False,
) -> Located[Trail]:
    """Chain located offset trails into one, inserting ``join`` at every shared vertex.

    ``ends[i]`` is the original vertex between ``pieces[i]`` and
    ``pieces[i + 1]``; for closed trails the last vertex joins back to the
    first piece.
    """
    if not pieces:
        return Located(np.zeros(2), Trail.empty())
    segments = list(pieces[0].value.segments)
    for vertex, prev, nxt in zip(ends, pieces, pieces[1:]):
        segments.extend(join(r, vertex, prev, nxt).segments)
        segments.extend(nxt.value.segments)
    if closed:
        segments.extend(join(r, ends[-1], pieces[-1], pieces[0]).segments)
    return Located(pieces[0].loc, Trail(segments=tuple(segments), closed=closed))


def offset_trail(r: float, located: Located[Trail], opts: OffsetOpts | None = None) -> Located[Trail]:
    """Offset a located trail by ``r``, joining the pieces with ``opts.join``."""
    opts = opts or OffsetOpts()
    if located.value.is_empty:
        return Located(located.loc, Trail.empty())
    pieces, ends = _offset_pieces(r, located, opts)
    join = join_function(opts.join, opts.miter_limit)
    return join_segments(join, r, ends, pieces, closed=located.value.closed)


def offset_path(r: float, path: Path, opts: OffsetOpts | None = None) -> Path:
    return Path(trails=tuple(offset_trail(r, located, opts) for located in path))


def expand_trail(r: float, located: Located[Trail], opts: ExpandOpts | None = None) -> Located[Trail]:
    """Closed outline of the region swept by a pen of half-width ``r``.

    The outline starts at the start of the ``-r`` offset and runs: start cap,
    the ``+r`` offset, end cap, then the ``-r`` offset backwards. A closed
    trail has no open ends, so its seam is bridged with straight connectors
    whatever cap is selected.
    """
    opts = opts or ExpandOpts()
    if located.value.is_empty:
        return Located(located.loc, Trail(closed=True))
    offset_opts = opts.offset_opts()
    forward = offset_trail(r, located, offset_opts)
    backward = offset_trail(-r, located, offset_opts)
    cap = cap_butt if located.value.closed else cap_function(opts.cap)

    pieces = [
        cap(r, located.start_point(), backward.start_point(), forward.start_point()),
        forward.value,
        cap(r, located.end_point(), forward.end_point(), backward.end_point()),
        backward.value.reverse(),
    ]
    segments: list[Segment] = []
    for piece in pieces:
        segments.extend(piece.segments)
    return Located(backward.loc, Trail(segments=tuple(segments), closed=True))


def expand_path(r: float, path: Path, opts: ExpandOpts | None = None) -> Path:
    return Path(trails=tuple(expand_trail(r, located, opts) for located in path))


__all__ = ["expand_path", "expand_trail", "join_segments", "offset_path", "offset_trail"]
