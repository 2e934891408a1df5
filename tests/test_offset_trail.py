from __future__ import annotations

import itertools

import numpy as np
import pytest

from strokekit import (
    ExpandOpts,
    InvalidSegmentError,
    LineCap,
    LineJoin,
    Linear,
    Located,
    OffsetOpts,
    Path,
    Trail,
    expand_path,
    expand_trail,
    offset_path,
    offset_trail,
)
from strokekit.geometry import make_circle, make_curve, make_polyline, make_rect
from tests.helpers import trail_end


def _bbox(located: Located[Trail], samples: int = 32) -> tuple[np.ndarray, np.ndarray]:
    pts = located.value.sample(start=located.loc, bezier_samples=samples)
    return pts.min(axis=0), pts.max(axis=0)


def test_open_polyline_offset_endpoints():
    located = make_polyline([(0, 0), (10, 0), (10, 10)])
    result = offset_trail(1.0, located)
    assert not result.value.closed
    assert np.allclose(result.loc, [0, -1])
    assert np.allclose(trail_end(result), [11, 10])
    # Two legs plus a two-segment miter.
    assert len(result.value) == 4


def test_bevel_join_in_trail():
    located = make_polyline([(0, 0), (10, 0), (10, 10)])
    result = offset_trail(1.0, located, OffsetOpts(join=LineJoin.BEVEL))
    assert len(result.value) == 3
    assert np.allclose(result.value.segments[1].offset(), [1, 1])


def test_closed_square_offset_outward():
    square = make_rect(size=(1.0, 1.0))
    result = offset_trail(0.25, square, OffsetOpts(join=LineJoin.MITER))
    assert result.value.closed
    assert len(result.value) == 12
    lo, hi = _bbox(result)
    assert np.allclose(lo, [-0.75, -0.75])
    assert np.allclose(hi, [0.75, 0.75])


def test_closed_square_offset_inward_stays_closed():
    square = make_rect(size=(2.0, 2.0))
    result = offset_trail(-0.25, square)
    assert result.value.closed
    assert np.allclose(result.value.offset(), [0, 0])
    lo, hi = _bbox(result)
    # Inner corners loop past the inset square but never leave the original.
    assert np.all(lo >= -1.0 - 1e-9)
    assert np.all(hi <= 1.0 + 1e-9)


def test_circle_offset_is_concentric():
    circle = make_circle(radius=2.0)
    result = offset_trail(1.0, circle, OffsetOpts(join=LineJoin.ROUND, epsilon=1e-4))
    assert result.value.closed
    pts = result.value.sample(start=result.loc, bezier_samples=16)
    assert np.allclose(np.linalg.norm(pts, axis=1), 3.0, atol=5e-3)


@pytest.mark.parametrize(
    "join, cap", list(itertools.product(list(LineJoin), list(LineCap)))
)
@pytest.mark.parametrize(
    "located",
    [
        make_polyline([(0, 0), (4, 3), (8, 0), (12, 3)]),
        make_curve((0, 0), (4, 6), (8, -6), (12, 0)),
    ],
    ids=["zigzag", "s-curve"],
)
def test_expand_outline_is_closed(located, join, cap):
    outline = expand_trail(0.5, located, ExpandOpts(join=join, cap=cap))
    assert outline.value.closed
    assert np.allclose(outline.value.offset(), [0, 0], atol=1e-9)
    backward = offset_trail(-0.5, located, OffsetOpts(join=join))
    assert np.allclose(outline.loc, backward.loc)


def test_expand_straight_line_with_butt_caps():
    outline = expand_trail(1.0, Located((0, 0), Trail.from_offsets([(10, 0)])))
    assert len(outline.value) == 4
    assert np.allclose(outline.loc, [0, 1])
    lo, hi = _bbox(outline)
    assert np.allclose(lo, [0, -1])
    assert np.allclose(hi, [10, 1])


@pytest.mark.parametrize("cap", [LineCap.ROUND, LineCap.SQUARE])
def test_expand_straight_line_caps_project(cap):
    outline = expand_trail(1.0, Located((0, 0), Trail.from_offsets([(10, 0)])), ExpandOpts(cap=cap))
    lo, hi = _bbox(outline, samples=64)
    assert lo[0] == pytest.approx(-1.0, abs=1e-3)
    assert hi[0] == pytest.approx(11.0, abs=1e-3)
    assert np.allclose([lo[1], hi[1]], [-1, 1], atol=1e-3)


def test_expand_closed_trail_bridges_seam():
    square = make_rect(size=(2.0, 2.0))
    outline = expand_trail(0.25, square, ExpandOpts(cap=LineCap.ROUND))
    assert outline.value.closed
    lo, hi = _bbox(outline)
    assert np.allclose(lo, [-1.25, -1.25])
    assert np.allclose(hi, [1.25, 1.25])
    # Straight connectors at the seam: no arcs from the round cap.
    assert all(isinstance(seg, Linear) for seg in outline.value.segments)


def test_paths_map_every_trail():
    path = Path.of(make_rect(), make_circle(radius=1.0, center=(5, 0)))
    assert len(offset_path(0.1, path)) == 2
    outlines = expand_path(0.1, path)
    assert len(outlines) == 2
    assert all(t.value.closed for t in outlines)


@pytest.mark.parametrize("r", [0.5, -1.5])
def test_offset_commutes_with_translation(r):
    located = make_curve((0, 0), (4, 6), (8, -6), (12, 0))
    shift = np.array([3.0, -7.0])
    moved = offset_trail(r, located.translate(shift))
    base = offset_trail(r, located)
    assert np.allclose(moved.loc, base.loc + shift)
    assert np.allclose(
        moved.value.sample(start=moved.loc),
        base.value.sample(start=base.loc) + shift,
    )


def test_degenerate_segments_are_skipped():
    located = Located((0, 0), Trail.from_offsets([(5, 0), (0, 0), (5, 0)]))
    result = offset_trail(1.0, located)
    assert len(result.value) == 2
    assert np.allclose(result.loc, [0, -1])
    assert np.allclose(trail_end(result), [10, -1])


def test_all_degenerate_trail_is_rejected():
    located = Located((0, 0), Trail.from_offsets([(0, 0), (0, 0)]))
    with pytest.raises(InvalidSegmentError):
        offset_trail(1.0, located)


def test_empty_trail():
    located = Located((3, 4), Trail.empty())
    result = offset_trail(1.0, located)
    assert result.value.is_empty
    assert np.allclose(result.loc, [3, 4])
    outline = expand_trail(1.0, located)
    assert outline.value.is_empty
    assert outline.value.closed


def test_options_validate():
    with pytest.raises(ValueError):
        OffsetOpts(epsilon=0.0)
    with pytest.raises(ValueError):
        ExpandOpts(miter_limit=0.5)
    with pytest.raises(ValueError):
        ExpandOpts(cap="pointy")
    assert ExpandOpts(join="round").offset_opts().join is LineJoin.ROUND
