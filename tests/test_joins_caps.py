from __future__ import annotations

import numpy as np
import pytest

from strokekit import LineCap, LineJoin, offset_segment
from strokekit.geometry import Linear, Located, Trail
from strokekit.offset import (
    cap_butt,
    cap_function,
    cap_round,
    cap_square,
    join_bevel,
    join_function,
    join_miter,
    join_round,
)


VERTEX = np.array([10.0, 0.0])


def _corner(r: float, second=(0.0, 10.0)) -> tuple[Located[Trail], Located[Trail]]:
    """Offsets of (0, 0) -> (10, 0) -> (10, 0) + second."""
    prev = offset_segment(1e-3, r, Linear((10, 0)))
    nxt = offset_segment(1e-3, r, Linear(second)).translate(VERTEX)
    return prev, nxt


def test_bevel_join_right_angle_scenario():
    prev, nxt = _corner(1.0)
    join = join_bevel(1.0, VERTEX, prev, nxt)
    assert len(join) == 1
    assert isinstance(join.segments[0], Linear)
    assert np.allclose(join.offset(), [1, 1])


@pytest.mark.parametrize("join", [join_bevel, join_round, join_miter])
@pytest.mark.parametrize("r", [1.0, -1.0, 2.5])
@pytest.mark.parametrize("second", [(0.0, 10.0), (0.0, -10.0), (-6.0, 3.0), (8.0, 1.0)])
def test_join_endpoint_continuity(join, r, second):
    prev, nxt = _corner(r, second)
    trail = join(r, VERTEX, prev, nxt)
    start = prev.end_point()
    assert np.allclose(start + trail.offset(), nxt.start_point())
    if not trail.is_empty:
        assert np.allclose(trail.sample(start=start)[0], start)


def test_round_join_follows_circle_on_outer_corner():
    prev, nxt = _corner(1.0)
    trail = join_round(1.0, VERTEX, prev, nxt)
    pts = trail.sample(start=prev.end_point(), bezier_samples=16)
    assert np.allclose(np.linalg.norm(pts - VERTEX, axis=1), 1.0, atol=1e-3)
    # A quarter turn fits in a single cubic.
    assert len(trail) == 1


def test_round_join_loops_on_inner_corner():
    prev, nxt = _corner(-1.0)
    trail = join_round(-1.0, VERTEX, prev, nxt)
    # Clockwise from the upper side of the first leg to the left of the second: three quarters.
    assert len(trail) == 3


def test_miter_join_meets_at_corner():
    prev, nxt = _corner(1.0)
    trail = join_miter(1.0, VERTEX, prev, nxt)
    assert len(trail) == 2
    tip = prev.end_point() + trail.segments[0].offset()
    assert np.allclose(tip, [11, -1])


def test_miter_join_bevels_inner_corner():
    prev, nxt = _corner(-1.0)
    trail = join_miter(-1.0, VERTEX, prev, nxt)
    assert len(trail) == 1


def test_miter_limit_falls_back_to_bevel():
    prev, nxt = _corner(1.0)
    assert len(join_miter(1.0, VERTEX, prev, nxt, miter_limit=1.2)) == 1
    assert len(join_miter(1.0, VERTEX, prev, nxt, miter_limit=1.5)) == 2


def test_joins_are_empty_when_ends_coincide():
    prev, nxt = _corner(1.0, second=(5.0, 0.0))
    for join in (join_bevel, join_round, join_miter):
        assert join(1.0, VERTEX, prev, nxt).is_empty


def test_join_function_selects_strategy():
    assert join_function(LineJoin.ROUND) is join_round
    assert join_function(LineJoin.BEVEL) is join_bevel
    prev, nxt = _corner(1.0)
    assert len(join_function(LineJoin.MITER, miter_limit=1.2)(1.0, VERTEX, prev, nxt)) == 1
    assert len(join_function("miter")(1.0, VERTEX, prev, nxt)) == 2


CENTER = np.array([0.0, 0.0])
FROM = np.array([0.0, 1.0])
TO = np.array([0.0, -1.0])


@pytest.mark.parametrize("cap", [cap_butt, cap_round, cap_square])
@pytest.mark.parametrize("r", [1.0, -1.0])
def test_cap_endpoint_continuity(cap, r):
    trail = cap(r, CENTER, FROM, TO)
    assert np.allclose(FROM + trail.offset(), TO)
    assert np.allclose(trail.sample(start=FROM)[0], FROM)


def test_butt_cap_is_straight():
    trail = cap_butt(1.0, CENTER, FROM, TO)
    assert trail.segments == (Linear((0, -2)),)


def test_round_cap_bulges_by_sign():
    ccw = cap_round(1.0, CENTER, FROM, TO).sample(start=FROM, bezier_samples=16)
    cw = cap_round(-1.0, CENTER, FROM, TO).sample(start=FROM, bezier_samples=16)
    assert ccw[:, 0].min() == pytest.approx(-1.0, abs=1e-3)
    assert cw[:, 0].max() == pytest.approx(1.0, abs=1e-3)
    assert np.allclose(np.linalg.norm(ccw, axis=1), 1.0, atol=1e-3)


def test_square_cap_projects_on_round_cap_side():
    trail = cap_square(1.0, CENTER, FROM, TO)
    pts = trail.sample(start=FROM)
    assert np.allclose(pts, [[0, 1], [-1, 1], [-1, -1], [0, -1]])
    flipped = cap_square(-1.0, CENTER, FROM, TO).sample(start=FROM)
    assert np.allclose(flipped, [[0, 1], [1, 1], [1, -1], [0, -1]])


def test_cap_function_selects_strategy():
    assert cap_function(LineCap.BUTT) is cap_butt
    assert cap_function(LineCap.ROUND) is cap_round
    assert cap_function("square") is cap_square
