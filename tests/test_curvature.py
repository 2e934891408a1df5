from __future__ import annotations

import numpy as np
import pytest

from strokekit.geometry import Cubic, Cusp, Finite, Infinite, Linear, arc_between, radius_of_curvature
from strokekit.geometry.curvature import curvature


def _quarter_arc(clockwise: bool) -> Cubic:
    end = (0.0, -2.0) if clockwise else (0.0, 2.0)
    (segment,) = arc_between((0, 0), (2, 0), end, clockwise=clockwise).segments
    return segment


def test_linear_is_infinite():
    assert radius_of_curvature(Linear((3, 4)), 0.5) == Infinite()


def test_collinear_cubic_is_infinite():
    assert isinstance(radius_of_curvature(Cubic((1, 0), (2, 0), (3, 0)), 0.5), Infinite)


def test_cusp_is_detected():
    cubic = Cubic((10, 10), (0, 10), (10, 0))
    assert radius_of_curvature(cubic, 0.5) == Cusp()
    assert curvature(cubic, 0.5) == float("inf")


def test_counter_clockwise_arc_has_positive_radius():
    roc = radius_of_curvature(_quarter_arc(clockwise=False), 0.5)
    assert isinstance(roc, Finite)
    assert roc.radius == pytest.approx(2.0, rel=1e-2)


def test_clockwise_arc_has_negative_radius():
    roc = radius_of_curvature(_quarter_arc(clockwise=True), 0.5)
    assert isinstance(roc, Finite)
    assert roc.radius == pytest.approx(-2.0, rel=1e-2)
    assert roc.magnitude == pytest.approx(2.0, rel=1e-2)


def test_curvature_is_reciprocal_radius():
    segment = _quarter_arc(clockwise=False)
    roc = radius_of_curvature(segment, 0.3)
    assert curvature(segment, 0.3) == pytest.approx(1.0 / roc.radius)
    assert curvature(Linear((1, 0)), 0.3) == 0.0


def test_radius_matches_parabola():
    # y = x^2 on [0, 1] has radius 0.5 at the vertex.
    cubic = Cubic((1 / 3, 0), (2 / 3, 1 / 3), (1, 1))
    roc = radius_of_curvature(cubic, 0.0)
    assert isinstance(roc, Finite)
    assert roc.radius == pytest.approx(0.5)
    assert np.isfinite(roc.radius)
