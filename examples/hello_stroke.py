"""Example strokekit model that returns a simple open trail."""

from __future__ import annotations

from strokekit.geometry import make_curve


def build():
    """A single S-shaped cubic to exercise the offsetter."""

    return make_curve((0, 0), (4, 6), (8, -6), (12, 0))
