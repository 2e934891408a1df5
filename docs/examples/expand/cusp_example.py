"""Stroke a cubic with a cusp; the offsets round the cusp point.

Run with:
  strokekit preview docs/examples/expand/cusp_example.py -r 1.0 --cap square
"""

from __future__ import annotations

from strokekit.geometry import make_curve


def build():
    return make_curve((0, 0), (10, 10), (0, 10), (10, 0))


if __name__ == "__main__":
    build()
