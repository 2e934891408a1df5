"""Stroke an S curve followed by a straight tail.

Run with:
  strokekit preview docs/examples/expand/s_curve_example.py -r 0.4 --cap round --join round
"""

from __future__ import annotations

from strokekit.geometry import Cubic, Linear, Located, Trail


def build():
    trail = Trail.from_segments(
        [
            Cubic((3, 5), (6, -5), (9, 0)),
            Linear((4, 0)),
        ]
    )
    return Located((0, 0), trail)


if __name__ == "__main__":
    build()
