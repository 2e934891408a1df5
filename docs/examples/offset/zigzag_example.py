"""Offset a zigzag polyline.

Run with:
  strokekit preview docs/examples/offset/zigzag_example.py -r 0.5 --mode offset --join miter
"""

from __future__ import annotations

from strokekit.geometry import make_polyline


def build():
    return make_polyline([(0, 0), (4, 3), (8, 0), (12, 3), (16, 0)])


if __name__ == "__main__":
    build()
