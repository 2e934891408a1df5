"""Offset a circle outwards and inwards.

Run with:
  strokekit offset docs/examples/offset/circle_example.py -r 0.25
"""

from __future__ import annotations

from strokekit.geometry import Path, make_circle, make_rect


def build():
    return Path.of(make_circle(radius=2.0), make_rect(size=(6.0, 6.0)))


if __name__ == "__main__":
    build()
