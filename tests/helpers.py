from __future__ import annotations

import numpy as np

from strokekit.geometry import Located, Trail


def trail_end(located: Located[Trail]) -> np.ndarray:
    return located.loc + located.value.offset()


def distance_to_polyline(point: np.ndarray, polyline: np.ndarray) -> float:
    """Distance from a point to the nearest segment of a sampled polyline."""
    a = polyline[:-1]
    b = polyline[1:]
    ab = b - a
    denom = np.einsum("ij,ij->i", ab, ab)
    denom[denom == 0] = 1.0
    t = np.clip(np.einsum("ij,ij->i", point - a, ab) / denom, 0.0, 1.0)
    nearest = a + ab * t[:, None]
    return float(np.min(np.linalg.norm(nearest - point, axis=1)))
