from __future__ import annotations

from pathlib import Path as FilePath
from typing import Iterable

import numpy as np
from rich.console import Console

from strokekit.geometry.located import Located
from strokekit.geometry.trail import Path, Trail


class PreviewBackendError(RuntimeError):
    """Raised when a preview backend cannot run."""


def trail_points(located: Located[Trail], bezier_samples: int = 32, z: float = 0.0) -> np.ndarray:
    """Sample a located trail into an (N, 3) array on the plane ``z``."""
    pts = located.value.sample(start=located.loc, bezier_samples=bezier_samples)
    if located.value.closed and pts.shape[0] > 1 and not np.allclose(pts[0], pts[-1]):
        pts = np.vstack([pts, pts[0]])
    return np.column_stack([pts, np.full((pts.shape[0], 1), float(z))])


def _import_pyvista():
    try:
        import pyvista as pv
    except ImportError as exc:  # pragma: no cover - runtime dep
        raise PreviewBackendError(
            "PyVista is required for previewing. Install strokekit with `pip install -e .`."
        ) from exc
    return pv


def path_to_polydata(path: Path | Iterable[Located[Trail]], bezier_samples: int = 32, z: float = 0.0):
    """Return a PolyData with one polyline cell per trail."""

    pv = _import_pyvista()
    trails = list(path)
    if not trails:
        raise PreviewBackendError("Cannot convert an empty path.")
    points = []
    cells = []
    offset = 0
    for located in trails:
        pts = trail_points(located, bezier_samples=bezier_samples, z=z)
        points.append(pts)
        cells.append(np.concatenate([[pts.shape[0]], np.arange(offset, offset + pts.shape[0])]))
        offset += pts.shape[0]
    poly = pv.PolyData()
    poly.points = np.vstack(points)
    poly.lines = np.concatenate(cells).astype(np.int64)
    return poly


class PathPreviewer:
    """Draw an original path and its offset or outline with PyVista."""

    def __init__(self, console: Console | None = None, bezier_samples: int = 48):
        self.console = console
        self.bezier_samples = bezier_samples
        self._pv = None

    def _ensure_backend(self):
        if self._pv is None:
            pv = _import_pyvista()
            pv.set_plot_theme("document")
            self._pv = pv
        return self._pv

    def build_plotter(self, original: Path, result: Path, off_screen: bool = False):
        pv = self._ensure_backend()
        plotter = pv.Plotter(off_screen=off_screen)
        plotter.set_background("#090c10", top="#1b2333")
        plotter.add_mesh(
            path_to_polydata(original, self.bezier_samples),
            name="original",
            color="#6ab0ff",
            line_width=2.0,
        )
        plotter.add_mesh(
            path_to_polydata(result, self.bezier_samples),
            name="result",
            color="#f58f7c",
            line_width=2.0,
        )
        plotter.view_xy()
        return plotter

    def show(self, original: Path, result: Path, screenshot_path: FilePath | None = None) -> None:
        plotter = self.build_plotter(original, result, off_screen=screenshot_path is not None)
        try:
            if screenshot_path is not None:
                screenshot_path.parent.mkdir(parents=True, exist_ok=True)
                plotter.show(screenshot=str(screenshot_path))
                if self.console is not None:
                    self.console.print(f"[green]Saved screenshot to {screenshot_path}[/green]")
            else:
                plotter.show()
        finally:
            plotter.close()
