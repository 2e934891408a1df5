from __future__ import annotations

import importlib.util
import pathlib
import sys
import traceback
import warnings
from types import ModuleType
from typing import Callable, TypeVar

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from strokekit._config import StrokeSettings, get_stroke_settings, normalize_cap, normalize_join
from strokekit.geometry.located import Located
from strokekit.geometry.trail import Path, Trail
from strokekit.offset.options import LineCap, LineJoin
from strokekit.offset.trail import expand_path, offset_path
from strokekit.preview import PathPreviewer, PreviewBackendError
from strokekit.validation import ToleranceWarning, ValidationError

T = TypeVar("T")

console = Console()
app = typer.Typer(help="Offset and stroke 2D paths built by Python model modules.")


class ModelBuildError(RuntimeError):
    """Raised when a model module cannot provide a usable path."""


def _load_module(path: pathlib.Path) -> ModuleType:
    module_name = "strokekit_user_model"
    if module_name in sys.modules:
        del sys.modules[module_name]

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise typer.BadParameter(f"Unable to import model at {path}")

    module = importlib.util.module_from_spec(spec)
    # Register module so features relying on sys.modules (e.g., dataclasses) work.
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


def _format_exception(exc: BaseException) -> str:
    return "".join(traceback.format_exception(exc))


def coerce_path(scene: object) -> Path:
    """Accept a Path, a located trail, or an iterable of located trails."""

    if isinstance(scene, Path):
        return scene
    if isinstance(scene, Located) and isinstance(scene.value, Trail):
        return Path.of(scene)
    if isinstance(scene, (list, tuple)):
        trails: list[Located[Trail]] = []
        for item in scene:
            trails.extend(coerce_path(item).trails)
        return Path(trails=tuple(trails))
    raise ModelBuildError(
        "Model build() must return a Path, a located Trail, or a list of located trails."
    )


def _path_factory_from_module(model_path: pathlib.Path) -> Callable[[], Path]:
    def factory() -> Path:
        module = _load_module(model_path)
        builder = getattr(module, "build", None)
        if builder is None or not callable(builder):
            raise ModelBuildError(f"{model_path} must define a callable build() function.")
        return coerce_path(builder())

    return factory


def _build_model(model: pathlib.Path) -> Path:
    if not model.exists():
        raise typer.BadParameter(f"Model path {model} does not exist.")
    try:
        return _path_factory_from_module(model)()
    except ModelBuildError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except Exception as exc:
        console.print(Panel.fit(_format_exception(exc), title="Model build failed", style="red"))
        raise typer.BadParameter(f"Model execution failed: {exc}") from exc


def _resolve_join(value: str | None) -> LineJoin | None:
    if value is None:
        return None
    join = normalize_join(value)
    if join is None:
        raise typer.BadParameter(f"Unknown join style '{value}'. Use miter, round or bevel.")
    return join


def _resolve_cap(value: str | None) -> LineCap | None:
    if value is None:
        return None
    cap = normalize_cap(value)
    if cap is None:
        raise typer.BadParameter(f"Unknown cap style '{value}'. Use butt, round or square.")
    return cap


def _build_opts(build: Callable[[], T]) -> T:
    try:
        return build()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _run(label: str, operation: Callable[[], Path]) -> Path:
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", ToleranceWarning)
        try:
            result = operation()
        except ValidationError as exc:
            raise typer.BadParameter(f"{label} failed: {exc}") from exc
    for warning in caught:
        if issubclass(warning.category, ToleranceWarning):
            console.print(f"[yellow]{warning.message}[/yellow]")
        else:
            warnings.warn(warning.message, warning.category, stacklevel=2)
    return result


def _log_settings(settings: StrokeSettings, join: LineJoin, cap: LineCap | None, epsilon: float) -> None:
    parts = [f"join={join.value}"]
    if cap is not None:
        parts.append(f"cap={cap.value}")
    parts.append(f"epsilon={epsilon:g}")
    parts.append(f"miter_limit={settings.miter_limit:g}")
    console.print(f"[magenta]Settings: {', '.join(parts)}.[/magenta]")


def summarize_path(path: Path, title: str) -> Table:
    table = Table(title=title)
    table.add_column("trail", justify="right")
    table.add_column("segments", justify="right")
    table.add_column("start")
    table.add_column("end")
    table.add_column("closed")
    for index, located in enumerate(path):
        start = located.start_point()
        end = located.end_point()
        table.add_row(
            str(index),
            str(len(located.value)),
            f"({start[0]:.4g}, {start[1]:.4g})",
            f"({end[0]:.4g}, {end[1]:.4g})",
            "yes" if located.value.closed else "no",
        )
    return table


@app.command()
def offset(
    model: pathlib.Path = typer.Argument(..., help="Python module whose build() returns a path."),
    distance: float = typer.Option(..., "--distance", "-r", help="Signed offset; positive is right of travel."),
    join: str | None = typer.Option(None, "--join", help="Join style: miter, round or bevel."),
    epsilon: float | None = typer.Option(None, "--epsilon", min=0.0, help="Allowed deviation from the true offset."),
) -> None:
    """
    Offset every trail of the model's path and print a summary.
    """

    settings = get_stroke_settings()
    opts = _build_opts(lambda: settings.offset_opts(join=_resolve_join(join), epsilon=epsilon))
    path = _build_model(model)
    console.rule("strokekit offset")
    _log_settings(settings, opts.join, None, opts.epsilon)
    result = _run("Offset", lambda: offset_path(distance, path, opts))
    console.print(summarize_path(result, f"Offset by {distance:g}"))


@app.command()
def expand(
    model: pathlib.Path = typer.Argument(..., help="Python module whose build() returns a path."),
    distance: float = typer.Option(..., "--distance", "-r", help="Half-width of the stroke."),
    join: str | None = typer.Option(None, "--join", help="Join style: miter, round or bevel."),
    cap: str | None = typer.Option(None, "--cap", help="Cap style: butt, round or square."),
    epsilon: float | None = typer.Option(None, "--epsilon", min=0.0, help="Allowed deviation from the true offset."),
) -> None:
    """
    Expand every trail of the model's path into a closed stroke outline.
    """

    settings = get_stroke_settings()
    opts = _build_opts(
        lambda: settings.expand_opts(join=_resolve_join(join), cap=_resolve_cap(cap), epsilon=epsilon)
    )
    path = _build_model(model)
    console.rule("strokekit expand")
    _log_settings(settings, opts.join, opts.cap, opts.epsilon)
    result = _run("Expand", lambda: expand_path(distance, path, opts))
    console.print(summarize_path(result, f"Outline of half-width {distance:g}"))


@app.command()
def preview(
    model: pathlib.Path = typer.Argument(..., help="Python module whose build() returns a path."),
    distance: float = typer.Option(..., "--distance", "-r", help="Offset distance or stroke half-width."),
    mode: str = typer.Option("expand", "--mode", help="Either 'offset' or 'expand'."),
    join: str | None = typer.Option(None, "--join", help="Join style: miter, round or bevel."),
    cap: str | None = typer.Option(None, "--cap", help="Cap style (expand mode only)."),
    screenshot: pathlib.Path | None = typer.Option(
        None, "--screenshot", help="Render off-screen and save a screenshot instead of opening a window."
    ),
) -> None:
    """
    Open a PyVista window showing the model's path and its offset or outline.
    """

    if mode not in {"offset", "expand"}:
        raise typer.BadParameter("mode must be 'offset' or 'expand'.")
    settings = get_stroke_settings()
    path = _build_model(model)
    if mode == "offset":
        offset_opts = settings.offset_opts(join=_resolve_join(join))
        result = _run("Offset", lambda: offset_path(distance, path, offset_opts))
    else:
        expand_opts = settings.expand_opts(join=_resolve_join(join), cap=_resolve_cap(cap))
        result = _run("Expand", lambda: expand_path(distance, path, expand_opts))

    console.print(f"Using model [green]{model}[/green]")
    previewer = PathPreviewer(console=console)
    try:
        previewer.show(path, result, screenshot_path=screenshot)
    except PreviewBackendError as exc:
        raise typer.BadParameter(str(exc)) from exc


def main() -> None:
    app()


if __name__ == "__main__":
    main()
