"""CLI application entry point for compassrule.

This module provides a developer CLI using Typer for inspecting scene
snapshots: dragging an entity and watching the batch, resolving where a
point would snap, and printing render descriptions.
"""

import time
from pathlib import Path
from typing import Annotated

import typer

from compassrule import __version__
from compassrule.cli.output import (
    console,
    print_error,
    print_header,
    print_mutations,
    print_scene_info,
    print_shapes,
    print_snap,
    print_step,
    print_success,
)
from compassrule.config import CompassruleSettings, LoggingConfig, SnappingConfig
from compassrule.core import ConstructionDocument, describe as describe_entity
from compassrule.domain import PointEntity, Rectangle, Scene
from compassrule.exceptions import CompassruleError, SnapshotLoadError, SnapshotSaveError
from compassrule.io import SceneReader, SceneWriter

# Create the Typer app
app = typer.Typer(
    name="compassrule",
    help="Inspect straightedge-and-compass constructions stored as scene snapshots.",
    add_completion=False,
    no_args_is_help=True,
)

SceneArgument = Annotated[
    Path,
    typer.Argument(help="Path to a JSON scene snapshot", show_default=False),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option("--log-file", help="Write detailed logs to file"),
]
LogLevelOption = Annotated[
    str,
    typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
]
QuietOption = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Minimal console output"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Compassrule[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Inspect straightedge-and-compass constructions."""


def _load_scene(scene_path: Path, quiet: bool) -> Scene:
    if not quiet:
        print_step("Loading scene")
    scene = SceneReader(scene_path).load()
    if not quiet:
        print_scene_info(str(scene_path), scene.values())
    return scene


def _settings(
    log_file: Path | None,
    log_level: str,
    quiet: bool,
    min_distance: float | None = None,
) -> CompassruleSettings:
    snapping = SnappingConfig() if min_distance is None else SnappingConfig(min_distance=min_distance)
    return CompassruleSettings(
        snapping=snapping,
        logging=LoggingConfig(log_file=log_file, log_level=log_level, quiet=quiet),
    )


@app.command()
def drag(
    scene_path: SceneArgument,
    entity_id: Annotated[str, typer.Argument(help="Id of the entity to drag", show_default=False)],
    dx: Annotated[float, typer.Option("--dx", help="Horizontal shift")] = 0.0,
    dy: Annotated[float, typer.Option("--dy", help="Vertical shift")] = 0.0,
    release: Annotated[
        bool,
        typer.Option("--release", help="Re-snap a dragged point after moving it"),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output path (default: {name}-moved.json)"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show the batch without writing a snapshot"),
    ] = False,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Drag an entity by (dx, dy), propagate, and save the updated scene.

    Example:
        compassrule drag scene.json P2 --dx -1 --dy 1
    """
    start_time = time.time()
    try:
        if not quiet:
            print_header(__version__)
        scene = _load_scene(scene_path, quiet)
        document = ConstructionDocument(_settings(log_file, log_level, quiet), scene)

        result = document.drag(entity_id, dx, dy)
        if not quiet:
            print_step(f"Dragged {entity_id} by ({dx}, {dy})")
            print_mutations(result)

        if release:
            if not isinstance(document.get(entity_id), PointEntity):
                print_error(f"Only points can be released: {entity_id}")
                raise typer.Exit(code=1)
            snap = document.release(entity_id)
            if not quiet:
                print_step(f"Released {entity_id}")
                print_snap(snap)

        if dry_run:
            if not quiet:
                print_success("Dry run complete", time.time() - start_time)
            return

        output_path = output or SceneWriter.get_output_path(scene_path)
        SceneWriter(document.scene, output_path).save()
        if not quiet:
            print_success("Scene saved", time.time() - start_time, str(output_path))

    except SnapshotLoadError as e:
        print_error(f"Could not load scene: {e.reason}")
        raise typer.Exit(code=1)
    except SnapshotSaveError as e:
        print_error(f"Could not save scene: {e.reason}")
        raise typer.Exit(code=1)
    except CompassruleError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def snap(
    scene_path: SceneArgument,
    x: Annotated[float, typer.Argument(help="Cursor x", show_default=False)],
    y: Annotated[float, typer.Argument(help="Cursor y", show_default=False)],
    min_distance: Annotated[
        float | None,
        typer.Option("--min-distance", "-d", help="Snapping threshold", min=1.0, max=200.0),
    ] = None,
    quiet: QuietOption = False,
) -> None:
    """Show where a point placed at (x, y) would snap.

    Example:
        compassrule snap scene.json 1 1
    """
    try:
        scene = _load_scene(scene_path, quiet)
        document = ConstructionDocument(_settings(None, "WARNING", True, min_distance), scene)

        if not quiet:
            print_step(f"Resolving ({x}, {y})")
        print_snap(document.snap(x, y))

        reuse = document.point_near(x, y)
        if reuse is not None:
            console.print(f"  reuses   {reuse.id}")

    except SnapshotLoadError as e:
        print_error(f"Could not load scene: {e.reason}")
        raise typer.Exit(code=1)


@app.command()
def describe(
    scene_path: SceneArgument,
    entity_id: Annotated[
        str | None,
        typer.Option("--entity", "-e", help="Only describe this entity"),
    ] = None,
    viewport: Annotated[
        tuple[float, float, float, float],
        typer.Option("--viewport", help="Visible area as X Y WIDTH HEIGHT"),
    ] = (0.0, 0.0, 1000.0, 1000.0),
    quiet: QuietOption = False,
) -> None:
    """Print the render description of every entity.

    Example:
        compassrule describe scene.json --viewport -50 -50 100 100
    """
    try:
        scene = _load_scene(scene_path, quiet)
        rect = Rectangle(*viewport)
        render = CompassruleSettings().render

        if entity_id is not None:
            entities = [scene.require(entity_id)]
        else:
            entities = list(scene.values())

        if not quiet:
            print_step("Shapes")
        print_shapes((entity, describe_entity(entity, rect, render)) for entity in entities)

    except SnapshotLoadError as e:
        print_error(f"Could not load scene: {e.reason}")
        raise typer.Exit(code=1)
    except CompassruleError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
