"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from collections import Counter
from collections.abc import Iterable

from rich.console import Console
from rich.table import Table
from rich.text import Text

from compassrule.core import ArcShape, EllipseShape, PropagationResult, SegmentShape, Shape, Snap
from compassrule.domain import Entity, Point2D, binding_to_dict

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def _fmt_point(point: Point2D) -> str:
    return f"({point.x:.3f}, {point.y:.3f})"


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    return f"{seconds:.2f}s"


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Compassrule[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_scene_info(scene_path: str, entities: Iterable[Entity]) -> None:
    """Print scene file and entity counts per kind.

    Args:
        scene_path: Path to the snapshot
        entities: Entities of the loaded scene
    """
    counts = Counter(entity.kind.value for entity in entities)
    line = Text("  ")
    line.append(scene_path)
    console.print(line)
    summary = f" {SYM_DOT} ".join(f"{n} {kind}" for kind, n in sorted(counts.items()))
    console.print(f"  {summary or 'empty scene'}")


def print_mutations(result: PropagationResult) -> None:
    """Print the batch as a table, one row per entity in application order."""
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("entity")
    table.add_column("kind")
    table.add_column("changes")

    for index, item in enumerate(result.mutations, start=1):
        changes = ", ".join(sorted(item.mutation.to_dict())) or "-"
        table.add_row(str(index), item.entity.id, item.entity.kind.value, changes)
    console.print(table)

    for point_id in result.degraded:
        console.print(f"  [yellow]{point_id}[/yellow] binding degraded to free point")
    for point_id in result.skipped:
        console.print(f"  [yellow]{point_id}[/yellow] kept in place, no intersection")


def print_snap(snap: Snap) -> None:
    """Print a resolved binding."""
    rule = binding_to_dict(snap.binding)
    details = " ".join(f"{key}={value}" for key, value in rule.items() if key != "type")
    console.print(f"  origin   {_fmt_point(snap.origin)}")
    console.print(f"  binding  [bold]{snap.binding.type.value}[/bold] {details}".rstrip())


def _describe_shape(shape: Shape) -> str:
    if isinstance(shape, EllipseShape):
        return f"ellipse {_fmt_point(shape.center)} r={shape.half_width:.3f}"
    if isinstance(shape, SegmentShape):
        return f"segment {_fmt_point(shape.start)} -> {_fmt_point(shape.end)}"
    if isinstance(shape, ArcShape):
        return (
            f"arc {_fmt_point(shape.center)} r={shape.radius:.1f} "
            f"{shape.angle_from:.3f}..{shape.angle_to:.3f}"
        )
    return "-"


def print_shapes(shapes: Iterable[tuple[Entity, Shape | None]]) -> None:
    """Print render descriptions as a table."""
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("entity")
    table.add_column("kind")
    table.add_column("shape")
    for entity, shape in shapes:
        table.add_row(entity.id, entity.kind.value, _describe_shape(shape) if shape else "-")
    console.print(table)


def print_success(message: str, elapsed_s: float, output_path: str | None = None) -> None:
    """Print success message with timing and optional output file."""
    console.print(
        f"\n[bold green]{SYM_OK} {message}[/bold green] in {_format_time(elapsed_s)}"
    )
    if output_path:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
