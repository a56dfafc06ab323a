"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from planform.core import bounding_box, signed_area
from planform.domain import Fragment, Polygon, SubtractResult, UnionResult

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Fallback warning
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Planform[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_scene_info(path: str, entity_count: int, kinds: list[str]) -> None:
    """Print scene document information.

    Args:
        path: Path to the scene document
        entity_count: Number of entities in the document
        kinds: Shape kind of each entity, in document order
    """
    line = Text("  ")
    line.append(path)
    console.print(line)
    console.print(f"  {entity_count} entities {SYM_DOT} {', '.join(kinds)}")


def _polygon_table(title: str, polygons: list[Polygon]) -> Table:
    table = Table(title=title, title_justify="left", show_edge=False, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("vertices", justify="right")
    table.add_column("area", justify="right")
    table.add_column("bounds")
    for index, polygon in enumerate(polygons):
        min_x, min_y, max_x, max_y = bounding_box(polygon)
        table.add_row(
            str(index),
            str(len(polygon)),
            f"{abs(signed_area(polygon)):.2f}",
            f"({min_x:.2f}, {min_y:.2f}) – ({max_x:.2f}, {max_y:.2f})",
        )
    return table


def print_subtract_result(result: SubtractResult, verbose: bool) -> None:
    """Print a subtraction summary.

    Args:
        result: Subtraction result
        verbose: Whether to list every island and hole
    """
    console.print(f"  {len(result.polygons)} islands {SYM_DOT} {len(result.holes)} holes")
    if result.fallback:
        print_fallback_notice("subtract")
    if verbose:
        if result.polygons:
            console.print(_polygon_table("  Islands", result.polygons))
        if result.holes:
            console.print(_polygon_table("  Holes", result.holes))


def print_union_result(result: UnionResult, verbose: bool) -> None:
    """Print a union summary.

    Args:
        result: Union result
        verbose: Whether to list the outline and holes
    """
    console.print(f"  {len(result.points)} vertices {SYM_DOT} {len(result.holes)} holes")
    if result.fallback:
        print_fallback_notice("union")
    if verbose and result.points:
        console.print(_polygon_table("  Outline", [result.points]))
        if result.holes:
            console.print(_polygon_table("  Holes", result.holes))


def print_fragments(fragments: list[Fragment], verbose: bool, base: int) -> None:
    """Print a multi-cutter subtraction summary for one base shape.

    Args:
        fragments: Fragments left after all cuts
        verbose: Whether to list every fragment
        base: Document index of the base shape
    """
    hole_count = sum(len(f.holes) for f in fragments)
    console.print(f"  base {base}: {len(fragments)} fragments {SYM_DOT} {hole_count} holes")
    if verbose and fragments:
        console.print(_polygon_table(f"  Fragments of base {base}", [f.points for f in fragments]))


def print_fallback_notice(operation: str) -> None:
    """Print a notice that an operation returned its input unchanged.

    Args:
        operation: Name of the operation that fell back
    """
    console.print(
        f"  [yellow]{SYM_WARN} {operation} failed; the original shape was kept[/yellow]"
    )


def print_success(output_path: str, duration_s: float) -> None:
    """Print success message.

    Args:
        output_path: Path to the written result document
        duration_s: Total time in seconds
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {duration_s * 1000:.0f}ms")
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
