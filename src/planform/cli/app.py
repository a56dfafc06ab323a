"""CLI application entry point for planform.

This module provides the main CLI interface using Typer. Each command loads
a scene document, runs one boolean operation and writes the result as JSON.
"""

import time
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any

import typer

from planform import __version__
from planform.cli.output import (
    console,
    print_error,
    print_fragments,
    print_header,
    print_scene_info,
    print_step,
    print_subtract_result,
    print_success,
    print_union_result,
)
from planform.config import LoggingConfig, PlanformSettings
from planform.core import BooleanEngine
from planform.domain import Entity
from planform.exceptions import DocumentLoadError, DocumentSaveError, PlanformError
from planform.io import ResultWriter, SceneReader
from planform.utils import BooleanLogger, DiagnosticsLog, configure_logging

# Create the Typer app
app = typer.Typer(
    name="planform",
    help="Subtract and union plan-view shapes stored in JSON scene documents.",
    add_completion=False,
    no_args_is_help=True,
)

DocumentArg = Annotated[
    Path,
    typer.Argument(help="Path to a JSON scene document", show_default=False),
]
OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Output path (default: {name}-{command}.json)"),
]
DiagnosticsOption = Annotated[
    Path | None,
    typer.Option("--diagnostics", help="Write the engine's diagnostics log to this JSON file"),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option("--log-file", help="Write detailed logs to file"),
]
LogLevelOption = Annotated[
    str,
    typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Verbose console output"),
]
QuietOption = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Minimal console output"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Planform[/bold blue] v{__version__}")
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
    """Subtract and union plan-view shapes stored in JSON scene documents."""


@app.command()
def subtract(
    document: DocumentArg,
    subject: Annotated[
        int,
        typer.Option("--subject", "-s", help="Index of the shape to cut from", min=0),
    ] = 0,
    clip: Annotated[
        int,
        typer.Option("--clip", "-c", help="Index of the shape to remove", min=0),
    ] = 1,
    output: OutputOption = None,
    diagnostics: DiagnosticsOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Cut one shape out of another.

    Example:
        planform subtract scene.json --subject 0 --clip 1
    """

    def operation(engine: BooleanEngine, entities: list[Entity]) -> dict[str, Any]:
        result = engine.subtract(_entity_at(entities, subject), _entity_at(entities, clip))
        if not quiet:
            print_subtract_result(result, verbose)
        return {"operation": "subtract", **result.to_dict()}

    _execute("subtract", document, operation, output, diagnostics, log_file, log_level, verbose, quiet)


@app.command()
def union(
    document: DocumentArg,
    output: OutputOption = None,
    diagnostics: DiagnosticsOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Merge every shape in the document into one outline.

    Example:
        planform union scene.json -o merged.json
    """

    def operation(engine: BooleanEngine, entities: list[Entity]) -> dict[str, Any]:
        if len(entities) < 2:
            print_error(
                "Union needs at least two shapes",
                details=f"The document holds {len(entities)}.",
            )
            raise typer.Exit(code=1)
        result = engine.union(entities)
        if not quiet:
            print_union_result(result, verbose)
        return {"operation": "union", **result.to_dict()}

    _execute("union", document, operation, output, diagnostics, log_file, log_level, verbose, quiet)


@app.command()
def cut(
    document: DocumentArg,
    base: Annotated[
        list[int] | None,
        typer.Option(
            "--base",
            "-b",
            help="Index of a base shape (repeatable); all other shapes are cutters",
            min=0,
        ),
    ] = None,
    output: OutputOption = None,
    diagnostics: DiagnosticsOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Cut every other shape out of one or more base shapes.

    Each base is cut by all shapes that are not bases. Without --base the
    first shape is the only base.

    Example:
        planform cut scene.json --base 0 --base 2
    """
    base_indices = list(dict.fromkeys(base or [0]))

    def operation(engine: BooleanEngine, entities: list[Entity]) -> dict[str, Any]:
        bases = [_entity_at(entities, index) for index in base_indices]
        cutters = [e for i, e in enumerate(entities) if i not in base_indices]
        results = engine.subtract_bases(bases, cutters)
        if not quiet:
            for index, fragments in zip(base_indices, results):
                print_fragments(fragments, verbose, index)
        return {
            "operation": "cut",
            "bases": [
                {"base": index, "fragments": [f.to_dict() for f in fragments]}
                for index, fragments in zip(base_indices, results)
            ],
        }

    _execute("cut", document, operation, output, diagnostics, log_file, log_level, verbose, quiet)


def _entity_at(entities: list[Entity], index: int) -> Entity:
    """Get the entity at ``index`` or exit with an error.

    Args:
        entities: Entities loaded from the document
        index: Requested position

    Returns:
        The entity at that position
    """
    if index >= len(entities):
        print_error(
            f"No shape at index {index}",
            details=f"The document holds {len(entities)} shapes (indices start at 0).",
        )
        raise typer.Exit(code=1)
    return entities[index]


def _execute(
    name: str,
    document: Path,
    operation: Callable[[BooleanEngine, list[Entity]], dict[str, Any]],
    output: Path | None,
    diagnostics: Path | None,
    log_file: Path | None,
    log_level: str,
    verbose: bool,
    quiet: bool,
) -> None:
    """Load a document, run one operation and write its result.

    Args:
        name: Command name, used for messages and the default output path
        document: Scene document to load
        operation: Runs the boolean operation and returns the result payload
        output: Result path (derived from the document name if None)
        diagnostics: Optional path for the diagnostics log
        log_file: Optional log file
        log_level: Console log level
        verbose: Verbose console output
        quiet: Minimal console output
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    start = time.time()
    settings = PlanformSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    diagnostics_log = DiagnosticsLog(settings.logging.max_diagnostic_entries)
    engine = BooleanEngine(settings, BooleanLogger(logger, diagnostics_log))

    if not quiet:
        print_header(__version__)
        print_step("Loading scene")

    try:
        entities = SceneReader(document).load()

        if not quiet:
            print_scene_info(str(document), len(entities), [e.kind.value for e in entities])
            print_step(name.capitalize())

        payload = operation(engine, entities)

        output_path = output or ResultWriter.get_result_path(document, name)
        ResultWriter.write(output_path, payload)

        if diagnostics is not None:
            try:
                diagnostics_log.dump(diagnostics)
            except OSError as e:
                raise DocumentSaveError(str(diagnostics), str(e)) from e

        if not quiet:
            print_success(str(output_path), time.time() - start)

    except DocumentLoadError as e:
        print_error(f"Could not load document: {e.reason}")
        raise typer.Exit(code=1)
    except DocumentSaveError as e:
        print_error(f"Could not save document: {e.reason}")
        raise typer.Exit(code=1)
    except PlanformError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
