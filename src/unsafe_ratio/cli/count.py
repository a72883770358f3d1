"""Count command: per-file and total unsafe statement ratios."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from .. import __version__
from ..analysis import UnsafeRatioAnalyzer
from ..exceptions import UnsafeRatioError
from ..formatters import DiagnosticRenderer, get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import err_console, resolve_config


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"unsafe-ratio {__version__}")
        raise typer.Exit()


@app.command()
def count(
    paths: Optional[List[Path]] = typer.Argument(
        None,
        help="Rust source files, or directories to search for *.rs files",
        show_default=False,
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: text, json, csv or rich",
    ),
    percent: Optional[bool] = typer.Option(
        None,
        "--percent/--no-percent",
        help="Append the unsafe percentage to text output",
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--no-strict",
        help="Exit with status 1 if any file could not be read or parsed",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        help="Number of threads used to scan files",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path (TOML format)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to this file"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """
    Print [cyan]path: unsafe/total[/cyan] for every file, then a [cyan]total:[/cyan] line.

    Files that cannot be read or parsed are reported on stderr and left out
    of the total.
    """
    if not paths:
        typer.echo("no input provided")
        raise typer.Exit(0)

    try:
        settings = resolve_config(
            config=config,
            output_format=output_format,
            percent=percent,
            strict=strict,
            workers=workers,
            verbose=verbose,
            quiet=quiet,
        )
    except UnsafeRatioError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)

    setup_logging(settings.verbosity, log_file=str(log_file) if log_file else None)

    run = UnsafeRatioAnalyzer(settings).analyze(paths)

    renderer = DiagnosticRenderer(err_console)
    for failure in run.failures:
        renderer.render(failure)

    get_formatter(settings.output_format, show_percent=settings.show_percent).render(run)

    if settings.strict and run.has_failures:
        raise typer.Exit(1)
