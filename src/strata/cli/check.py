"""Conformance check command: layer rules, platform isolation and coupling."""

from pathlib import Path
from typing import Optional

import typer

from ..api import analyze
from ..architecture.models import ReportStatus
from ..exceptions import StrataError
from ..formatters import FormatContext, RichFormatter, get_formatter
from ..logging_config import setup_logging, verbosity_from_flags
from . import app
from ._common import (
    EXIT_CLEAN,
    EXIT_ERROR,
    EXIT_VIOLATIONS,
    console,
    err_console,
    resolve_config,
)


@app.command()
def check(
    path: Optional[Path] = typer.Argument(
        None,
        help="Check a single module (relative to --root) instead of the whole source tree",
    ),
    graph: bool = typer.Option(
        False,
        "--graph",
        help="Print the module graph as Graphviz DOT",
    ),
    root: Path = typer.Option(
        Path("."),
        "-C",
        "--root",
        help="Project root the layer prefixes are relative to",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich, json or github (Actions annotations)",
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-n",
        help="Rows in the coupling table (default 15)",
        min=1,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Parallel extraction threads",
        min=1,
        max=32,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """
    Check that module dependencies respect the declared layer order.

    Exits 0 when clean, 1 when violations were found, 2 on errors.

    [bold cyan]Examples:[/bold cyan]

      strata check

      strata check runtime/dom.js

      strata check --graph --format json

      strata check --format github
    """
    logger = setup_logging(verbosity_from_flags(verbose, quiet))

    try:
        formatter = get_formatter(fmt)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--format")
    if isinstance(formatter, RichFormatter):
        formatter = RichFormatter(console)

    try:
        settings = resolve_config(
            config=config,
            root=root,
            top=top,
            workers=workers,
            verbose=verbose,
            quiet=quiet,
        )
        # strata.toml or STRATA_VERBOSITY may ask for a different level
        logger = setup_logging(settings.verbosity)
        # a relative target is taken relative to --root, not the working directory
        report = analyze(root, target=path, config=settings)
    except StrataError as e:
        err_console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(EXIT_ERROR)
    except Exception as e:
        logger.exception("Unexpected error")
        err_console.print(f"[red]Unexpected error:[/red] {e}", highlight=False)
        raise typer.Exit(EXIT_ERROR)

    formatter.render(report, FormatContext(config=settings, show_graph=graph))

    if report.status is ReportStatus.CLEAN:
        raise typer.Exit(EXIT_CLEAN)
    raise typer.Exit(EXIT_VIOLATIONS)
