"""Layer table command, showing the effective configuration."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..architecture.layers import validate_layers
from ..exceptions import StrataError
from ..logging_config import setup_logging
from . import app
from ._common import EXIT_ERROR, console, err_console, resolve_config


@app.command()
def layers(
    root: Path = typer.Option(
        Path("."),
        "-C",
        "--root",
        help="Project root searched for strata.toml",
        exists=True,
        file_okay=False,
        dir_okay=True,
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
):
    """Print the layer table, platform APIs and any configuration warnings."""
    setup_logging("quiet")

    try:
        settings = resolve_config(config=config, root=root)
    except StrataError as e:
        err_console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(EXIT_ERROR)

    table = Table(title="Layers", show_header=True, header_style="bold")
    table.add_column("Layer")
    table.add_column("Level", justify="right")
    table.add_column("Prefixes")
    table.add_column("Isolated")
    for layer in sorted(settings.layers, key=lambda item: item.level):
        table.add_row(
            layer.name,
            str(layer.level),
            escape(", ".join(layer.path_prefixes)),
            "[magenta]yes[/magenta]" if layer.isolated else "no",
        )
    console.print(table)

    console.print(f"Platform APIs: {', '.join(settings.platform_apis)}", highlight=False)
    console.print(f"Package roots: {', '.join(settings.package_roots)}", highlight=False)

    warnings = validate_layers(settings.layers, settings.platform_apis)
    if warnings:
        console.print()
        for warning in warnings:
            console.print(f"[yellow]warning:[/yellow] {escape(warning)}", highlight=False)
    else:
        console.print("[green]Layer table is consistent[/green]")
