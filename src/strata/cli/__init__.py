"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="strata",
    help="Strata - layered architecture conformance checker",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .check import check as _check  # noqa: F401, E402
from .layers import layers as _layers  # noqa: F401, E402


def main() -> None:
    app()
