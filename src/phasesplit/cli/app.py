"""Main Typer application: entry point for the ``phasesplit`` CLI."""

from __future__ import annotations

import typer

from phasesplit import __version__
from phasesplit.cli.distribute import distribute_cmd
from phasesplit.cli.split import split_cmd

app = typer.Typer(
    name="phasesplit",
    help="Split load-test scripts across worker processes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("split", help="Split a test script into per-worker scripts.")(split_cmd)
app.command("distribute", help="Show how a whole-number total is shared across workers.")(
    distribute_cmd
)


def _version_callback(value: bool) -> None:
    """Print version and exit.

    Args:
        value: True if --version was passed.
    """
    if value:
        typer.echo(f"phasesplit {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """phasesplit: split load-test scripts across worker processes."""
