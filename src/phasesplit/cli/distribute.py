"""``phasesplit distribute``: show how a whole-number total is shared out."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from phasesplit._internal.errors import PhaseSplitError
from phasesplit.distribute import distribute

console = Console(stderr=True)


def distribute_cmd(
    total: int = typer.Argument(..., help="Whole-number total to split, e.g. an arrival rate."),
    workers: int = typer.Argument(..., help="Number of workers to split across."),
) -> None:
    """Print the per-worker shares of TOTAL across WORKERS."""
    try:
        shares = distribute(total, workers)
    except PhaseSplitError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    typer.echo(" ".join(str(share) for share in shares))
