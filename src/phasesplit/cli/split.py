"""``phasesplit split``: partition a test script into per-worker scripts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from phasesplit._internal.config import PhaseSplitConfig, load_config
from phasesplit._internal.errors import PhaseSplitError
from phasesplit._internal.logging import setup_logging
from phasesplit.loader import dump_script, load_script
from phasesplit.partition import divide_work
from phasesplit.phases.classify import classify_phase

if TYPE_CHECKING:
    from phasesplit._internal.types import Script

console = Console(stderr=True)

_FORMATS = ("yaml", "json")
_EXTENSIONS = {"yaml": "yml", "json": "json"}


def _make_worker_table(worker_script: Script) -> Table:
    """Build a Rich table listing one worker's phases.

    Args:
        worker_script: An annotated worker script.

    Returns:
        Formatted Rich Table.
    """
    phases = worker_script["config"]["phases"]
    first = phases[0] if phases else {}
    table = Table(
        title=f"Worker {first.get('worker', '?')}/{first.get('totalWorkers', '?')}",
        show_header=True,
        header_style="bold cyan",
        expand=True,
    )
    table.add_column("#", justify="right")
    table.add_column("Phase", style="bold")
    table.add_column("Load")

    for i, raw in enumerate(phases, start=1):
        table.add_row(str(i), str(raw.get("name", "")), classify_phase(raw).describe())

    return table


def split_cmd(
    script_file: Path = typer.Argument(
        ...,
        help="Path to the test script (.yml, .yaml or .json).",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    workers: int | None = typer.Option(
        None,
        "--workers",
        "-w",
        help="Number of workers to split across (default: PHASESPLIT_WORKERS or CPU count - 1).",
        min=1,
    ),
    out_dir: Path | None = typer.Option(
        None,
        "--out-dir",
        "-o",
        help="Directory to write one script file per worker into.",
    ),
    fmt: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output file format: yaml or json (default: PHASESPLIT_OUTPUT_FORMAT or yaml).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Emit log records as one-line JSON objects.",
    ),
) -> None:
    """Split a test script into per-worker scripts and show the result."""
    if fmt is not None and fmt not in _FORMATS:
        msg = f"Unknown format: {fmt}. Choose from: {', '.join(_FORMATS)}"
        raise typer.BadParameter(msg)

    setup_logging(logging.DEBUG if verbose else logging.INFO, json_format=json_logs)

    try:
        # Environment settings are only read for values not given on the command line.
        needs_config = workers is None or (out_dir is not None and fmt is None)
        config = load_config() if needs_config else PhaseSplitConfig(default_workers=1)
        num_workers = workers if workers is not None else config.default_workers
        output_format = fmt or config.output_format
        script = load_script(script_file)
        worker_scripts = divide_work(script, num_workers)
    except PhaseSplitError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    console.print(
        Panel(
            f"[bold]Script:[/bold]    {script_file.name}\n"
            f"[bold]Requested:[/bold] {num_workers} workers\n"
            f"[bold]Active:[/bold]    {len(worker_scripts)} workers",
            title="phasesplit",
            border_style="cyan",
        )
    )

    if not worker_scripts:
        console.print("[yellow]No phase generates load; no worker scripts produced.[/yellow]")
        return

    for worker_script in worker_scripts:
        console.print(_make_worker_table(worker_script))

    if out_dir is None:
        return

    extension = _EXTENSIONS[output_format]
    try:
        for index, worker_script in enumerate(worker_scripts, start=1):
            path = dump_script(worker_script, out_dir / f"worker-{index}.{extension}")
            console.print(f"[green]Wrote:[/green] {path}")
    except PhaseSplitError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
