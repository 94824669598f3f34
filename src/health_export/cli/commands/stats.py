
from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from health_export.cli.utils import load_export

console = Console()


def stats_command(
    export_xml: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show progress and rich logging",
    ),
):
    """
    Show per-table statistics for an export.xml without writing anything.
    """
    result = load_export(export_xml, verbose=verbose)

    table = Table(title="Export Tables")
    table.add_column("Table", style="bold")
    table.add_column("Kind")
    table.add_column("Rows", justify="right")
    table.add_column("Columns", justify="right")
    table.add_column("Abbr", justify="right")

    for name, t in result.records.items():
        table.add_row(name, "record", str(len(t)), str(len(t.header)), str(len(t.dedup)))
        if t.time_series is not None:
            table.add_row(f"{name}.bpm", "samples", str(len(t.time_series)), str(len(t.time_series.header)), "0")
    for name, t in result.workouts.items():
        table.add_row(name, "workout", str(len(t)), str(len(t.header)), str(len(t.dedup)))

    summaries = result.activity_summaries
    table.add_row(summaries.name, "summary", str(len(summaries)), str(len(summaries.header)), str(len(summaries.dedup)))

    console.print(table)

    issues = Table(title="Issues")
    issues.add_column("Kind", style="bold")
    issues.add_column("Count", justify="right")
    for kind, count in result.issues.counts().items():
        issues.add_row(kind, str(count))

    console.print(issues)
