from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from health_export.cli.utils import load_export
from health_export.config import get_config
from health_export.exporter import export_result

console = Console(stderr=True)


def convert_command(
    export_xml: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Output directory (default: paths.output_dir from config)",
    ),
    pretty: bool = typer.Option(
        True,
        "--pretty/--compact",
        help="Pretty-print JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show progress and rich logging",
    ),
):
    """
    Convert an export.xml into per-type JSON and CSV tables.
    """
    cfg = get_config()
    out_dir = out or Path(cfg.paths.get("output_dir", "data"))

    result = load_export(export_xml, verbose=verbose)

    if verbose:
        console.log(f"Exporting tables to {out_dir}")

    written = export_result(result, out_dir, indent=cfg.export.get("indent", 2) if pretty else 0)

    if result.issues:
        console.print(f"[yellow]{len(result.issues)} recoverable issue(s):[/yellow] {result.issues.counts()}")

    console.print(f"[green]Wrote {len(written)} file(s) to {out_dir}[/green]")
