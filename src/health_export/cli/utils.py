
from __future__ import annotations

import time
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, DownloadColumn, Progress, TextColumn, TimeRemainingColumn

from health_export.converter import ConversionResult, HealthExportConverter

console = Console(stderr=True)


def load_export(path: Path, *, verbose: bool = False) -> ConversionResult:
    """
    Convert one export file, with a byte-level progress bar when verbose.
    """
    if not path.exists():
        raise FileNotFoundError(path)

    t0 = time.perf_counter()
    converter = HealthExportConverter()

    if verbose:
        with Progress(
            TextColumn("[bold]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TimeRemainingColumn(),
            console=console,
        ) as progress:
            task = progress.add_task(path.name, total=path.stat().st_size)
            result = converter.run(
                path,
                on_progress=lambda done, total: progress.update(task, completed=done, total=total),
            )
    else:
        result = converter.run(path)

    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Converted export in {elapsed:.2f}s")

    return result
