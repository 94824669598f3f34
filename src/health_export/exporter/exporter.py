"""
exporter.py
High-level export entry point.

This module provides the stable API used by the pipeline and the CLI:

    export_result(result, output_dir)

Layout under ``output_dir``:

    healthData.json                  locale, exportDate, me
    <Type>.json                      one per record type
    <Type>.bpm.json                  heart-rate sample sub-table, if any
    activitySummaries.json
    workouts/<Type>.json             table + events + routes
    csv/<Type>.csv, csv/<Type>.bpm.csv, csv/activitySummaries.csv,
    csv/workouts/<Type>.csv
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List

from health_export.config import get_config
from health_export.logging import get_logger
from health_export.tables.registry import ACTIVITY_SUMMARIES
from health_export.tables.table import Table

from .csv_exporter import export_table_csv
from .json_exporter import export_json

log = get_logger(__name__)

HEALTH_DATA_FILE = "healthData.json"


def export_table(table: Table, name: str, json_dir: Path, csv_dir: Path, indent: int | None) -> List[Path]:
    """Write ``<name>.json`` and, for non-empty tables, ``<name>.csv``."""
    written = [export_json(table.to_dict(), json_dir / f"{name}.json", indent=indent)]
    csv_path = csv_dir / f"{name}.csv"
    if export_table_csv(table, csv_path):
        written.append(csv_path)
    return written


def export_result(result: Any, output_dir: str | Path, *, config=None, indent: int | None = None) -> List[Path]:
    """
    Export every table of a completed ConversionResult.
    Returns the written paths in write order.
    """
    cfg = config if config is not None else get_config()
    if indent is None:
        indent = cfg.export.get("indent", 2)

    output_dir = Path(output_dir)
    csv_dir = output_dir / cfg.export.get("csv_subdir", "csv")
    workouts_subdir = cfg.export.get("workouts_subdir", "workouts")

    log.info(
        "Exporting to: %s (records=%d, workouts=%d, activitySummaries=%d)",
        output_dir,
        len(result.records),
        len(result.workouts),
        len(result.activity_summaries),
    )

    written: List[Path] = [
        export_json(result.health_data(), output_dir / HEALTH_DATA_FILE, indent=indent)
    ]

    written += export_table(result.activity_summaries, ACTIVITY_SUMMARIES, output_dir, csv_dir, indent)

    for name, table in result.records.items():
        written += export_table(table, name, output_dir, csv_dir, indent)
        if table.time_series is not None:
            written += export_table(table.time_series, f"{name}.bpm", output_dir, csv_dir, indent)
        log.info(f"saved '{name}'")

    for name, table in result.workouts.items():
        written += export_table(
            table,
            name,
            output_dir / workouts_subdir,
            csv_dir / workouts_subdir,
            indent,
        )
        log.info(f"saved workout '{name}'")

    log.info("Export complete. %d file(s) written", len(written))
    return written
