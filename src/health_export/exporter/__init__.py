"""
Exporter package.

Re-exports the export entry points used by the pipeline and the CLI.
"""

from __future__ import annotations

from .csv_exporter import parse_legend, table_to_csv
from .exporter import export_result, export_table
from .json_exporter import export_json

__all__ = [
    "export_json",
    "export_result",
    "export_table",
    "parse_legend",
    "table_to_csv",
]
