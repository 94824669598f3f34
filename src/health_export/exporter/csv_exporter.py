"""
csv_exporter.py
Line-oriented CSV encoding of a Table.

Layout, newline-joined:

    _0, Hauke's Apple Watch        <- one legend line per dedup id
    _1, iPhone
    unit,startDate,endDate,...     <- header
    count/min,2019-10-09 ...,0,... <- one line per row

Cells never contain commas or line breaks: direct string values were
substituted when written, dedup'd values are ids. Legend values are the
originals with backslashes and line breaks backslash-escaped; split a legend
line on the first ``", "`` and unescape the value to read it back.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Tuple

from health_export.logging import get_logger
from health_export.tables.table import Table, csv_safe

log = get_logger(__name__)

LEGEND_SEPARATOR = ", "

_LEGEND_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r"}
_LEGEND_UNESCAPES = {"\\": "\\", "n": "\n", "r": "\r"}
_ESCAPED = re.compile(r"\\(.)", re.DOTALL)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def escape_legend_value(value: str) -> str:
    return "".join(_LEGEND_ESCAPES.get(char, char) for char in value)


def unescape_legend_value(text: str) -> str:
    return _ESCAPED.sub(lambda m: _LEGEND_UNESCAPES.get(m.group(1), m.group(0)), text)


def iter_csv_lines(table: Table) -> Iterator[str]:
    for ident, value in table.dedup.legend():
        yield f"{ident}{LEGEND_SEPARATOR}{escape_legend_value(value)}"
    yield ",".join(csv_safe(column) for column in table.header)
    for cells in table.values():
        yield ",".join(_cell(c) for c in cells)


def table_to_csv(table: Table) -> str:
    return "\n".join(iter_csv_lines(table))


def parse_legend(text: str) -> Tuple[Dict[str, str], List[str]]:
    """
    Split CSV text into its legend (id -> original value) and the remaining
    lines (header first). Used to read exported files back.
    """
    legend: Dict[str, str] = {}
    lines = text.split("\n")
    index = 0
    for index, line in enumerate(lines):
        ident, sep, value = line.partition(LEGEND_SEPARATOR)
        if not sep or not ident.startswith("_") or not ident[1:].isdigit():
            break
        legend[ident] = unescape_legend_value(value)
    else:
        index = len(lines)
    return legend, lines[index:]


def export_table_csv(table: Table, output_path: str | Path) -> bool:
    """
    Write ``table`` as CSV. Tables without rows produce no file.
    Returns True if a file was written.
    """
    if not table.rows:
        log.debug("Skipping CSV for empty table '%s'", table.name)
        return False

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", encoding="utf-8", newline="") as f:
        f.write(table_to_csv(table))

    log.debug("Wrote %s (%d rows)", output_path, len(table.rows))
    return True
