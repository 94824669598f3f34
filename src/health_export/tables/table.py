# src/health_export/tables/table.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from health_export.core.exceptions import TableError
from health_export.tables.dedup import DedupDictionary

# Characters that would break the line/comma CSV encoding, and what replaces them.
CSV_SUBSTITUTES = {",": "|", "\n": " ", "\r": " "}

TIME_SERIES_HEADER = ("Date", "Time", "Value")

Row = Dict[str, Any]


def csv_safe(value: Any) -> Any:
    """Rewrite delimiter characters in string values; other values pass through."""
    if not isinstance(value, str):
        return value
    for char, substitute in CSV_SUBSTITUTES.items():
        if char in value:
            value = value.replace(char, substitute)
    return value


@dataclass
class Table:
    """
    Columnar, append-only accumulation of all rows of one normalized type.

    Rows are kept as ``{column: value}`` mappings and projected onto the
    header only when serialized, so columns first seen on a later row never
    shift or backfill earlier rows.

    Attributes:
        name: Normalized type name (``HeartRate``, ``Running``, ...).
        header: Column names in first-seen order. Append-only, no duplicates.
        rows: One mapping per record, in document order.
        dedup: Dictionary for columns written with ``lookup=True``.
        time_series: Optional sub-table of per-sample readings.
    """

    name: str
    header: List[str] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)
    dedup: DedupDictionary = field(default_factory=DedupDictionary)
    time_series: Optional["Table"] = None

    _index: Dict[str, int] = field(default_factory=dict, init=False, repr=False)

    # ------------------------------------------------------------------ #
    # Building
    # ------------------------------------------------------------------ #

    def append_row(self) -> Row:
        """Start a new, empty row. The previous row is final from here on."""
        row: Row = {}
        self.rows.append(row)
        return row

    def column_index(self, column: str) -> int:
        """Return the fixed index of ``column``, appending it if unseen."""
        index = self._index.get(column)
        if index is None:
            index = len(self.header)
            self.header.append(column)
            self._index[column] = index
        return index

    def set_column(self, column: str, value: Any, lookup: bool = False) -> None:
        """
        Write ``value`` into the current (last) row.

        ``None`` means absent: no column is created and nothing is written.
        With ``lookup`` the cell holds the value's dedup id instead.
        """
        if value is None:
            return
        if not self.rows:
            raise TableError(f"{self.name}: set_column('{column}') before any row was appended")

        self.column_index(column)
        if lookup:
            self.rows[-1][column] = self.dedup.lookup(str(value))
        else:
            self.rows[-1][column] = csv_safe(value)

    def ensure_time_series(self) -> "Table":
        if self.time_series is None:
            self.time_series = Table(name=f"{self.name}.bpm")
            for column in TIME_SERIES_HEADER:
                self.time_series.column_index(column)
        return self.time_series

    def add_sample(self, date: Optional[str], time: Optional[str], value: Any) -> None:
        """Append one ``(Date, Time, Value)`` reading to the time-series sub-table."""
        series = self.ensure_time_series()
        if value is None:
            return
        series.append_row()
        series.set_column("Date", date)
        series.set_column("Time", time)
        series.set_column("Value", value)

    # ------------------------------------------------------------------ #
    # Projection
    # ------------------------------------------------------------------ #

    def project(self, row: Row) -> List[Any]:
        """Positional cells for ``row``; trailing unset columns are omitted."""
        if not row:
            return []
        width = max(self._index[column] for column in row) + 1
        cells: List[Any] = [None] * width
        for column, value in row.items():
            cells[self._index[column]] = value
        return cells

    def values(self) -> List[List[Any]]:
        return [self.project(row) for row in self.rows]

    def column(self, column: str) -> List[Any]:
        """All values of one column, ``None`` where a row left it unset."""
        return [row.get(column) for row in self.rows]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "header": list(self.header),
            "values": self.values(),
            "abbr": self.dedup.as_mapping(),
        }
        if self.time_series is not None:
            data["timeSeries"] = self.time_series.to_dict()
        return data

    def __len__(self) -> int:
        return len(self.rows)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<Table {self.name} rows={len(self.rows)} columns={len(self.header)}>"


@dataclass(repr=False)
class WorkoutTable(Table):
    """
    A workout type's table plus its ancillary lists.

    ``events`` holds WorkoutEvent attribute bags verbatim; ``routes`` holds
    one flat mapping per WorkoutRoute.
    """

    events: List[Dict[str, str]] = field(default_factory=list)
    routes: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["events"] = [dict(event) for event in self.events]
        data["routes"] = [dict(route) for route in self.routes]
        return data

