from __future__ import annotations

from .dedup import DedupDictionary
from .fields import FieldKind, FieldResult, FieldSpec, FieldStatus, transform, write_fields
from .registry import ACTIVITY_SUMMARIES, TableRegistry
from .table import TIME_SERIES_HEADER, Table, WorkoutTable, csv_safe

__all__ = [
    "ACTIVITY_SUMMARIES",
    "DedupDictionary",
    "FieldKind",
    "FieldResult",
    "FieldSpec",
    "FieldStatus",
    "TIME_SERIES_HEADER",
    "Table",
    "TableRegistry",
    "WorkoutTable",
    "csv_safe",
    "transform",
    "write_fields",
]
