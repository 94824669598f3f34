from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from health_export.logging import get_logger
from health_export.tables.table import Table, WorkoutTable

log = get_logger(__name__)

ACTIVITY_SUMMARIES = "activitySummaries"


@dataclass
class TableRegistry:
    """
    All tables of one conversion run, created lazily on first occurrence of
    their normalized type name. Never shared across runs.
    """

    records: Dict[str, Table] = field(default_factory=dict)
    workouts: Dict[str, WorkoutTable] = field(default_factory=dict)
    activity_summaries: Table = field(default_factory=lambda: Table(name=ACTIVITY_SUMMARIES))

    def record_table(self, type_name: str) -> Table:
        table = self.records.get(type_name)
        if table is None:
            log.debug("New record table '%s'", type_name)
            table = self.records[type_name] = Table(name=type_name)
        return table

    def workout_table(self, type_name: str) -> WorkoutTable:
        table = self.workouts.get(type_name)
        if table is None:
            log.debug("New workout table '%s'", type_name)
            table = self.workouts[type_name] = WorkoutTable(name=type_name)
        return table

    def row_count(self) -> int:
        return (
            sum(len(t) for t in self.records.values())
            + sum(len(t) for t in self.workouts.values())
            + len(self.activity_summaries)
        )
