"""
converter.py
Central conversion engine with full logging integration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from health_export.config import get_config
from health_export.core.exceptions import ConversionError
from health_export.core.issues import IssueLog
from health_export.loader import iter_tag_events
from health_export.loader.tag_events import ProgressCallback, Source
from health_export.logging import get_logger
from health_export.machine import ParserState, run_machine
from health_export.nodes.base import ConversionSession
from health_export.nodes.health_data import RootNode
from health_export.tables.registry import TableRegistry
from health_export.tables.table import Table, WorkoutTable


@dataclass
class ConversionResult:
    """Everything one completed run produced."""

    locale: Optional[str]
    export_date: Optional[str]
    profile: Dict[str, str]
    tables: TableRegistry
    issues: IssueLog
    seen_types: Dict[str, str] = field(default_factory=dict)

    @property
    def records(self) -> Dict[str, Table]:
        return self.tables.records

    @property
    def workouts(self) -> Dict[str, WorkoutTable]:
        return self.tables.workouts

    @property
    def activity_summaries(self) -> Table:
        return self.tables.activity_summaries

    def health_data(self) -> Dict[str, Any]:
        """Top-level fields that are not tables (``healthData.json``)."""
        return {
            "locale": self.locale,
            "exportDate": self.export_date,
            "me": dict(self.profile),
        }


class HealthExportConverter:
    """
    High-level converter:
      - streams tag events from the export
      - drives the stack machine over the node hierarchy
      - collects the finished tables into a ConversionResult
    """

    def __init__(self, config=None):
        self.cfg = config if config is not None else get_config()
        self.log = get_logger(__name__)
        self.log.debug("Converter engine initialized.")

    def run(self, source: Source, on_progress: Optional[ProgressCallback] = None) -> ConversionResult:
        """
        Full conversion of one export document.
        Returns: ConversionResult
        """
        if isinstance(source, (str, Path)):
            self.log.info(f"Converting export: {source}")

        session = ConversionSession()
        state = ParserState(root=RootNode(session))

        try:
            root = run_machine(iter_tag_events(source, on_progress), state)
        except Exception:
            self.log.exception("Conversion run failed.")
            raise

        health_data = root.health_data
        if health_data is None:
            raise ConversionError("document contains no <HealthData> element")

        result = ConversionResult(
            locale=health_data.locale,
            export_date=health_data.export_date,
            profile=dict(health_data.profile),
            tables=session.tables,
            issues=session.issues,
            seen_types=dict(session.seen_types),
        )

        self.log.info(
            "Conversion complete: %d record table(s), %d workout table(s), %d row(s), %d issue(s)",
            len(result.records),
            len(result.workouts),
            result.tables.row_count(),
            len(result.issues),
        )
        return result


def convert(source: Source, on_progress: Optional[ProgressCallback] = None) -> ConversionResult:
    """Convenience wrapper: one run with the default configuration."""
    return HealthExportConverter().run(source, on_progress)
