"""
The document root and the HealthData container.

<!ELEMENT HealthData (ExportDate,Me,(Record|Correlation|Workout|ActivitySummary|ClinicalRecord)*)>
<!ATTLIST HealthData locale CDATA #REQUIRED>
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from health_export.core.exceptions import SchemaViolation
from health_export.loader import OpenTag
from health_export.logging import get_logger
from health_export.nodes.base import NOOP, ConversionSession, Handler, Node, SessionNode
from health_export.nodes.profile import ExportDateNode, PersonProfileNode
from health_export.nodes.record import QuantityRecordNode, write_clinical_record
from health_export.nodes.workout import WorkoutNode
from health_export.tables.fields import FieldKind, FieldSpec, write_fields

log = get_logger(__name__)


class HealthDataNode(SessionNode):
    element = "HealthData"

    def __init__(self, tag: OpenTag, session: ConversionSession) -> None:
        super().__init__(session)
        self.locale: Optional[str] = tag.attributes.get("locale")
        if self.locale is None:
            session.issues.missing_attribute(self.element, "locale", tag.attributes)

        self.export_date: Optional[str] = None
        self.profile: Dict[str, str] = {}

    def children(self) -> Mapping[str, Handler]:
        return {
            "ExportDate": self._export_date,
            "Me": self._me,
            "Record": self._record,
            "Workout": self._workout,
            "ActivitySummary": self._activity_summary,
            "ClinicalRecord": self._clinical_record,
            "Correlation": self._correlation,
        }

    def _export_date(self, tag: OpenTag) -> Node:
        node = ExportDateNode(tag, self.session)
        self.export_date = node.value
        return node

    def _me(self, tag: OpenTag) -> Node:
        node = PersonProfileNode(tag, self.session)
        self.profile = node.profile
        return node

    def _record(self, tag: OpenTag) -> Node:
        return QuantityRecordNode(tag, self.session)

    def _workout(self, tag: OpenTag) -> Node:
        return WorkoutNode(tag, self.session)

    def _activity_summary(self, tag: OpenTag) -> Node:
        """
        <!ELEMENT ActivitySummary EMPTY>
        dateComponents, activeEnergyBurned[Goal|Unit], appleMoveTime[Goal],
        appleExerciseTime[Goal], appleStandHours[Goal]; all #IMPLIED.
        """
        table = self.session.tables.activity_summaries
        table.append_row()
        write_fields(
            table,
            [FieldSpec(key, FieldKind.AUTO) for key in tag.attributes],
            tag.attributes,
            element=tag.name,
            issues=self.session.issues,
        )
        return NOOP

    def _clinical_record(self, tag: OpenTag) -> Node:
        write_clinical_record(tag, self.session)
        return NOOP

    def _correlation(self, tag: OpenTag) -> Node:
        # Records nested in a correlation also appear as top-level records.
        log.debug("skipping Correlation %s", tag.attributes.get("type"))
        return NOOP


class RootNode(SessionNode):
    """The synthetic document node; its only legal child is HealthData."""

    element = "(document)"
    rigid = True

    def __init__(self, session: Optional[ConversionSession] = None) -> None:
        super().__init__(session or ConversionSession())
        self.health_data: Optional[HealthDataNode] = None

    def children(self) -> Mapping[str, Handler]:
        return {"HealthData": self._health_data}

    def _health_data(self, tag: OpenTag) -> Node:
        if self.health_data is not None:
            raise SchemaViolation("document has more than one <HealthData> element")
        self.health_data = HealthDataNode(tag, self.session)
        return self.health_data
