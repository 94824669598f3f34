"""
Record-level nodes: quantity/category records, their heart-rate sample lists,
and attribute-only clinical records.

<!ELEMENT Record ((MetadataEntry|HeartRateVariabilityMetadataList)*)>
<!ATTLIST Record
  type          CDATA #REQUIRED
  unit          CDATA #IMPLIED
  value         CDATA #IMPLIED
  sourceName    CDATA #REQUIRED
  sourceVersion CDATA #IMPLIED
  device        CDATA #IMPLIED
  creationDate  CDATA #IMPLIED
  startDate     CDATA #REQUIRED
  endDate       CDATA #REQUIRED
>
"""

from __future__ import annotations

from typing import Mapping, Optional

from health_export.loader import OpenTag
from health_export.nodes.base import NOOP, ConversionSession, Handler, Node, SessionNode
from health_export.nodes.classify import classify_record
from health_export.tables.fields import (
    FieldKind,
    FieldSpec,
    parse_number,
    parse_timestamp,
    write_fields,
)
from health_export.tables.table import Table

RECORD_FIELDS = (
    FieldSpec("unit"),
    FieldSpec("startDate", required=True),
    FieldSpec("endDate", FieldKind.OFFSET, required=True),
    FieldSpec("creationDate", FieldKind.OFFSET),
    FieldSpec("sourceName", FieldKind.LOOKUP, required=True),
    FieldSpec("sourceVersion"),
    FieldSpec("device", FieldKind.LOOKUP),
    FieldSpec("value", FieldKind.QUANTITY),
)

CLINICAL_FIELDS = (
    FieldSpec("identifier", required=True),
    FieldSpec("sourceName", FieldKind.LOOKUP, required=True),
    FieldSpec("sourceURL"),
    FieldSpec("fhirVersion"),
    FieldSpec("receivedDate"),
    FieldSpec("resourceFilePath"),
)


def write_metadata_entry(
    table: Table,
    tag: OpenTag,
    session: ConversionSession,
) -> None:
    """
    <!ELEMENT MetadataEntry EMPTY>
    <!ATTLIST MetadataEntry key CDATA #REQUIRED value CDATA #REQUIRED>
    """
    key = tag.attributes.get("key")
    if key is None:
        session.issues.missing_attribute(tag.name, "key", tag.attributes)
        return
    table.set_column(key, tag.attributes.get("value"))


class QuantityRecordNode(SessionNode):
    element = "Record"

    def __init__(self, tag: OpenTag, session: ConversionSession) -> None:
        super().__init__(session)
        attrs = tag.attributes

        self.type = classify_record(attrs.get("type"), session.seen_types)
        self.start_date: Optional[str] = attrs.get("startDate")

        self.table = session.tables.record_table(self.type)
        self.table.append_row()

        write_fields(
            self.table,
            RECORD_FIELDS,
            attrs,
            element=self.element,
            issues=session.issues,
            start=parse_timestamp(self.start_date),
        )

    def children(self) -> Mapping[str, Handler]:
        return {
            "MetadataEntry": self._metadata_entry,
            "HeartRateVariabilityMetadataList": self._hrv_list,
        }

    def _metadata_entry(self, tag: OpenTag) -> Node:
        write_metadata_entry(self.table, tag, self.session)
        return NOOP

    def _hrv_list(self, tag: OpenTag) -> Node:
        return HeartRateVariabilityListNode(self)


class HeartRateVariabilityListNode(SessionNode):
    """
    <!ELEMENT HeartRateVariabilityMetadataList (InstantaneousBeatsPerMinute*)>
    <!ATTLIST InstantaneousBeatsPerMinute bpm CDATA #REQUIRED time CDATA #REQUIRED>
    """

    element = "HeartRateVariabilityMetadataList"

    def __init__(self, record: QuantityRecordNode) -> None:
        super().__init__(record.session)
        self.record = record

    def children(self) -> Mapping[str, Handler]:
        return {"InstantaneousBeatsPerMinute": self._beat}

    def _beat(self, tag: OpenTag) -> Node:
        # Non-numeric bpm readings are dropped without a report.
        self.record.table.add_sample(
            self.record.start_date,
            tag.attributes.get("time"),
            parse_number(tag.attributes.get("bpm")),
        )
        return NOOP


def write_clinical_record(tag: OpenTag, session: ConversionSession) -> None:
    """
    <!ELEMENT ClinicalRecord EMPTY>
    Attribute-only; one row in the table of its normalized type.
    """
    name = classify_record(tag.attributes.get("type"), session.seen_types)
    table = session.tables.record_table(name)
    table.append_row()
    write_fields(
        table,
        CLINICAL_FIELDS,
        tag.attributes,
        element=tag.name,
        issues=session.issues,
    )
