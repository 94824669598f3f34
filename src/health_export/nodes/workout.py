"""
Workout nodes.

<!ELEMENT Workout ((MetadataEntry|WorkoutEvent|WorkoutRoute)*)>
<!ATTLIST Workout
  workoutActivityType   CDATA #REQUIRED
  duration              CDATA #IMPLIED
  durationUnit          CDATA #IMPLIED
  totalDistance         CDATA #IMPLIED
  totalDistanceUnit     CDATA #IMPLIED
  totalEnergyBurned     CDATA #IMPLIED
  totalEnergyBurnedUnit CDATA #IMPLIED
  sourceName            CDATA #REQUIRED
  sourceVersion         CDATA #IMPLIED
  device                CDATA #IMPLIED
  creationDate          CDATA #IMPLIED
  startDate             CDATA #REQUIRED
  endDate               CDATA #REQUIRED
>
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from health_export.loader import OpenTag
from health_export.nodes.base import NOOP, ConversionSession, Handler, Node, SessionNode
from health_export.nodes.classify import classify_workout
from health_export.nodes.record import write_metadata_entry
from health_export.tables.fields import (
    FieldKind,
    FieldSpec,
    FieldStatus,
    parse_timestamp,
    transform,
    write_fields,
)

WORKOUT_FIELDS = (
    FieldSpec("startDate", required=True),
    FieldSpec("endDate", FieldKind.OFFSET, required=True),
    FieldSpec("creationDate", FieldKind.OFFSET),
    FieldSpec("duration", FieldKind.NUMBER),
    FieldSpec("durationUnit"),
    FieldSpec("totalDistance", FieldKind.NUMBER),
    FieldSpec("totalDistanceUnit"),
    FieldSpec("totalEnergyBurned", FieldKind.NUMBER),
    FieldSpec("totalEnergyBurnedUnit"),
    FieldSpec("sourceName", FieldKind.LOOKUP, required=True),
    FieldSpec("sourceVersion"),
    FieldSpec("device", FieldKind.LOOKUP),
)

ROUTE_FIELDS = (
    FieldSpec("sourceName", required=True),
    FieldSpec("sourceVersion"),
    FieldSpec("startDate", required=True),
    FieldSpec("endDate", FieldKind.OFFSET, required=True),
    FieldSpec("creationDate", FieldKind.OFFSET),
)
ROUTE_FIELD_NAMES = frozenset(spec.attribute for spec in ROUTE_FIELDS)


class WorkoutNode(SessionNode):
    element = "Workout"

    def __init__(self, tag: OpenTag, session: ConversionSession) -> None:
        super().__init__(session)
        attrs = tag.attributes

        self.type = classify_workout(attrs.get("workoutActivityType"), session.seen_types)
        self.table = session.tables.workout_table(self.type)
        self.table.append_row()

        write_fields(
            self.table,
            WORKOUT_FIELDS,
            attrs,
            element=self.element,
            issues=session.issues,
            start=parse_timestamp(attrs.get("startDate")),
        )

    def children(self) -> Mapping[str, Handler]:
        return {
            "MetadataEntry": self._metadata_entry,
            "WorkoutEvent": self._event,
            "WorkoutRoute": self._route,
        }

    def _metadata_entry(self, tag: OpenTag) -> Node:
        write_metadata_entry(self.table, tag, self.session)
        return NOOP

    def _event(self, tag: OpenTag) -> Node:
        self.table.events.append(dict(tag.attributes))
        return NOOP

    def _route(self, tag: OpenTag) -> Node:
        return WorkoutRouteNode(tag, self.session)

    def add_route(self, route: Dict[str, Any]) -> None:
        self.table.routes.append(route)


class WorkoutRouteNode(SessionNode):
    """
    <!ELEMENT WorkoutRoute ((MetadataEntry|FileReference)*)>

    Built as a flat mapping. Known fields come first; every later key
    (other attributes, metadata entries, file references) is only written
    if not already present.
    """

    element = "WorkoutRoute"

    def __init__(self, tag: OpenTag, session: ConversionSession) -> None:
        super().__init__(session)
        attrs = tag.attributes
        self.route: Dict[str, Any] = {}

        start = parse_timestamp(attrs.get("startDate"))
        for spec in ROUTE_FIELDS:
            result = transform(spec, attrs, start)
            if result.ok:
                self.route[spec.column] = result.value
            elif result.status is FieldStatus.MALFORMED or spec.required:
                session.issues.missing_attribute(self.element, spec.attribute, attrs)

        for key, value in attrs.items():
            if key not in ROUTE_FIELD_NAMES:
                self.route.setdefault(key, value)

    def children(self) -> Mapping[str, Handler]:
        return {
            "MetadataEntry": self._metadata_entry,
            "FileReference": self._file_reference,
        }

    def _metadata_entry(self, tag: OpenTag) -> Node:
        key = tag.attributes.get("key")
        if key is None:
            self.session.issues.missing_attribute(tag.name, "key", tag.attributes)
        else:
            self.route.setdefault(key, tag.attributes.get("value"))
        return NOOP

    def _file_reference(self, tag: OpenTag) -> Node:
        path = tag.attributes.get("path")
        if path is None:
            self.session.issues.missing_attribute(tag.name, "path", tag.attributes)
        else:
            self.route.setdefault("FileReference", path)
        return NOOP

    def on_close(self, parent: Node) -> None:
        if isinstance(parent, WorkoutNode):
            parent.add_route(self.route)
