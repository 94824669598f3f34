"""
Per-field transformations from element attributes to table cells.

Every column a node writes is declared as a ``FieldSpec`` whose ``kind`` says
how the raw attribute string becomes a cell value:

    COPY      verbatim string
    NUMBER    int / float, anything else is malformed
    AUTO      number when the string is numeric, otherwise the string
    QUANTITY  number when numeric, otherwise a dedup id (category values)
    LOOKUP    dedup id of the string
    OFFSET    milliseconds from the element's ``startDate`` to this timestamp

``transform`` returns a ``FieldResult`` tagged with a status, so callers can
tell "absent" from "present but unparseable" without sniffing values.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from dateutil.parser import isoparse

from health_export.core.issues import IssueLog
from health_export.tables.table import Table


class FieldKind(str, Enum):
    COPY = "copy"
    NUMBER = "number"
    AUTO = "auto"
    QUANTITY = "quantity"
    LOOKUP = "lookup"
    OFFSET = "offset"


class FieldStatus(str, Enum):
    OK = "ok"
    ABSENT = "absent"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class FieldSpec:
    column: str
    kind: FieldKind = FieldKind.COPY
    source: Optional[str] = None
    required: bool = False

    @property
    def attribute(self) -> str:
        return self.source or self.column


@dataclass(frozen=True)
class FieldResult:
    status: FieldStatus
    value: Any = None
    lookup: bool = False

    @property
    def ok(self) -> bool:
        return self.status is FieldStatus.OK


ABSENT = FieldResult(FieldStatus.ABSENT)
MALFORMED = FieldResult(FieldStatus.MALFORMED)

EXPORT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"


# ---------------------------------------------------------------------------
# Scalar parsers
# ---------------------------------------------------------------------------

def parse_number(raw: Optional[str]) -> Optional[float | int]:
    """
    Parse a numeric attribute. Integral strings stay ``int`` so CSV cells read
    ``72`` rather than ``72.0``. Non-finite values count as unparseable.
    """
    if raw is None:
        return None
    text = raw.strip()
    # int() and float() also take Python literals such as "1_000"
    if not text or "_" in text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


@lru_cache(maxsize=65536)
def parse_timestamp(raw: Optional[str]) -> Optional[datetime]:
    """
    Parse an export timestamp (``2019-10-09 19:14:38 -0700``) or a full ISO 8601
    date-time. Partial values (``5``, ``10:30``, ``2024``) are rejected rather
    than completed from the current date. Naive timestamps are taken as UTC.
    """
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    try:
        parsed = datetime.strptime(text, EXPORT_TIMESTAMP_FORMAT)
    except ValueError:
        if ":" not in text:
            return None
        try:
            parsed = isoparse(text)
        except (ValueError, OverflowError):
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def offset_ms(start: datetime, end: datetime) -> int:
    """Milliseconds from ``start`` to ``end``; negative when ``end`` is earlier."""
    return round((end - start).total_seconds() * 1000)


# ---------------------------------------------------------------------------
# Transformation
# ---------------------------------------------------------------------------

def transform(
    spec: FieldSpec,
    attributes: Mapping[str, str],
    start: Optional[datetime] = None,
) -> FieldResult:
    raw = attributes.get(spec.attribute)
    if raw is None:
        return ABSENT

    kind = spec.kind

    if kind is FieldKind.COPY:
        return FieldResult(FieldStatus.OK, raw)

    if kind is FieldKind.LOOKUP:
        return FieldResult(FieldStatus.OK, raw, lookup=True)

    if kind is FieldKind.NUMBER:
        number = parse_number(raw)
        return MALFORMED if number is None else FieldResult(FieldStatus.OK, number)

    if kind is FieldKind.AUTO:
        number = parse_number(raw)
        return FieldResult(FieldStatus.OK, raw if number is None else number)

    if kind is FieldKind.QUANTITY:
        number = parse_number(raw)
        if number is None:
            return FieldResult(FieldStatus.OK, raw, lookup=True)
        return FieldResult(FieldStatus.OK, number)

    if kind is FieldKind.OFFSET:
        moment = parse_timestamp(raw)
        if start is None:
            return ABSENT
        if moment is None:
            return MALFORMED
        return FieldResult(FieldStatus.OK, offset_ms(start, moment))

    raise ValueError(f"unhandled field kind {kind!r}")


def write_fields(
    table: Table,
    specs: Iterable[FieldSpec],
    attributes: Mapping[str, str],
    *,
    element: str,
    issues: IssueLog,
    start: Optional[datetime] = None,
) -> None:
    """
    Apply ``specs`` to ``attributes`` and write the results into the current
    row of ``table``. Missing required fields and malformed values are
    reported to ``issues`` and leave the column unset.
    """
    for spec in specs:
        result = transform(spec, attributes, start)
        if result.ok:
            table.set_column(spec.column, result.value, lookup=result.lookup)
        elif result.status is FieldStatus.MALFORMED or spec.required:
            issues.missing_attribute(element, spec.attribute, attributes)
