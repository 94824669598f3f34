"""
Type classification for records and workouts.

Raw type strings are vendor-prefixed identifiers; the normalized name is the
trailing semantic segment:

    HKQuantityTypeIdentifierHeartRate        -> HeartRate
    HKCategoryTypeIdentifierSleepAnalysis    -> SleepAnalysis
    HKDataTypeSleepDurationGoal              -> SleepDurationGoal
    HKWorkoutActivityTypeRunning             -> Running
"""

from __future__ import annotations

import re
from typing import Dict, Optional, Sequence

from health_export.core.exceptions import SchemaViolation
from health_export.logging import get_logger

log = get_logger(__name__)

RECORD_TYPE_PATTERNS = (
    re.compile(r"^HK.*TypeIdentifier(.+)$"),
    re.compile(r"^HK.*Type(.+)$"),
)

WORKOUT_TYPE_PATTERNS = (
    re.compile(r"^HK.*Type(.+)$"),
)


def normalize_type(raw: Optional[str], patterns: Sequence[re.Pattern], kind: str = "record") -> str:
    """Return the semantic suffix of ``raw``. Raises SchemaViolation if none matches."""
    if raw:
        for pattern in patterns:
            match = pattern.match(raw)
            if match:
                return match.group(1)
    raise SchemaViolation(f"unexpected {kind} type {raw!r}")


def classify(raw: Optional[str], patterns: Sequence[re.Pattern], seen: Dict[str, str], kind: str = "record") -> str:
    """
    Normalize ``raw`` and remember the first occurrence of each distinct raw
    type in ``seen``. Recording has no effect on the result.
    """
    if raw in seen:
        return seen[raw]

    name = normalize_type(raw, patterns, kind)
    seen[raw] = name
    log.info("found %s type '%s'", kind, raw)
    return name


def classify_record(raw: Optional[str], seen: Dict[str, str]) -> str:
    return classify(raw, RECORD_TYPE_PATTERNS, seen, "record")


def classify_workout(raw: Optional[str], seen: Dict[str, str]) -> str:
    return classify(raw, WORKOUT_TYPE_PATTERNS, seen, "workout")
