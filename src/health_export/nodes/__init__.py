"""
Node dispatch hierarchy for the export document.

    RootNode
      HealthDataNode
        ExportDateNode          (rigid)
        PersonProfileNode       (rigid, <Me>)
        QuantityRecordNode
          HeartRateVariabilityListNode
        WorkoutNode
          WorkoutRouteNode
        NOOP                    (leaves and skipped subtrees)
"""

from __future__ import annotations

from .base import NOOP, ConversionSession, Node, NoOpNode
from .classify import classify_record, classify_workout, normalize_type
from .health_data import HealthDataNode, RootNode
from .profile import ExportDateNode, PersonProfileNode
from .record import HeartRateVariabilityListNode, QuantityRecordNode
from .workout import WorkoutNode, WorkoutRouteNode

__all__ = [
    "NOOP",
    "ConversionSession",
    "ExportDateNode",
    "HealthDataNode",
    "HeartRateVariabilityListNode",
    "Node",
    "NoOpNode",
    "PersonProfileNode",
    "QuantityRecordNode",
    "RootNode",
    "WorkoutNode",
    "WorkoutRouteNode",
    "classify_record",
    "classify_workout",
    "normalize_type",
]
