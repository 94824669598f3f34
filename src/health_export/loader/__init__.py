# src/health_export/loader/__init__.py

"""
Public interface for the export loader.

Intended usage from other parts of the project and tests:

    from health_export.loader import OpenTag, CloseTag, iter_tag_events
"""

from __future__ import annotations

from .tag_events import CloseTag, OpenTag, TagEvent, iter_tag_events

__all__ = [
    "CloseTag",
    "OpenTag",
    "TagEvent",
    "iter_tag_events",
]
