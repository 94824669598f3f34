"""
machine.py
Stack machine driving the node hierarchy from tag events.

The machine owns no global state: everything lives in a ``ParserState``
value created per run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from health_export.core.exceptions import ConversionError
from health_export.loader import CloseTag, OpenTag, TagEvent
from health_export.logging import get_logger
from health_export.nodes.base import Node
from health_export.nodes.health_data import RootNode

log = get_logger(__name__)


@dataclass
class ParserState:
    """Current node plus its ancestors (``stack[-1]`` is the parent)."""

    root: RootNode
    current: Optional[Node] = None
    stack: List[Node] = field(default_factory=list)
    # element names, parallel to ``stack``; used for diagnostics only
    path: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.current is None:
            self.current = self.root

    @property
    def depth(self) -> int:
        return len(self.stack)


def open_tag(state: ParserState, tag: OpenTag) -> None:
    try:
        child = state.current.handle_child(tag)
    except Exception:
        log.error("failed on <%s> at /%s", tag.name, "/".join(state.path))
        raise

    state.stack.append(state.current)
    state.path.append(tag.name)
    state.current = child


def close_tag(state: ParserState, tag: CloseTag) -> None:
    if not state.stack:
        raise ConversionError(f"unbalanced </{tag.name}>: no open element")

    if tag.text and tag.text.strip():
        log.debug("text in <%s> ignored: %r", tag.name, tag.text.strip())

    parent = state.stack.pop()
    state.path.pop()
    state.current.on_close(parent)
    state.current = parent


def run_machine(events: Iterable[TagEvent], state: ParserState) -> RootNode:
    """
    Feed every event to the machine, one at a time, and return the root once
    the stream ends with all elements closed.
    """
    for event in events:
        if isinstance(event, OpenTag):
            open_tag(state, event)
        else:
            close_tag(state, event)

    if state.stack:
        raise ConversionError(
            f"stream ended with {state.depth} unclosed element(s): /{'/'.join(state.path)}"
        )
    return state.root
