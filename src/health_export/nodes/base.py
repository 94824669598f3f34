"""
Base node types for the export dispatch hierarchy.

A node interprets the children of one element in its structural position.
``handle_child`` is called for every open tag directly below the element and
returns the node that will interpret the child's own children; ``on_close``
is called when the element closes, with the parent node.

Each node declares its recognized children as an explicit mapping from
element name to handler. What happens to an unrecognized child depends on
the position:

* rigid positions (document root, ExportDate, Me) raise ``SchemaViolation``;
* open positions log an ``UnknownExtension`` and skip the child's subtree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping

from health_export.core.exceptions import SchemaViolation
from health_export.core.issues import IssueLog
from health_export.loader import OpenTag
from health_export.logging import get_logger
from health_export.tables.registry import TableRegistry

log = get_logger(__name__)

Handler = Callable[[OpenTag], "Node"]


@dataclass
class ConversionSession:
    """State shared by every node of one conversion run."""

    tables: TableRegistry = field(default_factory=TableRegistry)
    issues: IssueLog = field(default_factory=IssueLog)
    # raw type string -> normalized name, in first-seen order
    seen_types: Dict[str, str] = field(default_factory=dict)


class Node:
    element = "?"
    rigid = False

    def children(self) -> Mapping[str, Handler]:
        return {}

    def handle_child(self, tag: OpenTag) -> "Node":
        handler = self.children().get(tag.name)
        if handler is None:
            return self.unknown_child(tag)
        return handler(tag)

    def unknown_child(self, tag: OpenTag) -> "Node":
        if self.rigid:
            raise SchemaViolation(
                f"unknown <{tag.name}> in <{self.element}> {dict(tag.attributes)}"
            )
        self.session.issues.unknown_extension(self.element, tag.name, tag.attributes)
        return NOOP

    def on_close(self, parent: "Node") -> None:
        pass

    @property
    def session(self) -> ConversionSession:
        raise NotImplementedError(f"{type(self).__name__} has no session")

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<{type(self).__name__} {self.element}>"


class SessionNode(Node):
    """A node bound to the run's shared session."""

    def __init__(self, session: ConversionSession) -> None:
        self._session = session

    @property
    def session(self) -> ConversionSession:
        return self._session


class NoOpNode(Node):
    """
    Leaf elements and skipped subtrees. Every descendant maps back to this
    node, so nested events are discarded without further dispatch.
    """

    element = "(skipped)"

    def handle_child(self, tag: OpenTag) -> "Node":
        return self


NOOP = NoOpNode()


class RigidLeafNode(SessionNode):
    """An attribute-only element at a rigid position: any child is fatal."""

    rigid = True
