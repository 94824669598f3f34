# src/health_export/loader/tag_events.py

from __future__ import annotations

import io
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Iterator, Optional, Union

from lxml import etree

ProgressCallback = Callable[[int, int], None]
Source = Union[str, Path, bytes, BinaryIO]


@dataclass(frozen=True)
class OpenTag:
    """
    An open-tag event.

    Attributes:
        name: Local element name, e.g. "Record", "Workout", "MetadataEntry".
        attributes: Attribute map in document order.
    """
    name: str
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CloseTag:
    """
    A close-tag event.

    Attributes:
        name: Local element name.
        text: Non-attribute text content of the element (usually empty).
    """
    name: str
    text: str = ""


TagEvent = Union[OpenTag, CloseTag]


def _local_name(tag: str) -> str:
    """Strip an lxml ``{namespace}`` prefix if the export ever carries one."""
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return tag


def _source_size(handle: BinaryIO) -> int:
    try:
        return os.fstat(handle.fileno()).st_size
    except (AttributeError, OSError, io.UnsupportedOperation):
        pos = handle.tell()
        size = handle.seek(0, io.SEEK_END)
        handle.seek(pos)
        return size


def _iter_handle(handle: BinaryIO, on_progress: Optional[ProgressCallback]) -> Iterator[TagEvent]:
    total = _source_size(handle) if on_progress else 0
    last_pos = -1

    context = etree.iterparse(
        handle,
        events=("start", "end"),
        huge_tree=True,
        resolve_entities=False,
        remove_comments=True,
        remove_pis=True,
    )

    for action, elem in context:
        # Comments / PIs are not elements; skip anything without a string tag.
        if not isinstance(elem.tag, str):
            continue

        name = _local_name(elem.tag)

        if action == "start":
            yield OpenTag(name=name, attributes=dict(elem.attrib))
        else:
            text = elem.text or ""
            yield CloseTag(name=name, text=text)

            # Keep memory flat: drop the finished element and any already
            # processed siblings still hanging off the parent.
            elem.clear()
            while elem.getprevious() is not None:
                del elem.getparent()[0]

        if on_progress:
            pos = handle.tell()
            if pos != last_pos:
                last_pos = pos
                on_progress(pos, total)


def iter_tag_events(
    source: Source,
    on_progress: Optional[ProgressCallback] = None,
) -> Iterator[TagEvent]:
    """
    Yield OpenTag / CloseTag events for an export document in document order.

    Args:
        source: Path to an ``export.xml`` file, raw bytes, or a binary
            file-like object.
        on_progress: Optional ``callback(bytes_read, total_bytes)`` invoked
            whenever the underlying reader advances.

    Yields:
        OpenTag and CloseTag instances, strictly nested.

    Raises:
        FileNotFoundError: if ``source`` is a path that does not exist.
        lxml.etree.XMLSyntaxError: if the document is not well-formed.
    """
    if isinstance(source, bytes):
        yield from _iter_handle(io.BytesIO(source), on_progress)
        return

    if isinstance(source, (str, Path)):
        file_path = Path(source)
        if not file_path.is_file():
            raise FileNotFoundError(f"Export file not found: {file_path}")

        with file_path.open("rb") as handle:
            yield from _iter_handle(handle, on_progress)
        return

    yield from _iter_handle(source, on_progress)
