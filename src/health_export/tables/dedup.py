"""
Per-table value deduplication.

Repeated low-cardinality strings (source names, device descriptions,
category values) are replaced in table cells by short ids ``_0``, ``_1``, ...
assigned in order of first occurrence.
"""

from __future__ import annotations

from typing import Dict, Iterator, Tuple

ID_PREFIX = "_"


class DedupDictionary:
    """Bijection between original string values and generated ids."""

    __slots__ = ("_ids", "_values")

    def __init__(self) -> None:
        self._ids: Dict[str, str] = {}
        self._values: Dict[str, str] = {}

    def lookup(self, value: str) -> str:
        """Return the id for ``value``, assigning the next dense id if unseen."""
        ident = self._ids.get(value)
        if ident is None:
            ident = f"{ID_PREFIX}{len(self._ids)}"
            self._ids[value] = ident
            self._values[ident] = value
        return ident

    def resolve(self, ident: str) -> str:
        """Return the original value for an id. Raises KeyError if unknown."""
        return self._values[ident]

    def legend(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(id, value)`` pairs in id order."""
        yield from self._values.items()

    def as_mapping(self) -> Dict[str, str]:
        """
        Both directions in one mapping, the serialized ``abbr`` form:
        ``{"Watch": "_0", "_0": "Watch", ...}``.
        """
        out: Dict[str, str] = {}
        for ident, value in self._values.items():
            out[value] = ident
            out[ident] = value
        return out

    def __contains__(self, value: object) -> bool:
        return value in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<DedupDictionary size={len(self)}>"
