# tests/test_dedup.py

from __future__ import annotations

import pytest

from health_export.tables import DedupDictionary


def test_ids_are_dense_and_in_first_occurrence_order() -> None:
    d = DedupDictionary()
    ids = [d.lookup(v) for v in ["Watch", "Phone", "Watch", "Scale", "Phone"]]

    assert ids == ["_0", "_1", "_0", "_2", "_1"]
    assert len(d) == 3


def test_repeated_lookup_is_stable() -> None:
    d = DedupDictionary()
    first = d.lookup("Watch")
    for _ in range(10):
        assert d.lookup("Watch") == first


def test_mapping_is_a_bijection() -> None:
    d = DedupDictionary()
    values = ["a", "b", "c", "a", "d"]
    for v in values:
        d.lookup(v)

    pairs = list(d.legend())
    ids = [ident for ident, _ in pairs]
    originals = [value for _, value in pairs]

    assert len(set(ids)) == len(ids)
    assert len(set(originals)) == len(originals)
    for ident, value in pairs:
        assert d.lookup(value) == ident
        assert d.resolve(ident) == value


def test_as_mapping_stores_both_directions() -> None:
    d = DedupDictionary()
    d.lookup("Watch")
    assert d.as_mapping() == {"Watch": "_0", "_0": "Watch"}


def test_resolve_unknown_id_raises() -> None:
    with pytest.raises(KeyError):
        DedupDictionary().resolve("_0")


def test_values_with_commas_are_kept_verbatim() -> None:
    d = DedupDictionary()
    device = "<<HKDevice: 0x1>, name:Apple Watch, manufacturer:Apple>"
    ident = d.lookup(device)
    assert d.resolve(ident) == device
