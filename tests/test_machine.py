# tests/test_machine.py

from __future__ import annotations

import pytest

from health_export.core.exceptions import ConversionError, SchemaViolation
from health_export.core.issues import IssueKind
from health_export.loader import CloseTag, OpenTag, iter_tag_events
from health_export.machine import ParserState, run_machine
from health_export.nodes import NOOP, RootNode
from health_export.utils import tests_data_path


def _run(events):
    state = ParserState(root=RootNode())
    return run_machine(events, state), state


def test_unknown_root_child_is_fatal() -> None:
    with pytest.raises(SchemaViolation):
        _run(iter_tag_events(tests_data_path("unknown_root_child.xml")))


def test_second_health_data_is_fatal() -> None:
    events = [
        OpenTag("HealthData", {"locale": "en_US"}),
        CloseTag("HealthData"),
        OpenTag("HealthData", {"locale": "de_DE"}),
        CloseTag("HealthData"),
    ]
    with pytest.raises(SchemaViolation):
        _run(events)


def test_child_of_rigid_leaf_is_fatal(health_doc) -> None:
    doc = health_doc('<Me HKCharacteristicTypeIdentifierDateOfBirth=""><Extra/></Me>')
    with pytest.raises(SchemaViolation):
        _run(iter_tag_events(doc))


def test_unknown_child_of_open_position_is_skipped(health_doc) -> None:
    doc = health_doc(
        '<Audiogram type="HKDataTypeIdentifierAudiogram">'
        '<SensitivityPoint frequencyValue="500"><Deeper/></SensitivityPoint>'
        "</Audiogram>"
    )
    root, state = _run(iter_tag_events(doc))

    issues = root.session.issues
    assert len(issues) == 1
    assert issues.issues[0].kind is IssueKind.UNKNOWN_EXTENSION
    assert issues.issues[0].element == "Audiogram"
    assert root.session.tables.records == {}
    assert state.depth == 0


def test_noop_subtree_swallows_all_descendants() -> None:
    assert NOOP.handle_child(OpenTag("Anything", {})) is NOOP


def test_unbalanced_close_is_fatal() -> None:
    with pytest.raises(ConversionError):
        _run([CloseTag("HealthData")])


def test_unclosed_elements_are_fatal() -> None:
    with pytest.raises(ConversionError, match="unclosed"):
        _run([OpenTag("HealthData", {"locale": "en_US"})])


def test_state_returns_to_root_after_balanced_stream(health_doc) -> None:
    root, state = _run(iter_tag_events(health_doc("")))
    assert state.current is root
    assert state.stack == []
    assert state.path == []
    assert root.health_data is not None
    assert root.health_data.locale == "en_US"
