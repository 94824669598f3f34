# tests/test_table.py

from __future__ import annotations

import pytest

from health_export.core.exceptions import TableError
from health_export.tables import Table, WorkoutTable, csv_safe


def test_header_is_union_in_first_seen_order_without_backfill() -> None:
    t = Table(name="HeartRate")
    t.append_row()
    t.set_column("startDate", "2024-01-01 00:00:00 -0800")
    t.set_column("value", 72)
    t.append_row()
    t.set_column("startDate", "2024-01-01 01:00:00 -0800")
    t.set_column("extra", "x")
    t.set_column("value", 64)

    assert t.header == ["startDate", "value", "extra"]
    assert t.values() == [
        ["2024-01-01 00:00:00 -0800", 72],
        ["2024-01-01 01:00:00 -0800", 64, "x"],
    ]


def test_column_positions_never_move() -> None:
    t = Table(name="T")
    t.append_row()
    t.set_column("a", 1)
    t.set_column("b", 2)
    assert t.column_index("a") == 0
    assert t.column_index("b") == 1
    t.append_row()
    t.set_column("b", 3)
    t.set_column("c", 4)
    assert t.column_index("a") == 0
    assert t.column_index("c") == 2
    assert t.values()[1] == [None, 3, 4]


def test_none_value_is_absent() -> None:
    t = Table(name="T")
    t.append_row()
    t.set_column("device", None)
    assert t.header == []
    assert t.values() == [[]]


def test_set_column_without_row_raises() -> None:
    with pytest.raises(TableError):
        Table(name="T").set_column("a", 1)


def test_lookup_columns_hold_dedup_ids() -> None:
    t = Table(name="T")
    for source in ["Watch", "Phone", "Watch"]:
        t.append_row()
        t.set_column("sourceName", source, lookup=True)

    assert t.column("sourceName") == ["_0", "_1", "_0"]
    assert t.to_dict()["abbr"] == {"Watch": "_0", "_0": "Watch", "Phone": "_1", "_1": "Phone"}


def test_direct_strings_are_csv_safe() -> None:
    t = Table(name="T")
    t.append_row()
    t.set_column("note", "a, b\nc")
    assert t.column("note") == ["a| b c"]


def test_csv_safe_leaves_non_strings_alone() -> None:
    assert csv_safe(5) == 5
    assert csv_safe(None) is None
    assert csv_safe("x,y\r\nz") == "x|y  z"


def test_time_series_rows_and_dropped_values() -> None:
    t = Table(name="HeartRateVariabilitySDNN")
    t.add_sample("2024-01-01 07:00:00 -0800", "7:00:01.12 AM", 60)
    t.add_sample("2024-01-01 07:00:00 -0800", "7:00:02.10 AM", None)

    series = t.time_series
    assert series is not None
    assert series.name == "HeartRateVariabilitySDNN.bpm"
    assert series.header == ["Date", "Time", "Value"]
    assert series.values() == [["2024-01-01 07:00:00 -0800", "7:00:01.12 AM", 60]]


def test_to_dict_includes_time_series_only_when_present() -> None:
    t = Table(name="StepCount")
    t.append_row()
    t.set_column("value", 512)
    assert "timeSeries" not in t.to_dict()

    t.ensure_time_series()
    assert t.to_dict()["timeSeries"] == {"header": ["Date", "Time", "Value"], "values": [], "abbr": {}}


def test_workout_table_carries_events_and_routes() -> None:
    t = WorkoutTable(name="Running")
    t.append_row()
    t.set_column("duration", 30.5)
    t.events.append({"type": "HKWorkoutEventTypePause"})
    t.routes.append({"FileReference": "/r.gpx"})

    data = t.to_dict()
    assert data["values"] == [[30.5]]
    assert data["events"] == [{"type": "HKWorkoutEventTypePause"}]
    assert data["routes"] == [{"FileReference": "/r.gpx"}]
