# tests/test_converter.py

from __future__ import annotations

import pytest
from lxml import etree

from health_export.converter import ConversionResult, HealthExportConverter, convert
from health_export.core.exceptions import SchemaViolation
from health_export.core.issues import IssueKind
from health_export.utils import tests_data_path


@pytest.fixture(scope="module")
def result() -> ConversionResult:
    return convert(tests_data_path("export_minimal.xml"))


def test_single_heart_rate_record() -> None:
    res = convert(tests_data_path("heart_rate_iso.xml"))
    table = res.records["HeartRate"]

    assert table.header == ["startDate", "endDate", "sourceName", "value"]
    assert table.values() == [["2024-01-01T00:00:00Z", 5000, "_0", 72]]
    assert table.to_dict()["abbr"] == {"_0": "Watch", "Watch": "_0"}
    assert res.profile["dateOfBirth"] == ""
    assert len(res.issues) == 0


def test_health_data_summary(result) -> None:
    assert result.health_data() == {
        "locale": "en_US",
        "exportDate": "2024-02-01 08:00:00 -0800",
        "me": {
            "dateOfBirth": "1980-05-17",
            "biologicalSex": "HKBiologicalSexFemale",
            "bloodType": "HKBloodTypeNotSet",
            "fitzpatrickSkinType": "HKFitzpatrickSkinTypeNotSet",
        },
    }


def test_record_tables_in_first_seen_order(result) -> None:
    assert list(result.records) == [
        "HeartRate",
        "StepCount",
        "SleepAnalysis",
        "HeartRateVariabilitySDNN",
        "BloodPressureSystolic",
        "LabResultRecord",
    ]
    assert list(result.workouts) == ["Running"]


def test_heart_rate_rows_have_no_backfill(result) -> None:
    table = result.records["HeartRate"]

    assert table.header == [
        "unit",
        "startDate",
        "endDate",
        "creationDate",
        "sourceName",
        "sourceVersion",
        "device",
        "value",
        "HKMetadataKeyHeartRateMotionContext",
    ]
    assert table.values() == [
        ["count/min", "2024-01-01 00:00:00 -0800", 5000, 10000, "_0", "10.1", "_1", 72, "1"],
        ["count/min", "2024-01-01 01:00:00 -0800", 0, -2000, "_0", None, None, 64.5],
    ]
    assert table.dedup.resolve("_1") == "<<HKDevice: 0x281b34320>, name:Apple Watch, manufacturer:Apple>"


def test_category_values_are_deduplicated(result) -> None:
    table = result.records["SleepAnalysis"]
    assert table.values() == [["2024-01-01 23:00:00 -0800", 27000000, "_0", "_1"]]
    assert table.dedup.resolve("_1") == "HKCategoryValueSleepAnalysisAsleepCore"


def test_heart_rate_variability_samples(result) -> None:
    series = result.records["HeartRateVariabilitySDNN"].time_series
    assert series.values() == [
        ["2024-01-01 07:00:00 -0800", "7:00:01.12 AM", 60],
        ["2024-01-01 07:00:00 -0800", "7:00:03.05 AM", 62],
    ]
    assert result.records["StepCount"].time_series is None


def test_correlation_contents_are_not_counted_twice(result) -> None:
    assert len(result.records["BloodPressureSystolic"]) == 1


def test_workout_table(result) -> None:
    running = result.workouts["Running"]

    assert running.values() == [
        [
            "2024-01-03 07:00:00 -0800",
            1830000,
            1860000,
            30.5,
            "min",
            5.01,
            "km",
            310,
            "Cal",
            "_0",
            "10.1",
            "0",
        ]
    ]
    assert running.header[-1] == "HKIndoorWorkout"
    assert [e["type"] for e in running.events] == ["HKWorkoutEventTypeSegment", "HKWorkoutEventTypePause"]
    assert running.routes == [
        {
            "sourceName": "Watch",
            "sourceVersion": "10.1",
            "startDate": "2024-01-03 07:00:00 -0800",
            "endDate": 1830000,
            "creationDate": 1860000,
            "HKMetadataKeySyncVersion": "2",
            "FileReference": "/workout-routes/route_2024-01-03_7.30am.gpx",
        }
    ]


def test_activity_summaries(result) -> None:
    summaries = result.activity_summaries
    assert summaries.header == [
        "dateComponents",
        "activeEnergyBurned",
        "activeEnergyBurnedGoal",
        "activeEnergyBurnedUnit",
        "appleStandHours",
    ]
    assert summaries.values() == [
        ["2024-01-01", 420.5, 400, "Cal"],
        ["2024-01-02", 380, 400, "Cal", 11],
    ]


def test_clinical_record_table(result) -> None:
    table = result.records["LabResultRecord"]
    assert table.header[:2] == ["identifier", "sourceName"]
    assert table.column("identifier") == ["lab-1"]
    assert table.dedup.resolve("_0") == "Clinic"


def test_unknown_element_is_one_issue(result) -> None:
    assert len(result.issues) == 1
    [issue] = result.issues.of_kind(IssueKind.UNKNOWN_EXTENSION)
    assert issue.element == "Audiogram"
    assert issue.attributes["type"] == "HKDataTypeIdentifierAudiogram"
    assert "Audiogram" not in result.records


def test_seen_types(result) -> None:
    assert result.seen_types == {
        "HKQuantityTypeIdentifierHeartRate": "HeartRate",
        "HKQuantityTypeIdentifierStepCount": "StepCount",
        "HKCategoryTypeIdentifierSleepAnalysis": "SleepAnalysis",
        "HKQuantityTypeIdentifierHeartRateVariabilitySDNN": "HeartRateVariabilitySDNN",
        "HKQuantityTypeIdentifierBloodPressureSystolic": "BloodPressureSystolic",
        "HKWorkoutActivityTypeRunning": "Running",
        "HKClinicalTypeIdentifierLabResultRecord": "LabResultRecord",
    }


def test_runs_do_not_share_state() -> None:
    converter = HealthExportConverter()
    first = converter.run(tests_data_path("heart_rate_iso.xml"))
    second = converter.run(tests_data_path("heart_rate_iso.xml"))

    assert first.tables is not second.tables
    assert len(second.records["HeartRate"]) == 1
    assert second.records["HeartRate"].dedup.lookup("Watch") == "_0"


def test_schema_violation_propagates() -> None:
    with pytest.raises(SchemaViolation):
        convert(tests_data_path("unknown_root_child.xml"))


def test_empty_document_is_not_well_formed() -> None:
    with pytest.raises(etree.XMLSyntaxError):
        convert(b"")
