# tests/test_cli.py

from __future__ import annotations

from typer.testing import CliRunner

from health_export.cli import app
from health_export.utils import tests_data_path

runner = CliRunner()


def test_convert_writes_tables(tmp_path) -> None:
    result = runner.invoke(
        app,
        ["convert", str(tests_data_path("export_minimal.xml")), "--out", str(tmp_path)],
    )

    assert result.exit_code == 0, result.output
    assert (tmp_path / "HeartRate.json").is_file()
    assert (tmp_path / "workouts" / "Running.json").is_file()


def test_convert_compact(tmp_path) -> None:
    result = runner.invoke(
        app,
        ["convert", str(tests_data_path("heart_rate_iso.xml")), "-o", str(tmp_path), "--compact"],
    )

    assert result.exit_code == 0, result.output
    assert "\n" not in (tmp_path / "HeartRate.json").read_text(encoding="utf-8")


def test_convert_missing_file_is_usage_error(tmp_path) -> None:
    result = runner.invoke(app, ["convert", str(tmp_path / "nope.xml")])
    assert result.exit_code != 0


def test_stats_lists_tables_and_issues() -> None:
    result = runner.invoke(app, ["stats", str(tests_data_path("export_minimal.xml"))])

    assert result.exit_code == 0, result.output
    assert "HeartRate" in result.output
    assert "Running" in result.output
    assert "UnknownExtension" in result.output
