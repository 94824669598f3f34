# tests/test_pipeline.py

from __future__ import annotations

import pytest

from health_export.config import get_config
from health_export.core.context import ConvertContext
from health_export.core.exceptions import ParseExecutionError, SchemaViolation
from health_export.core.pipeline import Pipeline
from health_export.logging import get_logger
from health_export.main import main
from health_export.utils import tests_data_path


def _context(input_name: str, output) -> ConvertContext:
    return ConvertContext(
        config=get_config(),
        logger=get_logger("health_export.tests"),
        input_path=str(tests_data_path(input_name)),
        output_path=str(output),
    )


def test_pipeline_collects_stats(tmp_path) -> None:
    ctx = _context("export_minimal.xml", tmp_path / "out")
    Pipeline(ctx).run()

    assert ctx.stats["record_tables"] == 6
    assert ctx.stats["workout_tables"] == 1
    assert ctx.stats["files"] == 19
    assert ctx.stats["issues"] == {"UnknownExtension": 1}
    assert len(ctx.errors) == 1


def test_failed_run_writes_nothing(tmp_path) -> None:
    out = tmp_path / "out"
    ctx = _context("unknown_root_child.xml", out)

    with pytest.raises(ParseExecutionError) as exc_info:
        Pipeline(ctx).run()

    assert isinstance(exc_info.value.__cause__, SchemaViolation)
    assert not out.exists()


def test_main_entry_point(tmp_path) -> None:
    main(["-i", str(tests_data_path("heart_rate_iso.xml")), "-o", str(tmp_path)])
    assert (tmp_path / "HeartRate.json").is_file()
    assert (tmp_path / "healthData.json").is_file()
