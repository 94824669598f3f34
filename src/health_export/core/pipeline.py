from __future__ import annotations

from health_export.converter import ConversionResult, HealthExportConverter
from health_export.core.context import ConvertContext
from health_export.core.exceptions import ParseExecutionError
from health_export.exporter import export_result


class Pipeline:
    """
    Orchestrates one conversion run: convert, then export.
    No business logic lives here. Nothing is exported unless the whole
    conversion succeeded.
    """

    def __init__(self, context: ConvertContext):
        self.ctx = context
        self.log = context.logger

    def run(self) -> ConversionResult:
        self.log.info("Pipeline starting")

        try:
            converter = HealthExportConverter(config=self.ctx.config)
            result = converter.run(self.ctx.input_path)

            written = export_result(result, self.ctx.output_path, config=self.ctx.config)

            self.ctx.stats.update(
                {
                    "record_tables": len(result.records),
                    "workout_tables": len(result.workouts),
                    "rows": result.tables.row_count(),
                    "files": len(written),
                    "issues": result.issues.counts(),
                }
            )
            self.ctx.errors.extend(result.issues.issues)

            self.log.info("Pipeline completed successfully")

            return result

        except Exception as exc:
            self.log.exception("Pipeline execution failed")
            raise ParseExecutionError(str(exc)) from exc
