"""
Main entry for health-export.

This module is intentionally thin:
- argument parsing
- configuration setup
- pipeline orchestration

No conversion logic lives here.
"""

from __future__ import annotations

import argparse

from health_export.config import get_config
from health_export.logging import get_logger, set_debug

from health_export.core.context import ConvertContext
from health_export.core.pipeline import Pipeline

log = get_logger("health_export.main")


# ---------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------
def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert a health records export.xml into per-type JSON and CSV tables"
    )
    parser.add_argument(
        "-i",
        "--input",
        required=True,
        help="Path to export.xml",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output directory (default: paths.output_dir from config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    return parser


# ---------------------------------------------------------
# Pipeline Runner
# ---------------------------------------------------------
def run(input_path: str, output_path: str | None, debug_flag: bool) -> None:
    """
    Prepare context and execute the conversion pipeline.
    """

    cfg = get_config()
    cfg.debug = bool(debug_flag) or bool(cfg.debug)
    if cfg.debug:
        set_debug(True)

    output_path = output_path or cfg.paths.get("output_dir", "data")

    log.info(f"Loading export: {input_path}")

    ctx = ConvertContext(
        config=cfg,
        logger=log,
        input_path=input_path,
        output_path=output_path,
        debug=cfg.debug,
    )

    pipeline = Pipeline(ctx)
    pipeline.run()

    log.info(f"Main pipeline complete. Output: {output_path}")


# ---------------------------------------------------------
# Program Entry Point
# ---------------------------------------------------------
def main(argv: list[str] | None = None) -> None:
    ap = build_arg_parser()
    args = ap.parse_args(argv)

    try:
        run(
            input_path=args.input,
            output_path=args.output,
            debug_flag=args.debug,
        )
    except Exception as exc:
        log.exception(f"Unhandled exception in main: {exc}")
        raise


if __name__ == "__main__":
    main()
