"""
json_exporter.py
JSON serialization for tables and the non-tabular ``healthData.json``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from health_export.logging import get_logger

log = get_logger(__name__)


def serialize_to_json_string(data: Any, indent: int | None = 2) -> str:
    if indent:
        return json.dumps(data, indent=indent, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def export_json(data: Any, output_path: str | Path, indent: int | None = 2) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    json_str = serialize_to_json_string(data, indent=indent)

    with output_path.open("w", encoding="utf-8") as f:
        f.write(json_str)

    log.debug("Wrote %s (%d bytes)", output_path, output_path.stat().st_size)
    return output_path
