import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


def wrap_health_data(body: str, locale: str = "en_US") -> bytes:
    """Minimal export document around ``body`` (children of HealthData)."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<HealthData locale="{locale}">\n'
        '<ExportDate value="2024-02-01 08:00:00 -0800"/>\n'
        f"{body}\n"
        "</HealthData>\n"
    ).encode("utf-8")


@pytest.fixture
def health_doc():
    return wrap_health_data
