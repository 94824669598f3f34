
"""
CLI command modules for health_export.

Each command module defines a single Typer-compatible command function.
"""

from health_export.cli.commands.convert import convert_command
from health_export.cli.commands.stats import stats_command

__all__ = [
    "convert_command",
    "stats_command",
]
