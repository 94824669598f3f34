
"""
CLI package for health_export.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from health_export.cli.app import app, main

__all__ = [
    "app",
    "main",
]
