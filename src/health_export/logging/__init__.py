"""
Logging package for ``health_export``.

Use ``get_logger(__name__)`` in modules to share the base console and master
log handlers.
"""

from .logger import (
    get_logger,
    list_active_loggers,
    resolve_log_dir,
    set_debug,
)

__all__ = [
    "get_logger",
    "list_active_loggers",
    "resolve_log_dir",
    "set_debug",
]
