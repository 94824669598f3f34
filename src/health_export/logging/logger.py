"""
Centralized logging configuration for health-export.

* ``get_logger(__name__)`` hands out loggers below the ``health_export`` base
  logger, which owns a console handler and the master log file.
* Relative log directories resolve against the source checkout, or against
  the working directory for an installed package.
* Log files are created on the first record written, never at import time.
* ``logging.module_files`` adds one file per module; ``logging.rotate``
  switches file handlers to size-based rotation.
"""

from __future__ import annotations

import logging
from logging import Logger, StreamHandler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, List

from health_export.config import HXConfig, base_dir, get_config

BASE_LOGGER_NAME = "health_export"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_logger_cache: Dict[str, Logger] = {}
_effective_level: int = logging.INFO


class _DeferredFileHandler(logging.FileHandler):
    """File handler that creates its directory when the first record arrives."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, encoding="utf-8", delay=True)

    def _open(self):
        Path(self.baseFilename).parent.mkdir(parents=True, exist_ok=True)
        return super()._open()


class _DeferredRotatingFileHandler(RotatingFileHandler):
    def __init__(self, path: Path) -> None:
        super().__init__(path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8", delay=True)

    def _open(self):
        Path(self.baseFilename).parent.mkdir(parents=True, exist_ok=True)
        return super()._open()


def resolve_log_dir(cfg: HXConfig) -> Path:
    """Absolute log directory for ``cfg`` (``logging.dir``, else ``paths.logs_dir``)."""
    log_dir = Path(cfg.logging.get("dir") or cfg.paths.get("logs_dir") or "logs")
    if not log_dir.is_absolute():
        log_dir = base_dir() / log_dir
    return log_dir


def _file_handler(cfg: HXConfig, filename: str) -> logging.Handler:
    path = resolve_log_dir(cfg) / filename
    if cfg.logging.get("rotate"):
        handler: logging.Handler = _DeferredRotatingFileHandler(path)
    else:
        handler = _DeferredFileHandler(path)
    handler.setLevel(_effective_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _configured_level(cfg: HXConfig, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    return getattr(logging, str(cfg.logging.get("level", "INFO")).upper(), logging.INFO)


def _base_logger() -> Logger:
    global _effective_level

    base = logging.getLogger(BASE_LOGGER_NAME)
    if BASE_LOGGER_NAME in _logger_cache:
        return base

    cfg = get_config()
    _effective_level = _configured_level(cfg, bool(cfg.debug))

    base.setLevel(_effective_level)
    base.propagate = False
    base.addHandler(_file_handler(cfg, cfg.logging.get("file", "health_export.log")))

    console = StreamHandler()
    console.setLevel(_effective_level)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    base.addHandler(console)

    _logger_cache[BASE_LOGGER_NAME] = base
    return base


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------

def get_logger(name: str | None = None) -> Logger:
    """Return a logger that writes through the shared base handlers."""
    base = _base_logger()
    logger_name = name or BASE_LOGGER_NAME
    if logger_name == BASE_LOGGER_NAME:
        return base

    logger = _logger_cache.get(logger_name)
    if logger is None:
        logger = logging.getLogger(logger_name)
        logger.setLevel(_effective_level)
        logger.propagate = True
        cfg = get_config()
        if cfg.logging.get("module_files"):
            logger.addHandler(_file_handler(cfg, f"{logger_name.replace('.', '_')}.log"))
        _logger_cache[logger_name] = logger
    return logger


def set_debug(enabled: bool) -> None:
    """Switch every handed-out logger and its handlers to DEBUG, or back to the configured level."""
    global _effective_level

    _base_logger()
    _effective_level = _configured_level(get_config(), enabled)

    for logger in _logger_cache.values():
        logger.setLevel(_effective_level)
        for handler in logger.handlers:
            handler.setLevel(_effective_level)


def list_active_loggers() -> List[str]:
    """Helper for debugging configuration issues in tests."""
    return list(_logger_cache.keys())
