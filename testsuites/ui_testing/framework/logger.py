"""
================================================================================
Run Logger
================================================================================

Loguru setup for test runs.

Each run writes to stdout and to a per-run log file named after the run start
time (``<log_path>/test-YYYYMMDDHHmmss.log``). Lines look like:

    [10/17/2026, 14:03:22] [INFO] Browser launched successfully: chromium
    [10/17/2026, 14:03:25] [ERROR] Error closing page {"reason": "crashed"}

Structured data is attached with ``logger.bind(data=...)``.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from .settings import Settings


LOG_FORMAT = "[{time:MM/DD/YYYY, HH:mm:ss}] [{extra[level_tag]}] {message}{extra[payload]}"

# Loguru names the warning level WARNING; run logs use the short form
LEVEL_TAGS = {"WARNING": "WARN"}

_logger_initialized: bool = False
_log_file_path: Optional[Path] = None


def _render_data(data: Any) -> str:
    if isinstance(data, BaseException):
        return repr(data)
    if isinstance(data, (dict, list, tuple)):
        return json.dumps(data, default=str)
    return str(data)


def _patch_record(record: dict) -> None:
    level = record["level"].name
    record["extra"]["level_tag"] = LEVEL_TAGS.get(level, level)
    data = record["extra"].get("data")
    record["extra"]["payload"] = "" if data is None else f" {_render_data(data)}"


def init_logger(
    settings: Settings,
    started_at: Optional[datetime] = None,
    level: str = "DEBUG",
) -> Optional[Path]:
    """
    Initialize console and file logging for the run.

    Safe to call repeatedly; only the first call configures sinks.

    Args:
        settings: Run settings (``enable_logging`` and ``log_path`` are used)
        started_at: Run start time used for the log file name
        level: Minimum level written to both sinks

    Returns:
        Path of the run log file, or None when logging is disabled
    """
    global _logger_initialized, _log_file_path

    if _logger_initialized:
        return _log_file_path

    logger.remove()
    logger.configure(patcher=_patch_record)

    if not settings.enable_logging:
        _logger_initialized = True
        _log_file_path = None
        return None

    started_at = started_at or datetime.now()
    log_dir = Path(settings.log_path)
    log_dir.mkdir(parents=True, exist_ok=True)
    _log_file_path = log_dir / f"test-{started_at:%Y%m%d%H%M%S}.log"

    logger.add(sys.stdout, level=level, format=LOG_FORMAT, colorize=False)
    logger.add(
        str(_log_file_path),
        level=level,
        format=LOG_FORMAT,
        rotation="10 MB",
        encoding="utf-8",
    )

    _logger_initialized = True
    logger.debug(f"Logger initialized, writing to: {_log_file_path}")
    return _log_file_path


def get_log_file_path() -> Optional[Path]:
    """Return the current run log file, if logging is enabled."""
    return _log_file_path


def reset_logger() -> None:
    """
    Drop all sinks and forget the current run log.

    Useful for testing when logging needs to be re-initialized with
    different settings.
    """
    global _logger_initialized, _log_file_path

    logger.remove()
    _logger_initialized = False
    _log_file_path = None


__all__ = [
    "LOG_FORMAT",
    "init_logger",
    "get_log_file_path",
    "reset_logger",
]
