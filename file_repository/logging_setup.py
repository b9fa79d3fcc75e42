"""Logging setup for the file repository service.

Environment variables
- FILES_LOG_DIR: directory for core.log / access.log (default: unset, log to stderr)
- FILES_LOG_LEVEL: ERROR|WARNING|INFO|DEBUG (default: INFO)
- FILES_LOG_ACCESS_ENABLE: 0/1, one line per request (default: 0)
- FILES_LOG_ROTATE_MAX_MB: max size in MB of each log file before rotation (default: 2)
- FILES_LOG_ROTATE_BACKUPS: number of rotated files to keep (default: 3)

Setup is idempotent so repeated create_app() calls do not duplicate handlers.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Dict, Optional

from .config import env_bool, env_int


DEFAULT_LEVEL = "INFO"
DEFAULT_ROTATE_MAX_MB = 2
DEFAULT_ROTATE_BACKUPS = 3

CORE_LOGGER = "file_repository"
ACCESS_LOGGER = "file_repository.access"

_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

_STATE: Dict[str, object] = {
    "configured": False,
    "handlers": {},
}


def _parse_level(level_name: str) -> int:
    s = (level_name or "").strip().upper()
    if s in ("CRITICAL", "FATAL"):
        return logging.CRITICAL
    if s == "ERROR":
        return logging.ERROR
    if s in ("WARN", "WARNING"):
        return logging.WARNING
    if s == "DEBUG":
        return logging.DEBUG
    return logging.INFO


def _mk_handler(log_dir: Optional[str], filename: str) -> logging.Handler:
    if not log_dir:
        h: logging.Handler = logging.StreamHandler()
    else:
        max_mb = max(1, env_int("FILES_LOG_ROTATE_MAX_MB", DEFAULT_ROTATE_MAX_MB))
        backups = max(1, env_int("FILES_LOG_ROTATE_BACKUPS", DEFAULT_ROTATE_BACKUPS))
        os.makedirs(log_dir, exist_ok=True)
        h = RotatingFileHandler(
            os.path.join(log_dir, filename),
            maxBytes=max_mb * 1024 * 1024,
            backupCount=backups,
            encoding="utf-8",
            delay=True,
        )
    h.setFormatter(logging.Formatter(_FORMAT))
    return h


def setup_logging(log_dir: Optional[str] = None) -> None:
    """Attach handlers to the core and access loggers once, then apply env levels."""
    if _STATE.get("configured"):
        refresh_runtime_from_env()
        return

    log_dir = log_dir or (os.environ.get("FILES_LOG_DIR") or "").strip() or None

    handlers = {
        "core": _mk_handler(log_dir, "core.log"),
        "access": _mk_handler(log_dir, "access.log"),
    }

    core = logging.getLogger(CORE_LOGGER)
    core.propagate = False
    core.addHandler(handlers["core"])

    access = logging.getLogger(ACCESS_LOGGER)
    access.propagate = False
    access.addHandler(handlers["access"])

    _STATE["configured"] = True
    _STATE["handlers"] = handlers

    refresh_runtime_from_env()


def refresh_runtime_from_env() -> None:
    if not _STATE.get("configured"):
        return
    core_logger().setLevel(_parse_level(os.environ.get("FILES_LOG_LEVEL", DEFAULT_LEVEL)))
    access_logger().setLevel(logging.INFO)


def access_enabled() -> bool:
    return env_bool("FILES_LOG_ACCESS_ENABLE", default=False)


def core_logger() -> logging.Logger:
    return logging.getLogger(CORE_LOGGER)


def access_logger() -> logging.Logger:
    return logging.getLogger(ACCESS_LOGGER)
