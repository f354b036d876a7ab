"""Logging bootstrap for the smart-wrap command line.

Library modules only create module loggers. The CLI calls configure() once,
which hangs a stderr handler and a rotating file handler off the
``smart_wrap`` logger.

Environment:
    SMART_WRAP_LOG_LEVEL  level name when no explicit level is given (INFO)
    SMART_WRAP_LOG_FILE   exact log file path
    SMART_WRAP_LOG_DIR    directory for per-session log files

// [LAW:single-enforcer] Handler wiring for the smart_wrap logger happens here only.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path


ROOT_LOGGER = "smart_wrap"
DEFAULT_LOG_DIR = "~/.local/share/smart-wrap/logs"

_STDERR_FORMAT = "[%(name)s] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_UNSAFE_NAME_RE = re.compile(r"[^A-Za-z0-9_-]+")


@dataclass(frozen=True)
class LoggingRuntime:
    level_name: str
    level: int
    file_path: str


_RUNTIME: LoggingRuntime | None = None


def _resolve_level(raw: str) -> int:
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _session_log_path(session_name: str) -> Path:
    log_dir = Path(os.path.expanduser(os.environ.get("SMART_WRAP_LOG_DIR", DEFAULT_LOG_DIR)))
    stem = _UNSAFE_NAME_RE.sub("-", session_name).strip("-_") or "session"
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return log_dir / f"{stem}-{stamp}-{os.getpid()}.log"


def configure(session_name: str = "smart-wrap", level: str | None = None) -> LoggingRuntime:
    """Attach stderr and file handlers to the smart_wrap logger.

    Only the first call has an effect; later calls return the same runtime.
    An explicit level wins over SMART_WRAP_LOG_LEVEL.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level_no = _resolve_level(level or os.environ.get("SMART_WRAP_LOG_LEVEL", "INFO"))
    env_file = os.environ.get("SMART_WRAP_LOG_FILE")
    file_path = Path(env_file) if env_file else _session_log_path(session_name)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    stderr_handler = logging.StreamHandler()
    stderr_handler.setFormatter(logging.Formatter(_STDERR_FORMAT))
    file_handler = RotatingFileHandler(
        file_path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level_no)
    logger.propagate = False
    logger.handlers.clear()
    for handler in (stderr_handler, file_handler):
        handler.setLevel(level_no)
        logger.addHandler(handler)

    _RUNTIME = LoggingRuntime(logging.getLevelName(level_no), level_no, str(file_path))
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    return _RUNTIME


def reset() -> None:
    """Detach handlers and forget the runtime so configure() can run again."""
    global _RUNTIME
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    _RUNTIME = None
