from __future__ import annotations

import logging
import sys
import threading
from collections import deque
from typing import Iterable, List, Optional

from .settings import settings

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(run_id)s | gridpath.%(module)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_buffer_lock = threading.Lock()
_log_buffer: deque[str] = deque(maxlen=max(int(settings.LOG_BUFFER), 1))
_CURRENT_RUN_ID = "-"


def _resolve_level(name: Optional[str]) -> int:
    level = logging.getLevelName((name or "INFO").upper())
    if isinstance(level, str):
        return logging.INFO
    return level


class RunIdFilter(logging.Filter):
    """Inject the run_id into each log record."""
    def filter(self, record):
        record.run_id = _CURRENT_RUN_ID
        return True


class _BufferingHandler(logging.Handler):
    """Capture log records into an in-memory ring buffer."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self._formatter = logging.Formatter(_LOG_FORMAT, _DATE_FORMAT)

    def emit(self, record: logging.LogRecord) -> None:
        message = self._formatter.format(record)
        with _buffer_lock:
            _log_buffer.append(message)


_logging_configured = False
_run_filter = RunIdFilter()


def _configure_logging(level: Optional[str] = None) -> None:
    global _logging_configured
    if _logging_configured:
        return

    resolved = _resolve_level(level or settings.LOG_LEVEL)
    formatter = logging.Formatter(_LOG_FORMAT, _DATE_FORMAT)

    stream_handler = logging.StreamHandler(sys.__stderr__)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(resolved)
    stream_handler.addFilter(_run_filter)

    buffer_handler = _BufferingHandler()
    buffer_handler.addFilter(_run_filter)

    package_logger = logging.getLogger("gridpath")
    package_logger.setLevel(min(resolved, logging.DEBUG))
    package_logger.addHandler(stream_handler)
    package_logger.addHandler(buffer_handler)
    package_logger.propagate = False

    _logging_configured = True


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a logger configured with the unified gridpath format."""
    _configure_logging(level)
    return logging.getLogger(name)


def set_log_level(level: str) -> None:
    """Change the console level after configuration (the buffer keeps DEBUG)."""
    _configure_logging(level)
    resolved = _resolve_level(level)
    for handler in logging.getLogger("gridpath").handlers:
        if not isinstance(handler, _BufferingHandler):
            handler.setLevel(resolved)


def set_run_id(run_id: str) -> None:
    global _CURRENT_RUN_ID
    _CURRENT_RUN_ID = run_id or "-"


def get_recent_output(limit: int = 200) -> List[str]:
    """Return the most recent log lines up to ``limit`` entries."""
    if limit <= 0:
        return []
    with _buffer_lock:
        return list(_log_buffer)[-limit:]


def export_recent_output(limit: int = 200) -> str:
    """Render recent log lines as a single newline-delimited string."""
    return "\n".join(get_recent_output(limit))


def iter_output(limit: int = 200) -> Iterable[str]:
    for line in get_recent_output(limit):
        yield line


__all__ = [
    "RunIdFilter",
    "get_logger",
    "set_log_level",
    "set_run_id",
    "get_recent_output",
    "export_recent_output",
    "iter_output",
]
