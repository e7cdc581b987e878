"""
Structured Logging Utilities

Loggers returned by get_logger() take keyword context alongside the message
and render it as ``key=value`` pairs, or as one JSON object per line when
FAST_READER_LOG_FORMAT=json. Session traces (unit counts, indices,
intervals) stay easy to grep either way.

Usage:
    from utils.structured_logging import get_logger, timed

    logger = get_logger(__name__)

    logger.info("Session started", units=42, index=1)

    # Output: 2024-01-15 10:30:45 - INFO - rsvp.session - Session started | units=42 index=1

    @timed("pdf_extraction")
    def extract_pages(path):
        ...
"""

import functools
import json
import logging
import os
import threading
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, TypeVar

T = TypeVar('T')

LOG_LEVEL_ENV = "FAST_READER_LOG_LEVEL"
LOG_FORMAT_ENV = "FAST_READER_LOG_FORMAT"

DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

# Page text can be passed as context; keep log lines bounded
MAX_VALUE_LENGTH = 200


def get_log_level_from_string(level_str: str) -> int:
    """Map a level name such as "debug" to its logging constant, defaulting to INFO."""
    level = logging.getLevelName(level_str.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _json_requested() -> bool:
    return os.environ.get(LOG_FORMAT_ENV, "").lower() == "json"


def _clip(value: Any) -> Any:
    if isinstance(value, str) and len(value) > MAX_VALUE_LENGTH:
        return value[:MAX_VALUE_LENGTH] + "...[truncated]"
    return value


def _pair(key: str, value: Any) -> str:
    value = _clip(value)
    if isinstance(value, (list, tuple, dict)):
        return f"{key}={json.dumps(value, ensure_ascii=False)}"
    if isinstance(value, str) and (not value or ' ' in value or '"' in value):
        return f'{key}="{value}"'
    return f"{key}={value}"


class StructuredLogger:
    """Wrapper around a stdlib logger that accepts keyword context.

    Attributes:
        name: The logger name
        logger: The underlying Python logger
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)
        self._bound: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def render(self, level: int, message: str, fields: Dict[str, Any]) -> str:
        if not fields:
            return message
        return message + " | " + " ".join(_pair(k, v) for k, v in fields.items())

    def _emit(self, level: int, message: str, fields: Dict[str, Any], exc_info: bool = False) -> None:
        if not self.logger.isEnabledFor(level):
            return
        with self._lock:
            merged = {**self._bound, **fields}
        self.logger.log(level, self.render(level, message, merged), exc_info=exc_info)

    def debug(self, message: str, /, **fields) -> None:
        self._emit(logging.DEBUG, message, fields)

    def info(self, message: str, /, **fields) -> None:
        self._emit(logging.INFO, message, fields)

    def warning(self, message: str, /, **fields) -> None:
        self._emit(logging.WARNING, message, fields)

    def error(self, message: str, /, exc_info: bool = False, **fields) -> None:
        """Log at ERROR, optionally with the active exception's traceback."""
        self._emit(logging.ERROR, message, fields, exc_info=exc_info)

    @contextmanager
    def context(self, **fields):
        """Bind fields to every message logged inside the block.

        Example:
            with logger.context(document="book.pdf"):
                logger.info("Opening")
        """
        with self._lock:
            saved = dict(self._bound)
            self._bound.update(fields)
        try:
            yield self
        finally:
            with self._lock:
                self._bound = saved


class JsonStructuredLogger(StructuredLogger):
    """Renders each message and its context as a single JSON object."""

    def render(self, level: int, message: str, fields: Dict[str, Any]) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": logging.getLevelName(level),
            "logger": self.name,
            "message": message,
        }
        entry.update((k, _clip(v)) for k, v in fields.items())
        return json.dumps(entry, ensure_ascii=False, default=str)


_loggers: Dict[str, StructuredLogger] = {}
_loggers_lock = threading.Lock()


def get_logger(name: str, json_format: bool = None) -> StructuredLogger:
    """Return the cached logger for ``name``, creating it on first use.

    Args:
        name: Logger name (usually __name__)
        json_format: Force JSON output on or off; defaults to FAST_READER_LOG_FORMAT
    """
    if json_format is None:
        json_format = _json_requested()
    with _loggers_lock:
        if name not in _loggers:
            cls = JsonStructuredLogger if json_format else StructuredLogger
            _loggers[name] = cls(name)
        return _loggers[name]


def timed(operation_name: str = None, logger: StructuredLogger = None):
    """Decorator logging how long the wrapped call took, and whether it raised."""
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        op_name = operation_name or func.__name__

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            log = logger or get_logger(func.__module__)
            with log_operation(log, op_name, level=logging.DEBUG):
                return func(*args, **kwargs)

        return wrapper
    return decorator


@contextmanager
def log_operation(logger: StructuredLogger, operation_name: str, level: int = logging.INFO, **fields):
    """Log the start, duration and outcome of a block.

    Completion is logged at INFO; the start message uses ``level``.

    Example:
        with log_operation(logger, "open_document", path=path):
            document = open_document(path)
    """
    started = time.perf_counter()
    logger._emit(level, f"Starting {operation_name}", fields)
    try:
        yield
    except Exception as e:
        logger.error(
            f"Failed {operation_name}",
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            status="error",
            error=str(e),
            **fields
        )
        raise
    logger.info(
        f"Completed {operation_name}",
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
        status="success",
        **fields
    )


def configure_logging(level: int = None, format_string: str = None, json_format: bool = None) -> None:
    """Configure the root logger.

    Args:
        level: Logging level (defaults to FAST_READER_LOG_LEVEL, then INFO)
        format_string: Record format (ignored for JSON output)
        json_format: Emit bare JSON lines (defaults to FAST_READER_LOG_FORMAT)
    """
    if level is None:
        level = get_log_level_from_string(os.environ.get(LOG_LEVEL_ENV, "INFO"))
    if json_format is None:
        json_format = _json_requested()

    logging.basicConfig(
        level=level,
        format="%(message)s" if json_format else (format_string or DEFAULT_FORMAT),
        datefmt="%Y-%m-%d %H:%M:%S"
    )
