"""loguru setup shared by the API and its tests.

Every record carries ``extra["correlation_id"]``, taken from a ``ContextVar``
that the request middleware sets per request (``-`` outside a request).
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from loguru import logger as _root_logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

DEFAULT_LOG_FILE = Path("instance") / "taskboard.log"

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default="-")

_NOISY_LOGGERS = {
    "werkzeug": logging.INFO,
    "sqlalchemy.engine": logging.WARNING,
}


def _inject_correlation_id(record: dict[str, Any]) -> None:
    record["extra"]["correlation_id"] = _CORRELATION_ID.get()


_root_logger.configure(extra={"correlation_id": "-"})
logger = _root_logger.patch(_inject_correlation_id)


class _InterceptHandler(logging.Handler):
    """Route stdlib logging (werkzeug, SQLAlchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set("-")


def setup_logging(level: str = "INFO", *, log_file: str | Path | None = None) -> None:
    """Replace all sinks with a colored stderr sink and a plain file sink."""

    level = level.upper()
    path = Path(log_file) if log_file else DEFAULT_LOG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)

    sink_options: dict[str, Any] = {
        "level": level,
        "format": _FMT,
        "filter": sanitize_record,
        "backtrace": False,
        "diagnose": False,
    }
    _root_logger.remove()
    _root_logger.add(sys.stderr, colorize=True, **sink_options)
    _root_logger.add(
        str(path),
        colorize=False,
        enqueue=True,
        mode="a",
        encoding="utf-8",
        **sink_options,
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name, stdlib_level in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(stdlib_level)


__all__ = [
    "DEFAULT_LOG_FILE",
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
