"""
Structured logging for AniArt.

Console output goes through Rich; files (and consoles with Rich disabled)
get one JSON object per line. The ``log_operation_*`` helpers attach the
operation name, timings and error context as ``extra`` fields so both
renderings carry them.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from aniart.shared.errors import AniArtError, ErrorContext

# LogRecord attributes copied into JSON lines when present
STRUCTURED_FIELDS: tuple[str, ...] = (
    "operation",
    "error_code",
    "duration_ms",
    "result_info",
    "context",
)

LOG_THEME = Theme(
    {
        "logging.level.debug": "dim",
        "logging.level.info": "cyan",
        "logging.level.warning": "yellow",
        "logging.level.error": "bold red",
        "logging.level.critical": "bold white on red",
        "log.time": "dim",
        "log.path": "dim blue",
    }
)


class StructuredFormatter(logging.Formatter):
    """
    Render a log record as a single JSON object.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            {field: getattr(record, field) for field in STRUCTURED_FIELDS if hasattr(record, field)}
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


def _console_handler(use_rich_console: bool) -> logging.Handler:
    if not use_rich_console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(StructuredFormatter())
        return stream_handler

    return RichHandler(
        console=Console(theme=LOG_THEME, stderr=True),
        show_path=True,
        markup=False,
        rich_tracebacks=True,
        log_time_format="[%H:%M:%S]",
    )


def setup_structured_logger(
    name: str = "aniart",
    level: str = "INFO",
    log_file: str | None = None,
    *,
    use_rich_console: bool = True,
) -> logging.Logger:
    """
    Configure the ``aniart`` logger (or ``name``) for console and file output.

    Calling it again replaces the handlers from the previous call.

    Args:
        name: Logger name
        level: Level name, case-insensitive
        log_file: Optional path; file output is always JSON
        use_rich_console: Rich console output instead of JSON lines on stderr

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.setLevel(level.upper())

    handler = _console_handler(use_rich_console)
    handler.setLevel(logger.level)
    logger.addHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def _context_to_dict(context: dict[str, Any] | ErrorContext | None) -> dict[str, Any]:
    if context is None:
        return {}
    if isinstance(context, ErrorContext):
        return context.safe_dict()
    return dict(context)


def log_operation_error(
    logger: logging.Logger,
    error: AniArtError,
    operation: str | None = None,
    additional_context: dict[str, Any] | ErrorContext | None = None,
    *,
    level: int = logging.ERROR,
) -> None:
    """
    Log an AniArtError with its code and masked context.

    ``additional_context`` is merged over the error's own context. The
    wrapped exception's traceback is only attached at ERROR and above;
    transient upstream failures are logged at WARNING without it.
    """
    context = error.context.safe_dict()
    context.update(_context_to_dict(additional_context))

    logger.log(
        level,
        error.message,
        extra={
            "operation": operation or error.context.operation,
            "error_code": error.code.name,
            "context": context,
        },
        exc_info=error.original_error is not None and level >= logging.ERROR,
    )


def log_operation_success(
    logger: logging.Logger,
    operation: str,
    duration_ms: float,
    result_info: dict[str, Any] | None = None,
    context: dict[str, Any] | ErrorContext | None = None,
) -> None:
    """Log a completed operation and its duration at debug level."""
    logger.debug(
        "%s finished in %.1f ms",
        operation,
        duration_ms,
        extra={
            "operation": operation,
            "duration_ms": duration_ms,
            "result_info": result_info or {},
            "context": _context_to_dict(context),
        },
    )


def log_operation_start(
    logger: logging.Logger,
    operation: str,
    context: dict[str, Any] | None = None,
) -> None:
    logger.debug(
        "%s started",
        operation,
        extra={"operation": operation, "context": context or {}},
    )
