from __future__ import annotations

import json
import logging
import os
import sys
import uuid
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Optional

from rich.logging import RichHandler

# Context variable for correlation ID (batch id while a batch is being scored)
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

# Extra fields copied into JSON output when a log call passes them
EXTRA_FIELDS = ("batch_id", "result_id", "sentiment")


def get_correlation_id() -> str:
    """Get the current correlation ID."""
    return _correlation_id.get()


class CorrelationContext:
    """Context manager that sets the correlation ID for the enclosed block.

    The previous ID is restored on exit, so nested batches and later log
    lines in the caller keep their own ID.

    Example:
        with CorrelationContext(batch_id[:8]):
            log.info("Scoring batch")  # JSON output carries correlation_id
    """

    def __init__(self, cid: Optional[str] = None):
        self.cid = cid or str(uuid.uuid4())[:8]
        self._token: Optional[Token[str]] = None

    def __enter__(self) -> "CorrelationContext":
        self._token = _correlation_id.set(self.cid)
        return self

    def __exit__(self, *args) -> None:
        if self._token is not None:
            _correlation_id.reset(self._token)
            self._token = None


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter for production use."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        cid = getattr(record, "correlation_id", "") or get_correlation_id()
        if cid:
            log_data["correlation_id"] = cid

        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class ContextFilter(logging.Filter):
    """Handler filter that stamps the correlation ID onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """Set up logging configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: If True, use JSON structured format
        log_file: Optional file path to write JSON logs to

    Examples:
        # Interactive use with rich console output
        setup_logging("DEBUG")

        # Piped into a log collector
        setup_logging("INFO", json_output=True)
    """
    if os.getenv("LOG_JSON", "").lower() in ("1", "true", "yes"):
        json_output = True

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = []

    if json_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(StructuredFormatter())
    else:
        console_handler = RichHandler(
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))

    console_handler.addFilter(ContextFilter())
    root.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter())
        file_handler.addFilter(ContextFilter())
        root.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger by name.

    Args:
        name: Logger name (e.g., "scorer", "batch", "accuracy")

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
