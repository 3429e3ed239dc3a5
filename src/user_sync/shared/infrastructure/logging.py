"""
Structured Logging
==================

JSON-structured logging with run ID tracking.

Provides:
- Structured JSON logs on stderr (stdout carries the user-facing messages)
- Run ID for correlating the records of one sync run
- Contextual loggers for modules
- Performance timing utilities

Usage:
    from user_sync.shared.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Users fetched", extra={"records": 3})
"""

import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, TextIO

from pythonjsonlogger import jsonlogger

REDACTED = "***REDACTED***"
SENSITIVE_KEYS = ("password", "api_key", "token", "authorization")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    Custom JSON formatter with additional fields.

    Adds:
    - timestamp in ISO format
    - run_id when available
    """

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.now(timezone.utc).isoformat()

        if hasattr(record, "run_id"):
            log_record["run_id"] = record.run_id

        # Sanitize any sensitive data
        for key, value in list(log_record.items()):
            if isinstance(value, str) and any(s in key.lower() for s in SENSITIVE_KEYS):
                log_record[key] = REDACTED


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """
    Configure structured JSON logging for the process.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        stream: Destination stream, stderr by default
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(getattr(logging, level.upper()))
    handler.setFormatter(
        CustomJsonFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    root_logger.addHandler(handler)

    # Silence noisy loggers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


class RunLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges the bound context into per-call extra."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


def get_context_logger(name: str, run_id: str | None = None) -> logging.Logger:
    """
    Get a logger bound to a sync run.

    Args:
        name: Logger name
        run_id: Identifier of the current sync run

    Returns:
        logging.Logger: Logger with run_id in extra
    """
    logger = get_logger(name)
    if run_id:
        logger = RunLoggerAdapter(logger, {"run_id": run_id})
    return logger


@contextmanager
def log_latency(logger: logging.Logger, operation: str, **extra_context: Any):
    """
    Context manager for measuring and logging operation latency.

    Usage:
        with log_latency(logger, "fetch_users", table="users"):
            rows = await repository.fetch_users()

    Args:
        logger: Logger instance
        operation: Operation name for logging
        **extra_context: Additional context to include in log
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        latency_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{operation} completed",
            extra={
                "operation": operation,
                "latency_ms": round(latency_ms, 2),
                **extra_context,
            },
        )
