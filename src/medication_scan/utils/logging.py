# ============================================================================
# src/medication_scan/utils/logging.py
# ============================================================================
"""
Logging configuration and utilities for the medication label scanner.

OCR log records carry `operation_id` and `source_file` (passed with `extra=`)
so one file's submit, polls and retries can be followed in a concurrent
batch. The text format appends them in brackets; the JSON format emits them
as fields.
"""

import functools
import inspect
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

CONTEXT_FIELDS = ("operation_id", "source_file")

# Client libraries that log every request at DEBUG/INFO
NOISY_LOGGERS = ("aiohttp.access", "aiohttp.client", "httpx", "uvicorn.access")


def _record_context(record: logging.LogRecord) -> dict:
    return {
        field: getattr(record, field)
        for field in CONTEXT_FIELDS
        if getattr(record, field, None) is not None
    }


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_json: bool = False
) -> None:
    """
    Configure the root logger for the API server or the CLI.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file written in addition to stdout
        format_json: Emit one JSON object per record
    """
    log_level = getattr(logging, level.upper())
    formatter = JsonFormatter() if format_json else ContextFormatter()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    # Request chatter only at DEBUG
    if log_level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


class ContextFormatter(logging.Formatter):
    """Plain text formatter that appends OCR context when present."""

    def __init__(self):
        super().__init__(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _record_context(record)
        if context:
            line += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"
        return line


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'line': record.lineno
        }
        log_data.update(_record_context(record))

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def log_performance(logger: logging.Logger, operation: str):
    """
    Decorator to log operation performance.

    Works on plain functions and coroutine functions.

    Args:
        logger: Logger instance
        operation: Operation name
    """
    def decorator(func):
        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                start_time = datetime.now()
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    duration = (datetime.now() - start_time).total_seconds()
                    logger.error(f"{operation} failed after {duration:.3f}s: {str(e)}")
                    raise
                duration = (datetime.now() - start_time).total_seconds()
                logger.info(f"{operation} completed in {duration:.3f}s")
                return result

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = datetime.now()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = (datetime.now() - start_time).total_seconds()
                logger.error(f"{operation} failed after {duration:.3f}s: {str(e)}")
                raise
            duration = (datetime.now() - start_time).total_seconds()
            logger.info(f"{operation} completed in {duration:.3f}s")
            return result

        return wrapper
    return decorator
