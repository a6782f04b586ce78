"""
Structured logging for the catalog web helpers.

Provides:
- JSON-formatted logs with a per-request correlation ID
- Extra context fields attached to individual records
- Truncation of oversized values (descriptions can be long)
"""

import logging
import json
import sys
import uuid
from datetime import datetime, timezone
from contextvars import ContextVar
from typing import Any, Optional

request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

MAX_VALUE_CHARS = 1000
TRUNCATED_CHARS = 500


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.
    """

    SENSITIVE_KEYS = {'password', 'token', 'api_key', 'secret', 'authorization'}

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": self._truncate(record.getMessage()),
            "request_id": request_id_var.get(),
        }

        if record.levelno >= logging.ERROR:
            log_data["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_data'):
            log_data["data"] = self._clean(record.extra_data)

        return json.dumps(log_data, default=str)

    def _clean(self, data: Any, depth: int = 0) -> Any:
        if depth > 5:
            return "[DEPTH_LIMIT]"

        if isinstance(data, dict):
            return {
                k: "[REDACTED]" if k.lower() in self.SENSITIVE_KEYS
                else self._clean(v, depth + 1)
                for k, v in data.items()
            }
        elif isinstance(data, (list, tuple)):
            return [self._clean(item, depth + 1) for item in data[:10]]
        elif isinstance(data, str):
            return self._truncate(data)
        return data

    @staticmethod
    def _truncate(value: str) -> str:
        if len(value) > MAX_VALUE_CHARS:
            return value[:TRUNCATED_CHARS] + "... [TRUNCATED]"
        return value


def setup_logging(level: str = "INFO", json_output: bool = True):
    """
    Configure the root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        json_output: If True, emit JSON lines; otherwise, human-readable
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    if json_output:
        console_handler.setFormatter(StructuredFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
        ))
    root_logger.addHandler(console_handler)

    # Python-Markdown logs extension loading at DEBUG
    logging.getLogger("MARKDOWN").setLevel(logging.WARNING)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra
):
    """Log a message with extra context data."""
    if not logger.isEnabledFor(level):
        return
    record = logger.makeRecord(
        logger.name,
        level,
        "",
        0,
        message,
        (),
        None
    )
    record.extra_data = extra
    logger.handle(record)


def log_warning(logger: logging.Logger, message: str, **extra):
    log_with_context(logger, logging.WARNING, message, **extra)


def set_request_id(request_id: Optional[str] = None) -> str:
    """Bind a correlation ID to the current context, generating one if needed."""
    value = request_id or str(uuid.uuid4())[:8]
    request_id_var.set(value)
    return value

def clear_request_id():
    request_id_var.set(None)
