"""Logging setup for the Session Feedback Service.

Production writes one JSON object per line; other environments get a short
colored line per record. While a request is being served, every record is
tagged with that request's ID (see ``RequestContextFilter``).
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from feedback_app.config import get_settings

# Set by the request middleware in main.py; None outside a request
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Fields we promote to top-level keys when a record carries them
CONTEXT_FIELDS = ("request_id", "admin_id", "session_id")

# Attribute names of a bare LogRecord; anything else came in through `extra`
_STANDARD_ATTRS = set(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"} | set(CONTEXT_FIELDS)

# Third-party loggers and the level they are capped at
_QUIET_LOGGERS = {
    "uvicorn": logging.WARNING,
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "alembic": logging.INFO,
    "passlib": logging.ERROR,
}


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON object.

    Context fields (request, admin and session IDs) and any ``extra`` values
    become top-level keys. Values JSON cannot encode are stringified.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value

        payload.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS
        )

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Colored one-line output for local development."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelname, self.RESET)
        line = f"{color}{record.levelname:<8}{self.RESET} {record.name} | {record.getMessage()}"

        request_id = getattr(record, "request_id", None)
        if request_id:
            line = f"{line} [request_id={request_id}]"

        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class RequestContextFilter(logging.Filter):
    """Copy the current request ID from ``request_id_var`` onto each record.

    An explicit ``extra={"request_id": ...}`` on the call wins.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = request_id_var.get()
        if request_id and not getattr(record, "request_id", None):
            record.request_id = request_id
        return True


def setup_logging() -> None:
    """Install the stdout handler on the root logger.

    Replaces any handlers already present, so calling it twice is harmless.
    The formatter is chosen by environment (JSON in production).
    """
    settings = get_settings()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(settings.log_level)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(JSONFormatter() if settings.is_production else DevelopmentFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(settings.log_level)
    root.addHandler(handler)

    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).info(
        f"Logging configured - Environment: {settings.environment}, "
        f"Level: {settings.log_level}"
    )


def get_logger(name: str) -> logging.Logger:
    """Return the module logger for ``name`` (pass ``__name__``)."""
    return logging.getLogger(name)
