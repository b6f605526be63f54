"""JSON logging for the to-do service.

Every line on stdout is one JSON object. Fixed keys come first (timestamp,
level, logger, message, request_id, service, environment), followed by the
``extra`` fields the call site passed: ``task_id`` and ``owner`` on task
mutations, ``code`` and ``status_code`` on rejected requests, ``method``,
``path`` and ``duration_ms`` on the access line.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

from .config import Settings
from .context import current_request_id

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "request_id",
}


class JsonLogFormatter(logging.Formatter):
    """Render a record and its ``extra`` fields as one JSON line."""

    def __init__(self, *, service: str, environment: str) -> None:
        super().__init__()
        self._service = service
        self._environment = environment

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", current_request_id()),
            "service": self._service,
            "environment": self._environment,
        }
        payload.update(
            (key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        # UUID task ids and similar values fall back to str().
        return json.dumps(payload, ensure_ascii=False, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp records with the id of the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.request_id = current_request_id()
        return True


def configure_logging(settings: Settings) -> None:
    """Send application and uvicorn logs through one JSON stdout handler."""

    level = getattr(logging, settings.log_level, logging.INFO)
    handler_names = ["stdout"]

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": JsonLogFormatter,
                    "service": settings.project_name,
                    "environment": settings.environment,
                }
            },
            "filters": {"request_id": {"()": RequestIdFilter}},
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "json",
                    "filters": ["request_id"],
                }
            },
            "root": {"handlers": handler_names, "level": level},
            "loggers": {
                # The access line comes from CorrelationIdMiddleware instead.
                "uvicorn.access": {"handlers": [], "level": logging.WARNING, "propagate": False},
                "uvicorn.error": {"handlers": handler_names, "level": level, "propagate": False},
            },
        }
    )


__all__ = ["JsonLogFormatter", "RequestIdFilter", "configure_logging"]
