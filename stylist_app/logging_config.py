"""Structured logging and correlation helpers for the AuraStyle app."""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import uuid
from typing import Any, Dict, Iterator

CORRELATION_ID = contextvars.ContextVar("correlation_id", default=None)
OPERATION = contextvars.ContextVar("operation", default=None)

# Attributes every LogRecord already carries; ``extra`` may not overwrite them.
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))) | {
    "message",
    "asctime",
}
# Free text typed by shoppers or generated for them stays out of the logs.
_SENSITIVE_KEYS = frozenset({"text", "message", "prompt", "system_instruction", "reply", "api_key"})
_REDACTED = "[redacted]"
_URL_PATTERN = re.compile(r"https?://\S+", re.IGNORECASE)
_EMAIL_PATTERN = re.compile(r"[\w.\-]+@[\w.\-]+")


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line.

    Fields passed through ``log_event`` land at the top level next to the
    event name, the correlation id and the enclosing operation.
    """

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "event": getattr(record, "event", None) or record.getMessage(),
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
            "operation": OPERATION.get(),
        }
        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES and key not in payload
        }
        payload.update(redact_for_log(extras))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: int | str | None = None) -> None:
    """Route the root logger through :class:`JsonFormatter` at ``level`` (or ``LOG_LEVEL``)."""

    if level is None or level == "":
        level = os.getenv("LOG_LEVEL", "INFO").upper()
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level, handlers=[handler], force=True)


def _mask_string(value: str) -> str:
    masked = _URL_PATTERN.sub("[redacted-url]", value)
    return _EMAIL_PATTERN.sub("[redacted-email]", masked)


def redact_for_log(payload: Any) -> Any:
    """Return a copy of ``payload`` with shopper text and credentials masked.

    Values under sensitive keys are replaced outright. Any other string keeps
    its content but loses embedded URLs and email addresses.
    """

    if isinstance(payload, dict):
        return {
            key: _REDACTED if key in _SENSITIVE_KEYS else redact_for_log(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple)):
        return [redact_for_log(item) for item in payload]
    if isinstance(payload, str):
        return _mask_string(payload)
    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    return _mask_string(str(payload))


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Make ``correlation_id`` (or the active one, or a new one) current and return it."""

    resolved = correlation_id or CORRELATION_ID.get() or uuid.uuid4().hex
    CORRELATION_ID.set(resolved)
    return resolved


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    token = CORRELATION_ID.set(correlation_id or uuid.uuid4().hex)
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with redacted ``fields`` attached to the record.

    A field whose name collides with a LogRecord attribute (``message``,
    ``name``, ``module``...) is emitted as ``field_<name>``.
    """

    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    extra: Dict[str, Any] = {"event": event, "correlation_id": correlation_id}
    for key, value in redact_for_log(fields).items():
        extra[f"field_{key}" if key in _RECORD_ATTRIBUTES else key] = value
    logger.log(level, event, exc_info=exc_info, extra=extra)


@contextlib.contextmanager
def operation_context(name: str, **attributes: Any) -> Iterator[str]:
    """Scope a fresh correlation id and the operation name to one unit of work."""

    token = OPERATION.set(name)
    try:
        with correlation_context(attributes.get("correlation_id")) as scoped_id:
            yield scoped_id
    finally:
        OPERATION.reset(token)


__all__ = [
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "redact_for_log",
    "operation_context",
]
