"""JSON logging for the closet randomizer.

Every record is rendered as one JSON object carrying the active correlation id,
so a request through the API or a CLI run can be followed across modules.
Item payloads are scrubbed before they reach a handler: free-text notes and
photo locations never leave the process, and long item pools are summarised.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import re
import time
import uuid
from typing import Any, Dict, Iterator, Optional

_correlation_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("correlation_id", default=None)

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

_PRIVATE_FIELDS = frozenset({"notes", "image_uri", "thumb_uri", "imageUri", "thumbUri"})
_PHOTO_PATH = re.compile(r"^(/|[A-Za-z]:\\|file:).+\.(jpe?g|png|webp|heic|avif)$", re.IGNORECASE)
MAX_LOGGED_ITEMS = 5


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", None) or _correlation_id.get(),
        }
        extras = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        extras.pop("correlation_id", None)
        payload.update(redact_for_log(extras))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: int | str = "INFO") -> None:
    """Send root logging through a single JSON handler at ``level``."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level, handlers=[handler], force=True)


def redact_for_log(value: Any) -> Any:
    """Return a log-safe copy of ``value``.

    Private item fields are masked, photo paths and URIs are replaced and
    lists longer than ``MAX_LOGGED_ITEMS`` collapse to a count.
    """

    if isinstance(value, dict):
        return {
            key: "[redacted]" if key in _PRIVATE_FIELDS else redact_for_log(inner) for key, inner in value.items()
        }
    if isinstance(value, (list, tuple, set)):
        if len(value) > MAX_LOGGED_ITEMS:
            return f"<{len(value)} entries>"
        return [redact_for_log(inner) for inner in value]
    if isinstance(value, str):
        if value.lower().startswith(("http://", "https://")) or _PHOTO_PATH.match(value):
            return "[redacted-uri]"
        return value
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Adopt ``correlation_id`` or keep the current one, minting one if unset."""

    if correlation_id:
        _correlation_id.set(correlation_id)
        return correlation_id
    current = _correlation_id.get()
    if current:
        return current
    minted = uuid.uuid4().hex
    _correlation_id.set(minted)
    return minted


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Scope a correlation id to a block, restoring the previous one after."""

    token = _correlation_id.set(correlation_id or uuid.uuid4().hex)
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with structured ``fields`` under the current correlation id."""

    exc_info = fields.pop("exc_info", None)
    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    logger.log(level, event, exc_info=exc_info, extra={"event": event, "correlation_id": correlation_id, **fields})


@contextlib.contextmanager
def operation_context(name: str, logger: logging.Logger | None = None, **fields: Any) -> Iterator[str]:
    """Run a block under a fresh correlation id and log its duration."""

    logger = logger or logging.getLogger(__name__)
    with correlation_context(fields.pop("correlation_id", None)) as scoped_id:
        start = time.perf_counter()
        log_event(logger, logging.DEBUG, f"{name}_started", **fields)
        try:
            yield scoped_id
        except Exception:
            log_event(logger, logging.ERROR, f"{name}_failed", exc_info=True, **fields)
            raise
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        log_event(logger, logging.INFO, f"{name}_completed", duration_ms=duration_ms, **fields)


__all__ = [
    "JsonFormatter",
    "MAX_LOGGED_ITEMS",
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "log_event",
    "operation_context",
    "redact_for_log",
]
