"""JSON logging with per-request correlation ids.

Every record leaving the root handler is a single JSON line. Inside a request
the record carries the request id, taken from ``X-Request-ID`` or
``X-Correlation-ID`` when the client sent a usable one, else generated.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import IO, Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = ("X-Request-ID", "X-Correlation-ID")
MAX_REQUEST_ID_LENGTH = 128

# ``extra=`` attributes rendered into the JSON line; anything else is dropped
DEFAULT_EXTRA_KEYS = ("endpoint", "elapsed_ms", "user_id", "movie_id", "page", "count")

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("urllib3", "werkzeug")


class JSONFormatter(logging.Formatter):
    """Render log records as JSON objects restricted to known ``extra`` keys."""

    def __init__(self, extra_keys: Iterable[str] = DEFAULT_EXTRA_KEYS) -> None:
        super().__init__()
        self.extra_keys = tuple(extra_keys)

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update(
            {key: getattr(record, key) for key in self.extra_keys if hasattr(record, key)}
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` on every record (``None`` outside requests)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def _incoming_request_id() -> str | None:
    for header in CORRELATION_HEADERS:
        value = (request.headers.get(header) or "").strip()
        if value and len(value) <= MAX_REQUEST_ID_LENGTH and value.isprintable():
            return value
    return None


def ensure_request_id() -> str:
    """Return the id of the current request, assigning one on first use.

    Outside a request context a fresh id is returned on every call.
    """
    if not has_request_context():
        return str(uuid4())
    request_id = getattr(g, "request_id", None)
    if request_id is None:
        request_id = _incoming_request_id() or str(uuid4())
        g.request_id = request_id
    return request_id


def _resolve_level(level: str | int) -> int | str:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else level.upper()


def configure_logging(level: str | int = "INFO", *, stream: IO[str] | None = None) -> None:
    """Replace the root handlers with one JSON handler on ``stream`` (stdout).

    :param level: Root level, by name or number.
    :param stream: Output stream; defaults to :data:`sys.stdout`.
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def init_app(app: Flask) -> None:
    """Seed the request id before each request and echo it on the response."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _seed_request_id() -> None:
        ensure_request_id()

    @app.after_request
    def _inject_response_header(response):
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = ["JSONFormatter", "configure_logging", "ensure_request_id", "init_app"]
