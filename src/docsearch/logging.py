"""Logging setup and the per-request id shared by every log record."""
from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)

logger = logging.getLogger("docsearch")


def get_request_id() -> str:
    """Return the id of the current request, or ``"-"`` outside one."""
    return _request_id.get() or "-"


def set_request_id(request_id: str | None = None) -> str:
    """Bind a request id to the current context and return it."""
    value = request_id or uuid.uuid4().hex[:12]
    _request_id.set(value)
    return value


class RequestIdFilter(logging.Filter):
    """Attach ``request_id`` to every record passing through a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


def setup_logging(level: str | None = None) -> None:
    """Configure root logging once, writing to stdout.

    Level defaults to ``settings.LOG_LEVEL``.
    """
    if level is None:
        from docsearch.config import settings
        level = settings.LOG_LEVEL

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s [%(request_id)s] %(message)s",
        handlers=[handler],
    )
