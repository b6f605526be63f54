"""Per-request correlation id, visible to log records emitted while serving it."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

NO_REQUEST_ID = "-"

_current_request_id: ContextVar[str] = ContextVar("todoapp_request_id", default=NO_REQUEST_ID)


def current_request_id() -> str:
    """Return the id of the request being served, or ``NO_REQUEST_ID``."""

    return _current_request_id.get()


@contextmanager
def request_id_scope(request_id: str | None) -> Iterator[str]:
    """Bind ``request_id`` until the block exits.

    An empty or missing id leaves the current binding untouched, so handlers
    that run outside the middleware (unhandled errors) can use it blindly.
    """

    if not request_id:
        yield current_request_id()
        return
    token = _current_request_id.set(request_id)
    try:
        yield request_id
    finally:
        _current_request_id.reset(token)


__all__ = ["NO_REQUEST_ID", "current_request_id", "request_id_scope"]
