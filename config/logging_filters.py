"""
Logging filters for structured log output.

Provides correlation ID tracking across requests and management command runs.
"""
import logging
import threading
import uuid
from contextlib import contextmanager

_local = threading.local()


def get_correlation_id() -> str:
    """Get the current correlation ID (empty string if not set)."""
    return getattr(_local, "correlation_id", "")


def set_correlation_id(cid: str) -> None:
    """Set the correlation ID for the current thread."""
    _local.correlation_id = cid


def new_correlation_id() -> str:
    return str(uuid.uuid4())[:8]


@contextmanager
def correlation_scope(cid: str | None = None):
    """Tag every log record emitted inside the block with one ID."""
    previous = get_correlation_id()
    cid = cid or new_correlation_id()
    set_correlation_id(cid)
    try:
        yield cid
    finally:
        set_correlation_id(previous)


class CorrelationIdFilter(logging.Filter):
    """Attach correlation_id to every log record."""

    def filter(self, record):
        record.correlation_id = get_correlation_id() or "-"
        return True
