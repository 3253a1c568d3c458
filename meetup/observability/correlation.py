"""
Per-request correlation IDs.

The ID lives in a ContextVar so it follows the request through awaits and
into asyncio.gather children without being passed around explicitly.

System role: Request tracing for logs
"""

import uuid
from contextvars import ContextVar

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind `correlation_id` (or a fresh uuid4 hex) to the current context and return it."""
    correlation_id = correlation_id or uuid.uuid4().hex
    correlation_id_ctx.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    """Return the current ID, or an empty string outside a request."""
    return correlation_id_ctx.get()


def clear_correlation_id() -> None:
    correlation_id_ctx.set("")
