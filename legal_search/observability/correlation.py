"""
Request correlation IDs.

The current request's ID lives in a ContextVar so it follows the request
through awaited calls and asyncio.gather'd pipeline runs.

Dependencies: contextvars
System role: Request tracing across log records
"""

import re
import uuid
from contextvars import ContextVar

CORRELATION_HEADER = "X-Correlation-ID"

# Client-supplied IDs end up in every log line of the request
_VALID_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Bind a correlation ID to the current context.

    A missing or malformed ID is replaced by a fresh UUID4.

    Args:
        correlation_id: ID received from the caller, if any

    Returns:
        str: The ID now bound to the context
    """
    if not correlation_id or not _VALID_ID.match(correlation_id):
        correlation_id = str(uuid.uuid4())
    correlation_id_ctx.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    """Current correlation ID, empty outside a request."""
    return correlation_id_ctx.get()


def clear_correlation_id() -> None:
    correlation_id_ctx.set("")
