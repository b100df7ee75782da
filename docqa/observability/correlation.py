"""
Correlation IDs for requests and the embedding work they trigger.

An upload request and every embedding task it enqueues log under the same ID:
the HTTP middleware opens a scope per request, the in-process queue inherits
it through the copied asyncio context, and Celery tasks receive it as an
argument and reopen the scope in the worker.

Dependencies: contextvars
System role: Request tracing across the API and embedding workers
"""

import re
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

MAX_CORRELATION_ID_LENGTH = 128

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._:\-]")


def normalize_correlation_id(candidate: str | None) -> str:
    """
    Return a log-safe correlation ID, generating one when none is usable.

    Caller-supplied IDs end up in log lines and response headers, so anything
    outside [A-Za-z0-9._:-] is dropped and the result is capped in length.
    """
    cleaned = _UNSAFE_CHARS.sub("", candidate or "")[:MAX_CORRELATION_ID_LENGTH]
    return cleaned or str(uuid.uuid4())


def get_correlation_id() -> str:
    """Current correlation ID, "" outside any request or task."""
    return correlation_id_ctx.get()


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """
    Bind a correlation ID for the duration of a block.

    The previous value is restored on exit, so nested scopes and reused
    worker threads never leak an ID into unrelated log lines.

    Yields:
        str: The correlation ID bound inside the block
    """
    value = normalize_correlation_id(correlation_id)
    token = correlation_id_ctx.set(value)
    try:
        yield value
    finally:
        correlation_id_ctx.reset(token)
