"""
Structured logging helpers for ingestion and query paths.

Log context often carries upload payloads, 768-component vectors and whole
chunk texts. These helpers render such values as short summaries so a log
line stays readable, and never raise while doing so.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any
from uuid import UUID

DEFAULT_MAX_LENGTH = 200


def _summarise(value: Any) -> str:
    if value is None:
        return "None"
    if isinstance(value, str):
        return value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return f"bytes({len(value)})"
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"
    if hasattr(value, "shape"):
        return f"{type(value).__name__}(shape={tuple(value.shape)})"
    return str(value)


def safe_log_value(value: Any, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Render a context value for a log record.

    Args:
        value: Any value, including vectors and raw upload bytes
        max_length: Characters kept before the text is truncated

    Returns:
        str: Summary or truncated text; a placeholder if rendering fails
    """
    try:
        rendered = _summarise(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"
    if len(rendered) > max_length:
        return f"{rendered[:max_length]}... (truncated, {len(rendered)} total)"
    return rendered


def _safe_context(context: dict[str, Any]) -> dict[str, str]:
    return {key: safe_log_value(value) for key, value in context.items()}


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    """Log `message` at `level` with every context value passed through safe_log_value."""
    logger.log(level, message, extra=_safe_context(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception with traceback, its type and message, and safe context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception being handled
        **context: Additional context values
    """
    extra = _safe_context(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.exception(message, extra=extra)
