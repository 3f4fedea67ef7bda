"""Event context binding for structured logging.

Binds a correlation id and event metadata to every log entry emitted while
a trigger, callable or scheduled invocation is being handled.

Usage:
    from infrastructure.logging import bind_event_context

    with bind_event_context(event_type="message_created", message_id="m1"):
        logger.info("dispatch_started")
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator

import structlog


@contextmanager
def bind_event_context(
    correlation_id: Optional[str] = None,
    event_type: Optional[str] = None,
    caller_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind invocation-scoped context to all logs within the block.

    Args:
        correlation_id: Unique invocation identifier. Auto-generated if not provided.
        event_type: Kind of inbound event (message_created, broadcast, ...).
        caller_id: Identity of the authenticated caller (callable boundary only).
        **extra_context: Additional key-value pairs to include in logs.
            ``None`` values are skipped.

    Yields:
        The correlation id bound for the block.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if event_type is not None:
        context["event_type"] = event_type

    if caller_id is not None:
        context["caller_id"] = caller_id

    context.update({k: v for k, v in extra_context.items() if v is not None})

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context."""
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def clear_event_context() -> None:
    """Clear all invocation-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
