"""Structured logging infrastructure.

Centralized structlog configuration for the push dispatch service.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_logger(): Get a logger instance with a specific name
    - get_module_logger(): Get a logger for the calling module
    - bind_event_context(): Context manager for invocation-scoped logging
    - get_correlation_id(): Get current correlation ID from context
    - clear_event_context(): Clear all invocation context

Example:
    from infrastructure.logging import get_module_logger, bind_event_context

    logger = get_module_logger()

    with bind_event_context(event_type="message_created", message_id="m1"):
        logger.info("dispatch_started")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
)

from infrastructure.logging.context import (
    bind_event_context,
    get_correlation_id,
    clear_event_context,
)

from infrastructure.logging.formatters import (
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
    SENSITIVE_PATTERNS,
)

__all__ = [
    # Setup
    "configure_logging",
    "get_logger",
    "get_module_logger",
    # Context
    "bind_event_context",
    "get_correlation_id",
    "clear_event_context",
    # Formatters
    "add_app_info",
    "mask_sensitive_data",
    "truncate_large_values",
    "SENSITIVE_PATTERNS",
]
