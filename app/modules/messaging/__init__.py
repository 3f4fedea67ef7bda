"""Messaging entry points: trigger, callable and scheduled handlers.

Adapts inbound event shapes (stored documents, callable payloads) to the
notification dispatch core.
"""

from modules.messaging.handlers import (
    handle_broadcast_call,
    handle_message_created,
    handle_user_created,
    handle_user_updated,
    run_retention_sweep,
)

__all__ = [
    "handle_broadcast_call",
    "handle_message_created",
    "handle_user_created",
    "handle_user_updated",
    "run_retention_sweep",
]
