"""Notification dispatch core.

Turns chat events into push notifications with:
- Event filtering (deleted messages, missing or opted-out recipients)
- Transport-agnostic payload building
- Single-attempt delivery with invalid-token cleanup
- Topic and all-recipient broadcasts
- Scheduled retention sweeps of old chat messages

Usage:
    from infrastructure.notifications import (
        DispatchEngine,
        MessageEvent,
        DispatchState,
    )

    engine = DispatchEngine(directory=directory, transport=transport)

    event = MessageEvent.from_document(room_id, message_id, document)
    result = engine.dispatch_for_message(event)

    if result.state == DispatchState.ACKNOWLEDGED:
        logger.info("notification_sent", message_id=result.outcome.message_id)
"""

# Models
from infrastructure.notifications.models import (
    BroadcastRequest,
    BroadcastResult,
    DeliveryErrorKind,
    DeliveryOutcome,
    DispatchResult,
    DispatchState,
    MessageEvent,
    NotificationPayload,
    RecipientRecord,
    SkipReason,
    SweepResult,
)

# Errors
from infrastructure.notifications.errors import (
    DirectoryError,
    DispatchError,
    InternalError,
    InvalidArgument,
    TransportError,
    Unauthenticated,
)

# Engine
from infrastructure.notifications.dispatcher import DispatchEngine

# Collaborator interfaces and implementations
from infrastructure.notifications.directory import (
    DynamoDBRecipientDirectory,
    RecipientDirectory,
)
from infrastructure.notifications.transports import (
    DeliveryTransport,
    FCMTransport,
    FcmMessageOptions,
)
from infrastructure.notifications.retention import (
    DynamoDBMessageStore,
    MessageStore,
    RetentionSweeper,
)

# Export all public interfaces
__all__ = [
    # Models
    "BroadcastRequest",
    "BroadcastResult",
    "DeliveryErrorKind",
    "DeliveryOutcome",
    "DispatchResult",
    "DispatchState",
    "MessageEvent",
    "NotificationPayload",
    "RecipientRecord",
    "SkipReason",
    "SweepResult",
    # Errors
    "DirectoryError",
    "DispatchError",
    "InternalError",
    "InvalidArgument",
    "TransportError",
    "Unauthenticated",
    # Engine
    "DispatchEngine",
    # Interfaces and implementations
    "RecipientDirectory",
    "DynamoDBRecipientDirectory",
    "DeliveryTransport",
    "FCMTransport",
    "FcmMessageOptions",
    "MessageStore",
    "DynamoDBMessageStore",
    "RetentionSweeper",
]
