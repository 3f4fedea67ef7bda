"""Payload builder.

Pure functions turning event data and recipient preferences into
platform-neutral NotificationPayload values. Platform-specific shaping
(Android channel, APNs badge, grouping tag) is applied by the transport
adapter, not here.
"""

from typing import Optional

from infrastructure.notifications.models import (
    BroadcastRequest,
    MessageEvent,
    NotificationPayload,
    RecipientRecord,
)

BODY_MAX_LENGTH = 100
ELLIPSIS = "..."

DEFAULT_SENDER_LABEL = "Someone"
DEFAULT_MESSAGE_TEXT = "New message"
DEFAULT_SOUND = "default"

CHAT_MESSAGE_TYPE = "chat_message"
WELCOME_TYPE = "welcome"
BROADCAST_TYPE = "broadcast"

WELCOME_TITLE = "👋 Welcome to Chat App!"
WELCOME_BODY = "Start connecting with friends and family."


def truncate_body(text: str, limit: int = BODY_MAX_LENGTH) -> str:
    """Shorten ``text`` to ``limit`` characters, ending with "..." when cut.

    >>> truncate_body("x" * 150)[-3:]
    '...'
    >>> len(truncate_body("x" * 150))
    100
    """
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def resolve_sound(recipient: RecipientRecord) -> Optional[str]:
    """Return "default" unless the recipient explicitly disabled sound."""
    return None if recipient.sound_enabled is False else DEFAULT_SOUND


def epoch_millis(event: MessageEvent) -> str:
    """Event timestamp as epoch milliseconds, string-encoded for data maps."""
    return str(int(event.created_at.timestamp() * 1000))


def build_message_payload(
    event: MessageEvent, recipient: RecipientRecord
) -> NotificationPayload:
    """Build the notification for a new chat message.

    Args:
        event: The created message
        recipient: The receiver's notification profile

    Returns:
        NotificationPayload with sender as title and the (truncated) text as body
    """
    sender_label = event.sender_label or DEFAULT_SENDER_LABEL
    body = truncate_body(event.text) if event.text else DEFAULT_MESSAGE_TEXT

    return NotificationPayload(
        title=sender_label,
        body=body,
        sound=resolve_sound(recipient),
        data={
            "type": CHAT_MESSAGE_TYPE,
            "senderId": event.sender_id or "",
            "senderEmail": sender_label,
            "chatRoomId": event.conversation_id,
            "messageId": event.message_id,
            "timestamp": epoch_millis(event),
        },
    )


def build_welcome_payload() -> NotificationPayload:
    """Fixed greeting sent to newly registered users."""
    return NotificationPayload(
        title=WELCOME_TITLE,
        body=WELCOME_BODY,
        sound=DEFAULT_SOUND,
        data={"type": WELCOME_TYPE},
    )


def build_broadcast_payload(request: BroadcastRequest) -> NotificationPayload:
    """Broadcast content is sent verbatim and silently."""
    data = {"type": BROADCAST_TYPE}
    if request.topic:
        data["topic"] = request.topic
    return NotificationPayload(title=request.title, body=request.body, data=data)
