"""Notification dispatch core models.

Transport-agnostic models shared by the payload builder, recipient
directory, delivery transports, dispatch engine and retention sweeper.

Uses Pydantic BaseModel for:
- Explicit per-field defaults for optional document fields
- Runtime input validation at the trigger and callable boundaries
- JSON-serializable results for the HTTP layer
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field

logger = structlog.get_logger()


def _coerce_timestamp(value: Any) -> Optional[datetime]:
    """Convert a stored timestamp to an aware datetime.

    Accepts datetimes (naive values are taken as UTC), epoch milliseconds,
    ISO-8601 strings and serialized Firestore timestamps
    (``{"seconds", "nanos"}`` or ``{"_seconds", "_nanoseconds"}``).
    Returns None for anything else.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        nanos = value.get("nanos", value.get("_nanoseconds")) or 0
        if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
            return None
        return datetime.fromtimestamp(seconds + nanos / 1e9, tz=timezone.utc)
    return None


class MessageEvent(BaseModel):
    """One chat message creation, as observed by the message trigger.

    Attributes:
        conversation_id: Containing conversation (chat room) identity
        message_id: Message identity
        sender_id: Sender user identity (optional)
        sender_label: Sender display label, e.g. email (optional)
        receiver_id: Receiver user identity (optional; absent means no recipient)
        text: Message body (optional)
        is_deleted: Deletion flag (default: False)
        created_at: Creation timestamp (timezone-aware)
    """

    model_config = ConfigDict(frozen=True)

    conversation_id: str
    message_id: str
    sender_id: Optional[str] = None
    sender_label: Optional[str] = None
    receiver_id: Optional[str] = None
    text: Optional[str] = None
    is_deleted: bool = False
    created_at: datetime

    @classmethod
    def from_document(
        cls,
        conversation_id: str,
        message_id: str,
        document: Mapping[str, Any],
        fallback_time: Optional[datetime] = None,
    ) -> "MessageEvent":
        """Build an event from a stored message document.

        Document fields: ``senderID``, ``senderEmail``, ``receiverID``,
        ``message``, ``isDeleted``, ``timestamp``. A missing or unreadable
        timestamp falls back to ``fallback_time`` (default: now, UTC).
        """
        raw_timestamp = document.get("timestamp")
        created_at = _coerce_timestamp(raw_timestamp)
        if created_at is None:
            created_at = fallback_time or datetime.now(timezone.utc)
            logger.warning(
                "message_timestamp_fallback",
                conversation_id=conversation_id,
                message_id=message_id,
                timestamp_type=type(raw_timestamp).__name__,
            )

        return cls(
            conversation_id=conversation_id,
            message_id=message_id,
            sender_id=document.get("senderID") or None,
            sender_label=document.get("senderEmail") or None,
            receiver_id=document.get("receiverID") or None,
            text=document.get("message"),
            is_deleted=bool(document.get("isDeleted")),
            created_at=created_at,
        )


class RecipientRecord(BaseModel):
    """A user's notification profile, owned by the recipient directory.

    Attributes:
        user_id: User identity
        token: Delivery token (optional; absence means "cannot deliver")
        notifications_enabled: Notification-enabled flag (default: True)
        sound_enabled: Sound preference (default: True)
        email: Contact email, used for logging only (optional)
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    token: Optional[str] = None
    notifications_enabled: bool = True
    sound_enabled: bool = True
    email: Optional[str] = None

    @property
    def has_token(self) -> bool:
        """True when the recipient has a non-empty delivery token."""
        return bool(self.token)

    @classmethod
    def from_document(
        cls, user_id: str, document: Mapping[str, Any]
    ) -> "RecipientRecord":
        """Build a record from a stored user document.

        Document fields: ``fcmToken``, ``email`` and
        ``notificationSettings.{enabled, sound}``. A setting is false only
        when it is explicitly ``False``.
        """
        settings = document.get("notificationSettings") or {}
        return cls(
            user_id=user_id,
            token=document.get("fcmToken") or None,
            notifications_enabled=settings.get("enabled") is not False,
            sound_enabled=settings.get("sound") is not False,
            email=document.get("email"),
        )


class NotificationPayload(BaseModel):
    """Transport-agnostic notification content. Built per dispatch, never stored.

    Attributes:
        title: Notification title
        body: Notification body (already truncated)
        sound: "default", or None for a silent notification
        data: String key-value routing metadata (type tag, ids, timestamp)
    """

    model_config = ConfigDict(frozen=True)

    title: str
    body: str
    sound: Optional[str] = None
    data: Dict[str, str] = Field(default_factory=dict)

    @property
    def type_tag(self) -> Optional[str]:
        """Event type tag carried in ``data["type"]``."""
        return self.data.get("type")


class DeliveryErrorKind(Enum):
    """Classification of a per-target delivery failure."""

    NONE = "none"
    INVALID_TARGET = "invalid_target"
    TRANSIENT = "transient"
    UNKNOWN = "unknown"


class DeliveryOutcome(BaseModel):
    """Result of one delivery attempt to one target (token or topic).

    Attributes:
        target: Token or topic addressed
        success: Whether the transport accepted the message
        error_kind: Failure classification (NONE on success)
        error_code: Provider error code (e.g. "UNREGISTERED")
        message: Human-readable detail
        message_id: Provider message id on success
    """

    target: str
    success: bool
    error_kind: DeliveryErrorKind = DeliveryErrorKind.NONE
    error_code: Optional[str] = None
    message: Optional[str] = None
    message_id: Optional[str] = None

    @classmethod
    def delivered(
        cls, target: str, message_id: Optional[str] = None
    ) -> "DeliveryOutcome":
        """Create a successful outcome."""
        return cls(target=target, success=True, message_id=message_id)

    @classmethod
    def failed(
        cls,
        target: str,
        error_kind: DeliveryErrorKind,
        error_code: Optional[str] = None,
        message: Optional[str] = None,
    ) -> "DeliveryOutcome":
        """Create a failed outcome with the given classification."""
        return cls(
            target=target,
            success=False,
            error_kind=error_kind,
            error_code=error_code,
            message=message,
        )

    @property
    def is_invalid_target(self) -> bool:
        """True when the target no longer addresses a live client."""
        return not self.success and self.error_kind == DeliveryErrorKind.INVALID_TARGET


class BroadcastRequest(BaseModel):
    """Caller-supplied broadcast. Emptiness is checked by the engine."""

    title: str = ""
    body: str = ""
    topic: Optional[str] = None


class DispatchState(Enum):
    """Terminal states of a single dispatch."""

    SKIPPED = "skipped"
    ACKNOWLEDGED = "acknowledged"
    PARTIALLY_FAILED = "partially_failed"
    ERRORED = "errored"


class SkipReason(Enum):
    """Why a dispatch resolved without a send attempt."""

    MESSAGE_DELETED = "message_deleted"
    MISSING_RECEIVER = "missing_receiver"
    RECIPIENT_NOT_FOUND = "recipient_not_found"
    NO_TOKEN = "no_token"
    NOTIFICATIONS_DISABLED = "notifications_disabled"


class DispatchResult(BaseModel):
    """Outcome of one event-triggered dispatch.

    Attributes:
        state: Terminal state
        attempted: Whether a transport call was made
        outcome: Delivery outcome when a send was attempted and returned
        skip_reason: Reason when state is SKIPPED
        token_cleared: Whether an invalid token was removed from the directory
        error: Error detail when state is ERRORED
    """

    state: DispatchState
    attempted: bool = False
    outcome: Optional[DeliveryOutcome] = None
    skip_reason: Optional[SkipReason] = None
    token_cleared: bool = False
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """True for skipped and acknowledged dispatches."""
        return self.state in (DispatchState.SKIPPED, DispatchState.ACKNOWLEDGED)

    @classmethod
    def skipped(cls, reason: SkipReason) -> "DispatchResult":
        return cls(state=DispatchState.SKIPPED, skip_reason=reason)

    @classmethod
    def errored(cls, error: str, attempted: bool = False) -> "DispatchResult":
        return cls(state=DispatchState.ERRORED, attempted=attempted, error=error)


class BroadcastResult(BaseModel):
    """Aggregate outcome of a broadcast.

    Attributes:
        success: Whether the broadcast was carried out (per-token failures
            do not make it unsuccessful)
        target: "topic" or "all_recipients"
        topic: Topic addressed, when target is "topic"
        success_count: Number of targets that accepted the message
        failure_count: Number of targets that failed
        outcomes: Per-target outcomes
        tokens_cleared: Number of recipients whose invalid token was removed
    """

    success: bool = True
    target: str
    topic: Optional[str] = None
    success_count: int = 0
    failure_count: int = 0
    outcomes: List[DeliveryOutcome] = Field(default_factory=list)
    tokens_cleared: int = 0

    def to_response(self) -> Dict[str, Any]:
        """Callable-boundary response: ``{success, response}``."""
        return {
            "success": self.success,
            "response": {
                "target": self.target,
                "topic": self.topic,
                "successCount": self.success_count,
                "failureCount": self.failure_count,
                "tokensCleared": self.tokens_cleared,
                "results": [
                    {
                        "success": outcome.success,
                        "messageId": outcome.message_id,
                        "error": outcome.error_code,
                    }
                    for outcome in self.outcomes
                ],
            },
        }


class SweepResult(BaseModel):
    """Outcome of one retention sweep."""

    cutoff: datetime
    containers_scanned: int = 0
    deleted_count: int = 0
    failed_containers: int = 0
