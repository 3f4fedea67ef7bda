"""Firebase Cloud Messaging delivery transport.

Projects neutral payloads onto FCM v1 messages (Android channel, APNs
badge, per-conversation grouping tag) and classifies FCM failures into
delivery outcomes.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import structlog

from infrastructure.clients.fcm import FCMClient
from infrastructure.notifications.errors import TransportError
from infrastructure.notifications.models import (
    DeliveryErrorKind,
    DeliveryOutcome,
    NotificationPayload,
)
from infrastructure.notifications.payloads import CHAT_MESSAGE_TYPE
from infrastructure.notifications.transports.base import DeliveryTransport
from infrastructure.operations import OperationResult

logger = structlog.get_logger()

# FCM codes meaning the token no longer addresses a live client
INVALID_TARGET_CODES = frozenset({"UNREGISTERED"})


@dataclass(frozen=True)
class FcmMessageOptions:
    """Platform-specific presentation options for chat notifications."""

    android_channel_id: str = "chat_messages"
    android_color: str = "#4CAF50"
    apns_badge: int = 1


def to_fcm_message(
    payload: NotificationPayload,
    options: FcmMessageOptions,
    token: Optional[str] = None,
    topic: Optional[str] = None,
) -> Dict[str, Any]:
    """Build an FCM v1 ``Message`` for a token or a topic.

    Chat message payloads get high Android priority, the chat channel,
    a grouping tag set to the conversation id and an APNs badge. Sound
    keys are left out for silent payloads.

    Raises:
        ValueError: If neither or both of token and topic are given
    """
    if (token is None) == (topic is None):
        raise ValueError("Exactly one of token or topic is required")

    message: Dict[str, Any] = {
        "notification": {"title": payload.title, "body": payload.body},
        "data": dict(payload.data),
    }
    if token is not None:
        message["token"] = token
    else:
        message["topic"] = topic

    if payload.type_tag == CHAT_MESSAGE_TYPE:
        android_notification: Dict[str, Any] = {
            "channel_id": options.android_channel_id,
            "color": options.android_color,
        }
        conversation_id = payload.data.get("chatRoomId")
        if conversation_id:
            android_notification["tag"] = conversation_id
        aps: Dict[str, Any] = {
            "badge": options.apns_badge,
            "alert": {"title": payload.title, "body": payload.body},
        }
        if payload.sound:
            android_notification["sound"] = payload.sound
            aps["sound"] = payload.sound
        message["android"] = {"priority": "high", "notification": android_notification}
        message["apns"] = {"payload": {"aps": aps}}
    elif payload.sound:
        message["android"] = {"notification": {"sound": payload.sound}}
        message["apns"] = {"payload": {"aps": {"sound": payload.sound}}}

    return message


def outcome_from_result(target: str, result: OperationResult) -> DeliveryOutcome:
    """Classify an FCM send result into a DeliveryOutcome."""
    if result.is_success:
        message_id = (result.data or {}).get("name")
        return DeliveryOutcome.delivered(target, message_id=message_id)

    code = result.error_code
    detail = result.message or ""
    if code in INVALID_TARGET_CODES or (
        code == "INVALID_ARGUMENT" and "registration token" in detail.lower()
    ):
        kind = DeliveryErrorKind.INVALID_TARGET
    elif result.is_transient:
        kind = DeliveryErrorKind.TRANSIENT
    else:
        kind = DeliveryErrorKind.UNKNOWN

    return DeliveryOutcome.failed(target, kind, error_code=code, message=detail)


class FCMTransport(DeliveryTransport):
    """Delivery transport backed by the FCM HTTP v1 API.

    FCM v1 has no multi-token endpoint, so multicast fans out single sends
    over a thread pool.

    Args:
        client: FCMClient instance
        options: Platform presentation options
        max_workers: Concurrent sends during multicast
    """

    def __init__(
        self,
        client: FCMClient,
        options: Optional[FcmMessageOptions] = None,
        max_workers: int = 8,
    ) -> None:
        self._client = client
        self._options = options or FcmMessageOptions()
        self._max_workers = max_workers
        logger.info("initialized_fcm_transport", max_workers=max_workers)

    @property
    def transport_name(self) -> str:
        return "fcm"

    def _send(self, target: str, message: Dict[str, Any]) -> DeliveryOutcome:
        try:
            result = self._client.send(message)
        except ValueError as e:
            raise TransportError(f"FCM client unavailable: {e}") from e
        return outcome_from_result(target, result)

    def send_one(self, token: str, payload: NotificationPayload) -> DeliveryOutcome:
        message = to_fcm_message(payload, self._options, token=token)
        return self._send(token, message)

    def send_multicast(
        self, tokens: Sequence[str], payload: NotificationPayload
    ) -> List[DeliveryOutcome]:
        if not tokens:
            return []

        workers = max(1, min(self._max_workers, len(tokens)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            outcomes = list(
                executor.map(lambda token: self.send_one(token, payload), tokens)
            )

        logger.info(
            "fcm_multicast_sent",
            token_count=len(tokens),
            success_count=sum(1 for o in outcomes if o.success),
        )
        return outcomes

    def send_to_topic(self, topic: str, payload: NotificationPayload) -> DeliveryOutcome:
        message = to_fcm_message(payload, self._options, topic=topic)
        return self._send(topic, message)

    def health_check(self) -> OperationResult:
        return self._client.healthcheck()
