"""Dispatch engine for event-driven push notifications.

Decides, for each incoming event, whether a notification is sent, to whom,
and what happens to recipient state afterwards:
- Filters deleted messages, missing receivers, unknown recipients,
  token-less recipients and recipients who disabled notifications
- Builds the payload and performs at most one delivery attempt per event
- Clears a recipient's token when that target's own outcome says the
  token no longer addresses a live client
- Fans broadcasts out to a topic or to every recipient with a token

Usage Example:
    from infrastructure.notifications import DispatchEngine, MessageEvent

    engine = DispatchEngine(directory=directory, transport=transport)

    result = engine.dispatch_for_message(event)
    if result.state == DispatchState.PARTIALLY_FAILED:
        logger.warning("push_not_delivered", token_cleared=result.token_cleared)
"""

from typing import Dict, Iterator, List, Optional

import structlog

from infrastructure.notifications.directory.base import RecipientDirectory
from infrastructure.notifications.errors import (
    DirectoryError,
    InternalError,
    InvalidArgument,
    Unauthenticated,
)
from infrastructure.notifications.models import (
    BroadcastRequest,
    BroadcastResult,
    DeliveryOutcome,
    DispatchResult,
    DispatchState,
    MessageEvent,
    RecipientRecord,
    SkipReason,
)
from infrastructure.notifications.payloads import (
    build_broadcast_payload,
    build_message_payload,
    build_welcome_payload,
)
from infrastructure.notifications.transports.base import DeliveryTransport

logger = structlog.get_logger()

MAX_MULTICAST_BATCH = 500


def token_preview(token: Optional[str]) -> Optional[str]:
    """First characters of a token, enough to correlate log lines."""
    if not token:
        return None
    return token[:8] + "..."


class DispatchEngine:
    """Event-driven notification dispatcher.

    Collaborators are injected; the engine holds no state between calls.

    Attributes:
        directory: Recipient directory (profiles and tokens)
        transport: Delivery transport
        multicast_batch_size: Max tokens per multicast call (default: 500)

    Example:
        engine = DispatchEngine(
            directory=DynamoDBRecipientDirectory(client, "push_users"),
            transport=FCMTransport(fcm_client),
        )

        result = engine.dispatch_broadcast(
            BroadcastRequest(title="Maintenance", body="Back soon"),
            caller_is_authenticated=True,
        )
    """

    def __init__(
        self,
        directory: RecipientDirectory,
        transport: DeliveryTransport,
        multicast_batch_size: int = MAX_MULTICAST_BATCH,
    ):
        if not 0 < multicast_batch_size <= MAX_MULTICAST_BATCH:
            raise ValueError(
                f"multicast_batch_size must be between 1 and {MAX_MULTICAST_BATCH}"
            )
        self.directory = directory
        self.transport = transport
        self.multicast_batch_size = multicast_batch_size

        logger.info(
            "initialized_dispatch_engine",
            transport=transport.transport_name,
            multicast_batch_size=multicast_batch_size,
        )

    def dispatch_for_message(self, event: MessageEvent) -> DispatchResult:
        """Notify the receiver of a newly created chat message.

        Process:
        1. Skip deleted messages and messages without a receiver
        2. Look up the receiver; skip when absent, token-less or disabled
        3. Build the payload and send it once
        4. Clear the receiver's token if the outcome is invalid_target

        Args:
            event: The created message

        Returns:
            DispatchResult; never raises
        """
        log = logger.bind(
            conversation_id=event.conversation_id, message_id=event.message_id
        )

        if event.is_deleted:
            log.info("dispatch_skipped", reason=SkipReason.MESSAGE_DELETED.value)
            return DispatchResult.skipped(SkipReason.MESSAGE_DELETED)

        if not event.receiver_id:
            log.info("dispatch_skipped", reason=SkipReason.MISSING_RECEIVER.value)
            return DispatchResult.skipped(SkipReason.MISSING_RECEIVER)

        receiver_id = event.receiver_id
        log = log.bind(receiver_id=receiver_id)

        try:
            recipient = self.directory.get(receiver_id)
        except DirectoryError as e:
            log.error("recipient_lookup_failed", error=str(e))
            return DispatchResult.errored(f"Recipient lookup failed: {e}")

        skip_reason = self._recipient_skip_reason(recipient)
        if skip_reason is not None:
            log.info("dispatch_skipped", reason=skip_reason.value)
            return DispatchResult.skipped(skip_reason)

        assert recipient is not None and recipient.token is not None
        payload = build_message_payload(event, recipient)

        try:
            outcome = self.transport.send_one(recipient.token, payload)
        except Exception as e:  # pylint: disable=broad-except
            log.error(
                "notification_send_failed",
                token_preview=token_preview(recipient.token),
                error=str(e),
                exc_info=True,
            )
            return DispatchResult.errored(f"Transport failure: {e}", attempted=True)

        return self._resolve_single(recipient, outcome, log)

    def dispatch_welcome(
        self, user_id: str, record: RecipientRecord
    ) -> DispatchResult:
        """Send the fixed welcome notification to a newly registered user.

        The record comes from the registration event itself, so the
        directory is not consulted. A failed send never clears the token.

        Args:
            user_id: The new user's identity
            record: The user's initial notification profile

        Returns:
            DispatchResult; never raises
        """
        log = logger.bind(user_id=user_id)

        skip_reason = self._recipient_skip_reason(record)
        if skip_reason is not None:
            log.info("welcome_skipped", reason=skip_reason.value)
            return DispatchResult.skipped(skip_reason)

        assert record.token is not None
        payload = build_welcome_payload()

        try:
            outcome = self.transport.send_one(record.token, payload)
        except Exception as e:  # pylint: disable=broad-except
            log.error("welcome_send_failed", error=str(e), exc_info=True)
            return DispatchResult.errored(f"Transport failure: {e}", attempted=True)

        if outcome.success:
            log.info("welcome_sent", message_id=outcome.message_id)
            return DispatchResult(
                state=DispatchState.ACKNOWLEDGED, attempted=True, outcome=outcome
            )

        log.warning(
            "welcome_not_delivered",
            error_kind=outcome.error_kind.value,
            error_code=outcome.error_code,
        )
        return DispatchResult(
            state=DispatchState.PARTIALLY_FAILED, attempted=True, outcome=outcome
        )

    def dispatch_broadcast(
        self,
        request: BroadcastRequest,
        caller_is_authenticated: bool,
        caller_id: Optional[str] = None,
    ) -> BroadcastResult:
        """Send an operator broadcast to a topic or to every recipient.

        Args:
            request: Title, body and optional topic
            caller_is_authenticated: Caller assertion from the boundary
            caller_id: Asserted caller identity, for logging

        Returns:
            BroadcastResult with per-target outcomes

        Raises:
            Unauthenticated: Caller is not authenticated
            InvalidArgument: Title or body is missing
            InternalError: Directory or transport failure
        """
        if not caller_is_authenticated:
            raise Unauthenticated("User must be authenticated")
        if not request.title.strip() or not request.body.strip():
            raise InvalidArgument("Title and body are required")

        log = logger.bind(caller_id=caller_id, topic=request.topic)
        payload = build_broadcast_payload(request)

        if request.topic:
            try:
                outcome = self.transport.send_to_topic(request.topic, payload)
            except Exception as e:  # pylint: disable=broad-except
                log.error("broadcast_failed", error=str(e), exc_info=True)
                raise InternalError(f"Broadcast failed: {e}") from e

            log.info("broadcast_sent", target="topic", success=outcome.success)
            return BroadcastResult(
                target="topic",
                topic=request.topic,
                success_count=1 if outcome.success else 0,
                failure_count=0 if outcome.success else 1,
                outcomes=[outcome],
            )

        result = BroadcastResult(target="all_recipients")
        holders: Dict[str, List[str]] = {}

        try:
            for batch in self._token_batches(holders):
                outcomes = self.transport.send_multicast(batch, payload)
                result.outcomes.extend(outcomes)
                for outcome in outcomes:
                    if outcome.success:
                        result.success_count += 1
                    else:
                        result.failure_count += 1
                        if outcome.is_invalid_target:
                            result.tokens_cleared += self._clear_holders(
                                outcome.target, holders.get(outcome.target, [])
                            )
        except DirectoryError as e:
            log.error("broadcast_enumeration_failed", error=str(e))
            raise InternalError(f"Broadcast failed: {e}") from e
        except Exception as e:  # pylint: disable=broad-except
            log.error("broadcast_failed", error=str(e), exc_info=True)
            raise InternalError(f"Broadcast failed: {e}") from e

        log.info(
            "broadcast_sent",
            target="all_recipients",
            token_count=len(holders),
            success_count=result.success_count,
            failure_count=result.failure_count,
            tokens_cleared=result.tokens_cleared,
        )
        return result

    def health_check(self) -> Dict[str, bool]:
        """Check health of the directory and transport.

        Returns:
            Dict mapping collaborator name to health status (True=healthy)
        """
        health_status = {}

        try:
            health_status["directory"] = self.directory.health_check()
        except Exception as e:  # pylint: disable=broad-except
            logger.error("directory_health_check_failed", error=str(e))
            health_status["directory"] = False

        try:
            health_status["transport"] = self.transport.health_check().is_success
        except Exception as e:  # pylint: disable=broad-except
            logger.error("transport_health_check_failed", error=str(e))
            health_status["transport"] = False

        return health_status

    @staticmethod
    def _recipient_skip_reason(
        recipient: Optional[RecipientRecord],
    ) -> Optional[SkipReason]:
        if recipient is None:
            return SkipReason.RECIPIENT_NOT_FOUND
        if not recipient.has_token:
            return SkipReason.NO_TOKEN
        if not recipient.notifications_enabled:
            return SkipReason.NOTIFICATIONS_DISABLED
        return None

    def _resolve_single(
        self, recipient: RecipientRecord, outcome: DeliveryOutcome, log
    ) -> DispatchResult:
        if outcome.success:
            log.info("notification_sent", message_id=outcome.message_id)
            return DispatchResult(
                state=DispatchState.ACKNOWLEDGED, attempted=True, outcome=outcome
            )

        log.warning(
            "notification_not_delivered",
            token_preview=token_preview(recipient.token),
            error_kind=outcome.error_kind.value,
            error_code=outcome.error_code,
        )

        token_cleared = False
        if outcome.is_invalid_target:
            token_cleared = self._clear_token(recipient.user_id, recipient.token)

        return DispatchResult(
            state=DispatchState.PARTIALLY_FAILED,
            attempted=True,
            outcome=outcome,
            token_cleared=token_cleared,
        )

    def _clear_token(self, user_id: str, token: str) -> bool:
        """Best-effort token removal; a failure is logged, not escalated."""
        try:
            self.directory.clear_token(user_id, expected_token=token)
        except DirectoryError as e:
            logger.error("token_cleanup_failed", user_id=user_id, error=str(e))
            return False

        logger.info("invalid_token_cleared", user_id=user_id)
        return True

    def _clear_holders(self, token: str, user_ids: List[str]) -> int:
        return sum(1 for user_id in user_ids if self._clear_token(user_id, token))

    def _token_batches(self, holders: Dict[str, List[str]]) -> Iterator[List[str]]:
        """Stream distinct tokens from the directory in multicast-sized batches.

        ``holders`` is filled with token -> user ids as recipients are read,
        so a token shared by several users is sent once and cleared for all.
        Recipients who disabled notifications are left out.
        """
        batch: List[str] = []
        for recipient in self.directory.list_with_token():
            if not recipient.token or not recipient.notifications_enabled:
                continue
            if recipient.token in holders:
                holders[recipient.token].append(recipient.user_id)
                continue
            holders[recipient.token] = [recipient.user_id]
            batch.append(recipient.token)
            if len(batch) >= self.multicast_batch_size:
                yield batch
                batch = []
        if batch:
            yield batch
