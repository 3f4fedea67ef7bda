"""Messaging event handlers.

Each handler binds the event to the log context, converts the inbound
document into core models and delegates to the dispatch engine or the
retention sweeper. Trigger handlers never raise: every path resolves to a
logged DispatchResult. The broadcast handler surfaces typed DispatchError
subclasses to its caller.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from infrastructure.logging import bind_event_context, get_module_logger
from infrastructure.notifications import (
    BroadcastRequest,
    DispatchEngine,
    DispatchError,
    DispatchResult,
    InternalError,
    InvalidArgument,
    MessageEvent,
    RecipientRecord,
    RetentionSweeper,
    SweepResult,
    Unauthenticated,
)
from infrastructure.security import CallerAuth
from infrastructure.services import (
    get_dispatch_engine,
    get_retention_sweeper,
    get_settings,
)

logger = get_module_logger()


def handle_message_created(
    conversation_id: str,
    message_id: str,
    document: Mapping[str, Any],
    engine: Optional[DispatchEngine] = None,
) -> DispatchResult:
    """Notify the receiver of a newly created chat message.

    Args:
        conversation_id: Chat room containing the message
        message_id: Id of the created message
        document: Stored message document
        engine: Dispatch engine (default: application engine)
    """
    with bind_event_context(
        event_type="message_created",
        conversation_id=conversation_id,
        message_id=message_id,
    ):
        try:
            event = MessageEvent.from_document(conversation_id, message_id, document)
            result = (engine or get_dispatch_engine()).dispatch_for_message(event)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("message_created_handler_failed", error=str(e), exc_info=True)
            return DispatchResult.errored(str(e))

        logger.info("message_created_handled", state=result.state.value)
        return result


def handle_user_created(
    user_id: str,
    document: Mapping[str, Any],
    engine: Optional[DispatchEngine] = None,
) -> DispatchResult:
    """Send the welcome notification to a newly registered user."""
    with bind_event_context(event_type="user_created", user_id=user_id):
        try:
            record = RecipientRecord.from_document(user_id, document)
            result = (engine or get_dispatch_engine()).dispatch_welcome(
                user_id, record
            )
        except Exception as e:  # pylint: disable=broad-except
            logger.error("user_created_handler_failed", error=str(e), exc_info=True)
            return DispatchResult.errored(str(e))

        logger.info("user_created_handled", state=result.state.value)
        return result


def handle_user_updated(
    user_id: str,
    before: Optional[Mapping[str, Any]],
    after: Optional[Mapping[str, Any]],
) -> bool:
    """Observe a profile update.

    Logs when a delivery token present before the update is gone after it.
    No dispatch action is taken.

    Returns:
        True if the token was removed by this update
    """
    with bind_event_context(event_type="user_updated", user_id=user_id):
        token_before = (before or {}).get("fcmToken")
        token_after = (after or {}).get("fcmToken")
        removed = bool(token_before) and not token_after

        if removed:
            logger.info("fcm_token_removed")
        return removed


def handle_broadcast_call(
    data: Optional[Dict[str, Any]],
    auth: CallerAuth,
    engine: Optional[DispatchEngine] = None,
) -> Dict[str, Any]:
    """Run an operator broadcast on behalf of an asserted caller.

    Args:
        data: Callable payload ``{title, body, topic?}``
        auth: Caller assertion
        engine: Dispatch engine (default: application engine)

    Returns:
        ``{"success": True, "response": {...}}``

    Raises:
        Unauthenticated: Caller is not authenticated
        InvalidArgument: Title or body missing, or payload malformed
        InternalError: Any other failure
    """
    with bind_event_context(event_type="broadcast", caller_id=auth.caller_id):
        try:
            if not auth.authenticated:
                raise Unauthenticated("User must be authenticated")
            try:
                request = BroadcastRequest.model_validate(data or {})
            except ValidationError as e:
                raise InvalidArgument("Title and body are required") from e

            result = (engine or get_dispatch_engine()).dispatch_broadcast(
                request,
                caller_is_authenticated=auth.authenticated,
                caller_id=auth.caller_id,
            )
        except DispatchError as e:
            logger.warning("broadcast_rejected", code=e.code, error=e.message)
            raise
        except Exception as e:  # pylint: disable=broad-except
            logger.error("broadcast_handler_failed", error=str(e), exc_info=True)
            raise InternalError(f"Broadcast failed: {e}") from e

        return result.to_response()


def run_retention_sweep(
    sweeper: Optional[RetentionSweeper] = None,
    now: Optional[datetime] = None,
) -> Optional[SweepResult]:
    """Delete chat messages older than the retention window.

    Returns:
        SweepResult, or None if the sweep could not run
    """
    with bind_event_context(event_type="retention_sweep"):
        try:
            window = timedelta(days=get_settings().retention.RETENTION_DAYS)
            return (sweeper or get_retention_sweeper()).sweep(
                window, now or datetime.now(timezone.utc)
            )
        except Exception as e:  # pylint: disable=broad-except
            logger.error("retention_sweep_failed", error=str(e), exc_info=True)
            return None
