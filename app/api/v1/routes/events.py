from fastapi import APIRouter

from infrastructure.services import DispatchEngineDep
from modules.messaging import (
    handle_message_created,
    handle_user_created,
    handle_user_updated,
)
from modules.messaging.schemas import (
    DispatchResponse,
    MessageCreatedEvent,
    UserCreatedEvent,
    UserUpdatedEvent,
)

router = APIRouter(prefix="/events", tags=["Events"])


# Trigger endpoints always return 200; the dispatch state is in the body
@router.post("/message-created")
def message_created(event: MessageCreatedEvent, engine: DispatchEngineDep):
    """Notify the receiver of a newly created chat message."""
    result = handle_message_created(
        event.conversation_id, event.message_id, event.message, engine=engine
    )
    return DispatchResponse.from_result(result).model_dump(by_alias=True)


@router.post("/user-created")
def user_created(event: UserCreatedEvent, engine: DispatchEngineDep):
    """Send the welcome notification to a newly registered user."""
    result = handle_user_created(event.user_id, event.user, engine=engine)
    return DispatchResponse.from_result(result).model_dump(by_alias=True)


@router.post("/user-updated")
def user_updated(event: UserUpdatedEvent):
    """Observe a profile update; reports whether the device token was removed."""
    removed = handle_user_updated(event.user_id, event.before, event.after)
    return {"tokenRemoved": removed}
