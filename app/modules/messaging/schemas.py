"""Request and response schemas for the messaging HTTP boundary."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from infrastructure.notifications import DispatchResult


class MessageCreatedEvent(BaseModel):
    """Message-created trigger payload."""

    model_config = ConfigDict(populate_by_name=True)

    conversation_id: str = Field(alias="chatRoomId")
    message_id: str = Field(alias="messageId")
    message: Dict[str, Any] = Field(default_factory=dict)


class UserCreatedEvent(BaseModel):
    """User-created trigger payload."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    user: Dict[str, Any] = Field(default_factory=dict)


class UserUpdatedEvent(BaseModel):
    """User-updated trigger payload: the document before and after the write."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    before: Optional[Dict[str, Any]] = None
    after: Optional[Dict[str, Any]] = None


class DispatchResponse(BaseModel):
    """Trigger acknowledgement returned to the event source."""

    state: str
    attempted: bool = False
    skip_reason: Optional[str] = Field(default=None, serialization_alias="skipReason")
    token_cleared: bool = Field(default=False, serialization_alias="tokenCleared")
    error_kind: Optional[str] = Field(default=None, serialization_alias="errorKind")

    @classmethod
    def from_result(cls, result: DispatchResult) -> "DispatchResponse":
        return cls(
            state=result.state.value,
            attempted=result.attempted,
            skip_reason=result.skip_reason.value if result.skip_reason else None,
            token_cleared=result.token_cleared,
            error_kind=result.outcome.error_kind.value if result.outcome else None,
        )
