"""Message store abstract base class used by the retention sweeper."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterator, List, Sequence


class MessageStore(ABC):
    """Abstract base class for chat message storage.

    Implementations raise ``DirectoryError`` when the backing store fails.
    """

    @abstractmethod
    def list_conversations(self) -> Iterator[str]:
        """Lazily enumerate every conversation id."""

    @abstractmethod
    def list_expired(self, conversation_id: str, cutoff: datetime) -> List[str]:
        """Ids of messages in the conversation created strictly before ``cutoff``."""

    @abstractmethod
    def delete_messages(
        self, conversation_id: str, message_ids: Sequence[str]
    ) -> int:
        """Delete the given messages and return how many were deleted.

        Raises:
            DirectoryError: On failure, with ``deleted`` set to the messages
                already removed
        """
