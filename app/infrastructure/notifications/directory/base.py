"""Recipient directory abstract base class.

The dispatch engine reads notification profiles through this interface and
mutates them only to clear an invalid delivery token.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from infrastructure.notifications.models import RecipientRecord


class RecipientDirectory(ABC):
    """Abstract base class for recipient directories.

    Implementations raise ``DirectoryError`` when the backing store fails.
    Timeouts are the implementation's responsibility.
    """

    @abstractmethod
    def get(self, user_id: str) -> Optional[RecipientRecord]:
        """Return the recipient's profile, or None if the user is unknown."""

    @abstractmethod
    def clear_token(
        self, user_id: str, expected_token: Optional[str] = None
    ) -> None:
        """Remove the recipient's delivery token.

        When ``expected_token`` is given, the token is removed only if it is
        still the stored one, so a token registered after the failed send
        survives.

        Idempotent: clearing an already-absent or replaced token, or the
        token of an unknown user, is not an error.
        """

    @abstractmethod
    def list_with_token(self) -> Iterator[RecipientRecord]:
        """Lazily enumerate every recipient that has a delivery token.

        One-shot and finite. Implementations fetch the population page by
        page so memory stays bounded by the page size.
        """

    def health_check(self) -> bool:
        """Whether the backing store is reachable."""
        return True
