"""Delivery transport abstract base class.

A transport accepts a platform-neutral payload keyed by token or topic and
reports one DeliveryOutcome per target.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from infrastructure.notifications.models import DeliveryOutcome, NotificationPayload
from infrastructure.operations import OperationResult


class DeliveryTransport(ABC):
    """Abstract base class for push delivery transports.

    Per-target failures (unregistered token, throttling) are returned as
    failed DeliveryOutcome values. ``TransportError`` is raised only when
    the transport itself cannot operate (e.g. credentials unavailable).
    Timeouts are the implementation's responsibility.
    """

    @property
    @abstractmethod
    def transport_name(self) -> str:
        """Transport identifier used in logs (e.g. "fcm")."""

    @abstractmethod
    def send_one(self, token: str, payload: NotificationPayload) -> DeliveryOutcome:
        """Deliver ``payload`` to a single device token."""

    @abstractmethod
    def send_multicast(
        self, tokens: Sequence[str], payload: NotificationPayload
    ) -> List[DeliveryOutcome]:
        """Deliver ``payload`` to many tokens.

        Returns:
            One outcome per token, in the same order as ``tokens``
        """

    @abstractmethod
    def send_to_topic(self, topic: str, payload: NotificationPayload) -> DeliveryOutcome:
        """Deliver ``payload`` to every subscriber of ``topic``."""

    @abstractmethod
    def health_check(self) -> OperationResult:
        """Check transport health (credentials, connectivity)."""
