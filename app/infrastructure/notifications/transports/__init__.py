"""Delivery transport interface and implementations."""

from infrastructure.notifications.transports.base import DeliveryTransport
from infrastructure.notifications.transports.fcm import (
    FCMTransport,
    FcmMessageOptions,
    outcome_from_result,
    to_fcm_message,
)

__all__ = [
    "DeliveryTransport",
    "FCMTransport",
    "FcmMessageOptions",
    "outcome_from_result",
    "to_fcm_message",
]
