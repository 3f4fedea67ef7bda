"""Test data factories for deterministic test data generation."""

from tests.factories.notifications import (
    make_broadcast_request,
    make_message_document,
    make_message_event,
    make_outcome,
    make_payload,
    make_recipient,
    make_user_document,
)

__all__ = [
    "make_broadcast_request",
    "make_message_document",
    "make_message_event",
    "make_outcome",
    "make_payload",
    "make_recipient",
    "make_user_document",
]
