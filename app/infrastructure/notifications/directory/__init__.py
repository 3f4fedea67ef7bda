"""Recipient directory interface and implementations."""

from infrastructure.notifications.directory.base import RecipientDirectory
from infrastructure.notifications.directory.dynamodb import (
    DynamoDBRecipientDirectory,
    record_from_item,
)

__all__ = [
    "RecipientDirectory",
    "DynamoDBRecipientDirectory",
    "record_from_item",
]
