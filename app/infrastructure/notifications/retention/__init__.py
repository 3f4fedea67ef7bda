"""Message retention: store interface, DynamoDB store and sweeper."""

from infrastructure.notifications.retention.base import MessageStore
from infrastructure.notifications.retention.dynamodb import DynamoDBMessageStore
from infrastructure.notifications.retention.sweeper import RetentionSweeper

__all__ = [
    "MessageStore",
    "DynamoDBMessageStore",
    "RetentionSweeper",
]
