"""DynamoDB-backed message store.

Table layout:
    CHAT_CONVERSATIONS_TABLE: chat_room_id (S, partition key)
    CHAT_MESSAGES_TABLE: chat_room_id (S, partition key), message_id (S, sort key),
        timestamp (N, epoch milliseconds)
"""

from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Sequence

import structlog

from infrastructure.clients.aws import DynamoDBClient
from infrastructure.notifications.errors import DirectoryError
from infrastructure.notifications.retention.base import MessageStore

logger = structlog.get_logger()

# TransactWriteItems accepts at most 100 operations
TRANSACTION_LIMIT = 100


def _chunks(items: Sequence[str], size: int) -> Iterator[Sequence[str]]:
    for start in range(0, len(items), size):
        yield items[start : start + size]


class DynamoDBMessageStore(MessageStore):
    """Message store over the conversations and messages tables.

    Args:
        client: DynamoDBClient wrapper
        conversations_table: Conversations table name
        messages_table: Messages table name
        page_size: Items fetched per scan/query page
    """

    def __init__(
        self,
        client: DynamoDBClient,
        conversations_table: str,
        messages_table: str,
        page_size: int = 100,
    ) -> None:
        self._client = client
        self._conversations_table = conversations_table
        self._messages_table = messages_table
        self._page_size = page_size
        self._logger = logger.bind(component="message_store")

    def list_conversations(self) -> Iterator[str]:
        start_key: Optional[Dict[str, Any]] = None

        while True:
            kwargs: Dict[str, Any] = {
                "ProjectionExpression": "chat_room_id",
                "Limit": self._page_size,
            }
            if start_key:
                kwargs["ExclusiveStartKey"] = start_key

            result = self._client.scan(self._conversations_table, **kwargs)
            if not result.is_success:
                raise DirectoryError("Failed to enumerate conversations", response=result)

            data = result.data or {}
            for item in data.get("Items", []):
                yield item["chat_room_id"]["S"]

            start_key = data.get("LastEvaluatedKey")
            if not start_key:
                return

    def list_expired(self, conversation_id: str, cutoff: datetime) -> List[str]:
        cutoff_ms = int(cutoff.timestamp() * 1000)
        message_ids: List[str] = []
        start_key: Optional[Dict[str, Any]] = None

        while True:
            kwargs: Dict[str, Any] = {
                "FilterExpression": "#ts < :cutoff",
                "ProjectionExpression": "message_id",
                "ExpressionAttributeNames": {"#ts": "timestamp"},
                "ExpressionAttributeValues": {
                    ":room": {"S": conversation_id},
                    ":cutoff": {"N": str(cutoff_ms)},
                },
                "Limit": self._page_size,
            }
            if start_key:
                kwargs["ExclusiveStartKey"] = start_key

            result = self._client.query(
                self._messages_table,
                KeyConditionExpression="chat_room_id = :room",
                **kwargs,
            )
            if not result.is_success:
                raise DirectoryError(
                    f"Failed to list expired messages in {conversation_id}",
                    response=result,
                )

            data = result.data or {}
            message_ids.extend(
                item["message_id"]["S"] for item in data.get("Items", [])
            )

            start_key = data.get("LastEvaluatedKey")
            if not start_key:
                return message_ids

    def delete_messages(
        self, conversation_id: str, message_ids: Sequence[str]
    ) -> int:
        deleted = 0
        for chunk in _chunks(message_ids, TRANSACTION_LIMIT):
            result = self._client.transact_write_items(
                TransactItems=[
                    {
                        "Delete": {
                            "TableName": self._messages_table,
                            "Key": {
                                "chat_room_id": {"S": conversation_id},
                                "message_id": {"S": message_id},
                            },
                        }
                    }
                    for message_id in chunk
                ]
            )
            if not result.is_success:
                raise DirectoryError(
                    f"Failed to delete messages in {conversation_id}",
                    response=result,
                    deleted=deleted,
                )
            deleted += len(chunk)

        return deleted
