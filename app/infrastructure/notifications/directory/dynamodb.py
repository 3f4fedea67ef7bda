"""DynamoDB-backed recipient directory.

Table layout (``PUSH_USERS_TABLE``):
    user_id (S, partition key), fcm_token (S), email (S),
    notifications_enabled (BOOL), sound_enabled (BOOL)
"""

from typing import Any, Dict, Iterator, Optional

import structlog
from boto3.dynamodb.types import TypeDeserializer

from infrastructure.clients.aws import DynamoDBClient
from infrastructure.notifications.directory.base import RecipientDirectory
from infrastructure.notifications.errors import DirectoryError
from infrastructure.notifications.models import RecipientRecord

logger = structlog.get_logger()

_deserializer = TypeDeserializer()

TOKEN_ATTRIBUTE = "fcm_token"
CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def record_from_item(item: Dict[str, Any]) -> RecipientRecord:
    """Convert a low-level DynamoDB item into a RecipientRecord."""
    data = {key: _deserializer.deserialize(value) for key, value in item.items()}
    return RecipientRecord(
        user_id=str(data["user_id"]),
        token=data.get(TOKEN_ATTRIBUTE) or None,
        notifications_enabled=data.get("notifications_enabled") is not False,
        sound_enabled=data.get("sound_enabled") is not False,
        email=data.get("email"),
    )


class DynamoDBRecipientDirectory(RecipientDirectory):
    """Recipient directory stored in a DynamoDB table.

    Args:
        client: DynamoDBClient wrapper
        table_name: Users table name
        page_size: Items fetched per scan page in ``list_with_token``
    """

    def __init__(
        self,
        client: DynamoDBClient,
        table_name: str,
        page_size: int = 100,
    ) -> None:
        self._client = client
        self._table_name = table_name
        self._page_size = page_size
        self._logger = logger.bind(component="recipient_directory", table=table_name)

    def get(self, user_id: str) -> Optional[RecipientRecord]:
        result = self._client.get_item(
            self._table_name,
            Key={"user_id": {"S": user_id}},
            ConsistentRead=True,
        )
        if not result.is_success:
            raise DirectoryError(f"Failed to read recipient {user_id}", response=result)

        item = (result.data or {}).get("Item")
        if not item:
            return None
        return record_from_item(item)

    def clear_token(
        self, user_id: str, expected_token: Optional[str] = None
    ) -> None:
        kwargs: Dict[str, Any] = {
            "ConditionExpression": "attribute_exists(user_id)",
        }
        if expected_token is not None:
            kwargs["ConditionExpression"] += f" AND {TOKEN_ATTRIBUTE} = :stale"
            kwargs["ExpressionAttributeValues"] = {":stale": {"S": expected_token}}

        result = self._client.update_item(
            self._table_name,
            Key={"user_id": {"S": user_id}},
            UpdateExpression=f"REMOVE {TOKEN_ATTRIBUTE}",
            **kwargs,
        )
        if result.is_success:
            self._logger.info("recipient_token_cleared", user_id=user_id)
            return

        # Unknown user, or the token was already replaced: nothing to clear
        if result.error_code == CONDITIONAL_CHECK_FAILED:
            self._logger.debug("recipient_token_clear_noop", user_id=user_id)
            return

        raise DirectoryError(
            f"Failed to clear token for recipient {user_id}", response=result
        )

    def list_with_token(self) -> Iterator[RecipientRecord]:
        start_key: Optional[Dict[str, Any]] = None
        page = 0

        while True:
            kwargs: Dict[str, Any] = {
                "FilterExpression": f"attribute_exists({TOKEN_ATTRIBUTE})",
                "Limit": self._page_size,
            }
            if start_key:
                kwargs["ExclusiveStartKey"] = start_key

            result = self._client.scan(self._table_name, **kwargs)
            if not result.is_success:
                raise DirectoryError(
                    f"Failed to enumerate recipients (page {page})", response=result
                )

            data = result.data or {}
            for item in data.get("Items", []):
                record = record_from_item(item)
                if record.has_token:
                    yield record

            page += 1
            start_key = data.get("LastEvaluatedKey")
            if not start_key:
                self._logger.debug("recipient_enumeration_complete", pages=page)
                return

    def health_check(self) -> bool:
        return self._client.healthcheck(self._table_name).is_success
