"""
Root-level conftest.py for integration tests.

Integration tests wire the real directory, transport, store and engine
together and mock only the client boundary (DynamoDBClient, FCMClient).
"""

from unittest.mock import MagicMock

import pytest

from infrastructure.clients.aws import DynamoDBClient
from infrastructure.clients.fcm import FCMClient
from infrastructure.operations import OperationResult, OperationStatus


def user_item(user_id, token=None, enabled=None, sound=None):
    """Low-level DynamoDB item for the users table."""
    item = {"user_id": {"S": user_id}}
    if token is not None:
        item["fcm_token"] = {"S": token}
    if enabled is not None:
        item["notifications_enabled"] = {"BOOL": enabled}
    if sound is not None:
        item["sound_enabled"] = {"BOOL": sound}
    return item


class FakeUsersTable:
    """Users table behind a mocked DynamoDBClient."""

    def __init__(self, items):
        self.items = {item["user_id"]["S"]: item for item in items}

    def get_item(self, table_name, Key, **kwargs):
        item = self.items.get(Key["user_id"]["S"])
        return OperationResult.success(data={"Item": item} if item else {})

    def update_item(self, table_name, Key, **kwargs):
        user_id = Key["user_id"]["S"]
        if user_id not in self.items:
            return OperationResult.permanent_error(
                "The conditional request failed",
                error_code="ConditionalCheckFailedException",
            )
        stale = kwargs.get("ExpressionAttributeValues", {}).get(":stale", {}).get("S")
        if stale and self.items[user_id].get("fcm_token", {}).get("S") != stale:
            return OperationResult.permanent_error(
                "The conditional request failed",
                error_code="ConditionalCheckFailedException",
            )
        self.items[user_id].pop("fcm_token", None)
        return OperationResult.success(data={})

    def scan(self, table_name, **kwargs):
        items = [item for item in self.items.values() if "fcm_token" in item]
        return OperationResult.success(data={"Items": items})


@pytest.fixture
def users_table():
    return FakeUsersTable(
        [
            user_item("receiver-1", token="token-a"),
            user_item("receiver-2", token="token-stale"),
            user_item("receiver-3", token="token-muted", enabled=False),
            user_item("receiver-4"),
        ]
    )


@pytest.fixture
def mock_dynamodb_client(users_table):
    client = MagicMock(spec=DynamoDBClient)
    client.get_item.side_effect = users_table.get_item
    client.update_item.side_effect = users_table.update_item
    client.scan.side_effect = users_table.scan
    client.healthcheck.return_value = OperationResult.success()
    return client


@pytest.fixture
def fcm_sent():
    """Messages passed to the mocked FCM client, in call order."""
    return []


@pytest.fixture
def mock_fcm_client(fcm_sent):
    """FCM client rejecting ``token-stale`` as UNREGISTERED."""

    def send(message, validate_only=False):
        fcm_sent.append(message)
        if message.get("token") == "token-stale":
            return OperationResult.error(
                OperationStatus.NOT_FOUND,
                "Requested entity was not found.",
                error_code="UNREGISTERED",
            )
        target = message.get("token") or message.get("topic")
        return OperationResult.success(data={"name": f"projects/chat-app/messages/{target}"})

    client = MagicMock(spec=FCMClient)
    client.send.side_effect = send
    client.healthcheck.return_value = OperationResult.success()
    return client
