"""Tests for DynamoDBClient.

Validates DynamoDB operations with default role fallback and session
provider configuration.
"""

import pytest

from infrastructure.clients.aws import executor
from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.clients.aws.session_provider import SessionProvider


@pytest.mark.unit
class TestDynamoDBClient:
    """Test suite for DynamoDBClient."""

    def test_init_without_default_role_arn(self, dynamodb_client):
        assert dynamodb_client._default_role_arn is None
        assert dynamodb_client._service_name == "dynamodb"

    def test_get_item_uses_default_role(self, monkeypatch, make_fake_client):
        client = DynamoDBClient(
            session_provider=SessionProvider(region="ca-central-1"),
            default_role_arn="arn:aws:iam::123456789012:role/DefaultRole",
        )

        def mock_boto3_client(
            service_name, session_config=None, client_config=None, role_arn=None
        ):
            assert role_arn == "arn:aws:iam::123456789012:role/DefaultRole"
            assert session_config == {"region_name": "ca-central-1"}
            return make_fake_client(
                api_responses={"get_item": {"Item": {"user_id": {"S": "U1"}}}}
            )

        monkeypatch.setattr(executor, "get_boto3_client", mock_boto3_client)

        result = client.get_item("push_users", {"user_id": {"S": "U1"}})

        assert result.is_success
        assert result.data == {"Item": {"user_id": {"S": "U1"}}}

    def test_explicit_role_overrides_default(self, monkeypatch, make_fake_client):
        client = DynamoDBClient(
            session_provider=SessionProvider(region="ca-central-1"),
            default_role_arn="arn:aws:iam::123456789012:role/DefaultRole",
        )

        def mock_boto3_client(
            service_name, session_config=None, client_config=None, role_arn=None
        ):
            assert role_arn == "arn:aws:iam::123456789012:role/Override"
            return make_fake_client(api_responses={"scan": {"Items": []}})

        monkeypatch.setattr(executor, "get_boto3_client", mock_boto3_client)

        result = client.scan(
            "push_users", role_arn="arn:aws:iam::123456789012:role/Override"
        )

        assert result.is_success

    def test_query_passes_table_and_condition(
        self, monkeypatch, make_fake_client, dynamodb_client
    ):
        fake = make_fake_client(api_responses={"query": {"Items": [], "Count": 0}})
        monkeypatch.setattr(executor, "get_boto3_client", lambda *a, **k: fake)

        result = dynamodb_client.query(
            "chat_messages",
            KeyConditionExpression="chat_room_id = :room",
            ExpressionAttributeValues={":room": {"S": "room-1"}},
        )

        assert result.is_success
        method, kwargs = fake.calls[0]
        assert method == "query"
        assert kwargs["TableName"] == "chat_messages"
        assert kwargs["KeyConditionExpression"] == "chat_room_id = :room"
        assert kwargs["ExpressionAttributeValues"] == {":room": {"S": "room-1"}}

    def test_update_item_passes_expressions(
        self, monkeypatch, make_fake_client, dynamodb_client
    ):
        fake = make_fake_client(api_responses={"update_item": {}})
        monkeypatch.setattr(executor, "get_boto3_client", lambda *a, **k: fake)

        dynamodb_client.update_item(
            "push_users",
            Key={"user_id": {"S": "U1"}},
            UpdateExpression="REMOVE fcmToken",
        )

        assert fake.calls == [
            (
                "update_item",
                {
                    "TableName": "push_users",
                    "Key": {"user_id": {"S": "U1"}},
                    "UpdateExpression": "REMOVE fcmToken",
                },
            )
        ]

    def test_transact_write_items(self, monkeypatch, make_fake_client, dynamodb_client):
        fake = make_fake_client(api_responses={"transact_write_items": {}})
        monkeypatch.setattr(executor, "get_boto3_client", lambda *a, **k: fake)
        items = [{"Delete": {"TableName": "t", "Key": {"id": {"S": "1"}}}}]

        result = dynamodb_client.transact_write_items(TransactItems=items)

        assert result.is_success
        assert fake.calls == [("transact_write_items", {"TransactItems": items})]

    def test_healthcheck_describes_table(
        self, monkeypatch, make_fake_client, dynamodb_client
    ):
        fake = make_fake_client(
            api_responses={"describe_table": {"Table": {"TableStatus": "ACTIVE"}}}
        )
        monkeypatch.setattr(executor, "get_boto3_client", lambda *a, **k: fake)

        result = dynamodb_client.healthcheck("push_users")

        assert result.is_success
        assert fake.calls == [("describe_table", {"TableName": "push_users"})]
