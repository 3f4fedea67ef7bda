"""Infrastructure AWS clients public API.

DI-friendly AWS clients. The recipient directory and message retention
store are built on DynamoDBClient:

    from infrastructure.clients.aws import DynamoDBClient, SessionProvider

    client = DynamoDBClient(SessionProvider(region="ca-central-1"))
    result = client.get_item("push_users", {"user_id": {"S": "U1"}})
    if result.is_success:
        item = result.data.get("Item")

Instances are provided through ``infrastructure.services``.
"""

from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.clients.aws.session_provider import SessionProvider

__all__ = [
    "SessionProvider",
    "DynamoDBClient",
]
