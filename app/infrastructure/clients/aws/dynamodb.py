"""DynamoDB client for AWS operations.

Provides access to the DynamoDB operations used by the recipient directory
and the message retention store, with consistent error handling and
OperationResult return types.
"""

from typing import Any, Dict, List, Optional

import structlog

from infrastructure.clients.aws.executor import execute_aws_api_call
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.operations.result import OperationResult

logger = structlog.get_logger()


class DynamoDBClient:
    """Client for DynamoDB operations.

    All methods return OperationResult; ``data`` holds the raw boto3
    response (``Item``, ``Items``, ``LastEvaluatedKey``...).

    Args:
        session_provider: SessionProvider instance for credential/config management
        default_role_arn: Optional role assumed when no role is given per call
    """

    def __init__(
        self,
        session_provider: SessionProvider,
        default_role_arn: Optional[str] = None,
    ) -> None:
        self._session_provider = session_provider
        self._default_role_arn = default_role_arn
        self._service_name = "dynamodb"
        self._logger = logger.bind(component="dynamodb_client")

    def _execute(
        self, method: str, role_arn: Optional[str] = None, **kwargs
    ) -> OperationResult:
        effective_role = role_arn or self._default_role_arn
        client_kwargs = self._session_provider.build_client_kwargs(
            service_name=self._service_name, role_arn=effective_role
        )
        return execute_aws_api_call(
            self._service_name,
            method,
            **client_kwargs,
            **kwargs,
        )

    def get_item(
        self,
        table_name: str,
        Key: Dict[str, Any],
        role_arn: Optional[str] = None,
        **kwargs,
    ) -> OperationResult:
        """Get an item from DynamoDB.

        Args:
            table_name: Name of the DynamoDB table
            Key: Primary key of the item (e.g., {"user_id": {"S": "U1"}})
            role_arn: Optional cross-account role ARN
            **kwargs: Additional DynamoDB get_item parameters

        Returns:
            OperationResult with the get_item response; ``Item`` is absent
            when the key does not exist
        """
        return self._execute(
            "get_item", role_arn=role_arn, TableName=table_name, Key=Key, **kwargs
        )

    def update_item(
        self,
        table_name: str,
        Key: Dict[str, Any],
        role_arn: Optional[str] = None,
        **kwargs,
    ) -> OperationResult:
        """Update an item in DynamoDB.

        Args:
            table_name: Name of the DynamoDB table
            Key: Primary key of the item
            role_arn: Optional cross-account role ARN
            **kwargs: UpdateExpression, ConditionExpression, etc.
        """
        return self._execute(
            "update_item", role_arn=role_arn, TableName=table_name, Key=Key, **kwargs
        )

    def query(
        self,
        table_name: str,
        KeyConditionExpression: Any,
        role_arn: Optional[str] = None,
        **kwargs,
    ) -> OperationResult:
        """Query one page of items using a key condition.

        Pass ``ExclusiveStartKey`` to continue from a previous page.
        """
        return self._execute(
            "query",
            role_arn=role_arn,
            TableName=table_name,
            KeyConditionExpression=KeyConditionExpression,
            **kwargs,
        )

    def scan(
        self,
        table_name: str,
        role_arn: Optional[str] = None,
        **kwargs,
    ) -> OperationResult:
        """Scan one page of items from a DynamoDB table.

        Pass ``Limit`` and ``ExclusiveStartKey`` to page through the table.
        """
        return self._execute("scan", role_arn=role_arn, TableName=table_name, **kwargs)

    def transact_write_items(
        self,
        TransactItems: List[Dict[str, Any]],
        role_arn: Optional[str] = None,
        **kwargs,
    ) -> OperationResult:
        """Apply up to 100 writes atomically.

        Args:
            TransactItems: Put/Update/Delete/ConditionCheck operations
            role_arn: Optional cross-account role ARN
        """
        return self._execute(
            "transact_write_items",
            role_arn=role_arn,
            TransactItems=TransactItems,
            **kwargs,
        )

    def healthcheck(
        self, table_name: str, role_arn: Optional[str] = None
    ) -> OperationResult:
        """Lightweight health check: describe the given table once."""
        return self._execute(
            "describe_table",
            role_arn=role_arn,
            TableName=table_name,
            max_retries=0,
        )
