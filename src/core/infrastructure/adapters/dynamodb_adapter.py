"""Thin DynamoDB adapter wrapping boto3 table operations."""

from typing import Any, Protocol, cast

import boto3


class DynamoDBTable(Protocol):
    """Minimal DynamoDB Table protocol."""

    def put_item(self, *, Item: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def get_item(self, *, Key: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...


class DynamoDBAdapterProtocol(Protocol):
    """Minimal DynamoDB adapter protocol (repository-facing)."""

    def put_item(
        self,
        *,
        item: dict[str, Any],
        condition_expression: str | None = None,
        expression_values: dict[str, Any] | None = None,
    ) -> dict[str, Any]: ...

    def get_item(self, *, key: dict[str, Any]) -> dict[str, Any]: ...


class DynamoDBAdapter:
    """Low-level DynamoDB operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 DynamoDB resource
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(
        self,
        *,
        table_name: str,
        region_name: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        dynamodb = boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region_name,
        )

        self.table: DynamoDBTable = cast(
            DynamoDBTable,
            dynamodb.Table(table_name),
        )

    def put_item(
        self,
        *,
        item: dict[str, Any],
        condition_expression: str | None = None,
        expression_values: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Insert or replace an item, optionally guarded by a condition.

        Raises boto3 exceptions - caught by domain implementation.
        """
        kwargs: dict[str, Any] = {"Item": item}

        if condition_expression:
            kwargs["ConditionExpression"] = condition_expression
        if expression_values:
            kwargs["ExpressionAttributeValues"] = expression_values

        return self.table.put_item(**kwargs)

    def get_item(self, *, key: dict[str, Any]) -> dict[str, Any]:
        """Retrieve item by key (strongly consistent).

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self.table.get_item(Key=key, ConsistentRead=True)

