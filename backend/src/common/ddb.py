from collections.abc import Iterator, Mapping
from decimal import Decimal
from typing import Any

import boto3
from botocore.exceptions import ClientError


def get_dynamodb() -> Any:
    """Return DynamoDB resource shared by the stores of one Lambda container."""
    return boto3.resource("dynamodb")


def _decimalize(value: Any) -> Any:
    """Recursively convert floats to Decimal for DynamoDB compatibility."""
    if isinstance(value, float):
        # Use string constructor to avoid binary float artifacts
        return Decimal(str(value))
    if isinstance(value, Mapping):
        return {k: _decimalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(_decimalize(v) for v in value)
    return value


def scan_all(table: Any, **kwargs: Any) -> Iterator[dict[str, Any]]:
    """Yield every item of a table, following LastEvaluatedKey until the scan is exhausted."""
    while True:
        resp = table.scan(**kwargs)
        yield from resp.get("Items", [])
        last_key = resp.get("LastEvaluatedKey")
        if not last_key:
            return
        kwargs["ExclusiveStartKey"] = last_key


def is_conditional_check_failure(exc: ClientError) -> bool:
    """True when a ClientError comes from a failed ConditionExpression."""
    code = exc.response.get("Error", {}).get("Code", "")
    return bool(code == "ConditionalCheckFailedException")
