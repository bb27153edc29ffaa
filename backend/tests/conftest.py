import contextlib
import os
from collections.abc import Iterator
from typing import Any

import boto3
import pytest
from moto import mock_aws

from .utils import FakeSender

# Ensure AWS SDK has a region and fake credentials for moto
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_SESSION_TOKEN", "testing")

# Environment variables read at import time by common.config
os.environ.setdefault("MOTION_TABLE", "movement")
os.environ.setdefault("TEMPERATURES_TABLE", "temperatures")
os.environ.setdefault("DEVICE_TOKENS_TABLE", "tokens")
os.environ.setdefault("FIREBASE_CREDENTIALS_SECRET_NAME", "firebase/credentials")

TABLE_KEYS: dict[str, str] = {
    os.environ["MOTION_TABLE"]: "dayKey",
    os.environ["TEMPERATURES_TABLE"]: "id",
    os.environ["DEVICE_TOKENS_TABLE"]: "id",
}


@pytest.fixture(scope="session", autouse=True)
def aws_moto() -> Iterator[None]:
    with mock_aws():
        ddb = boto3.client("dynamodb")
        for name, key in TABLE_KEYS.items():
            ddb.create_table(
                TableName=name,
                AttributeDefinitions=[{"AttributeName": key, "AttributeType": "S"}],
                KeySchema=[{"AttributeName": key, "KeyType": "HASH"}],
                BillingMode="PAY_PER_REQUEST",
            )

        # Placeholder credentials; tests that need a working app replace the sender
        secrets = boto3.client("secretsmanager")
        with contextlib.suppress(secrets.exceptions.ResourceExistsException):  # type: ignore[attr-defined]
            secrets.create_secret(Name=os.environ["FIREBASE_CREDENTIALS_SECRET_NAME"], SecretString="x")

        yield


@pytest.fixture(autouse=True)
def empty_tables(aws_moto: None) -> Iterator[None]:
    yield
    ddb = boto3.resource("dynamodb")
    for name, key in TABLE_KEYS.items():
        table = ddb.Table(name)
        for item in table.scan(ProjectionExpression="#k", ExpressionAttributeNames={"#k": key})["Items"]:
            table.delete_item(Key={key: item[key]})


@pytest.fixture
def motion_table() -> Any:
    return boto3.resource("dynamodb").Table(os.environ["MOTION_TABLE"])


@pytest.fixture
def temperatures_table() -> Any:
    return boto3.resource("dynamodb").Table(os.environ["TEMPERATURES_TABLE"])


@pytest.fixture
def tokens_table() -> Any:
    return boto3.resource("dynamodb").Table(os.environ["DEVICE_TOKENS_TABLE"])


@pytest.fixture
def fake_sender() -> FakeSender:
    return FakeSender()
