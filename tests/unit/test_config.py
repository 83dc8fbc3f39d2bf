from __future__ import annotations

from typing import Any

import pytest
from botocore.config import Config

import dynamo_client.table as table_module
from dynamo_client import (
    InvalidConfigurationError,
    RegionSource,
    Table,
    TableSchema,
    ambient_region,
    create_boto3_config,
    create_dynamodb_client,
)
from dynamo_client.mocks import FakeDynamoDBClient


class _FakeSession:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def client(self, service_name: str, **kwargs: Any) -> str:
        self.calls.append((service_name, kwargs))
        return "client"


def test_ambient_region_prefers_aws_region() -> None:
    assert ambient_region({"AWS_REGION": "eu-west-1", "AWS_DEFAULT_REGION": "us-east-2"}) == "eu-west-1"
    assert ambient_region({"AWS_REGION": "  ", "AWS_DEFAULT_REGION": "us-east-2"}) == "us-east-2"
    assert ambient_region({}) is None


def test_region_source_resolution() -> None:
    assert RegionSource.explicit("us-west-2").resolve({}) == "us-west-2"
    assert RegionSource.ambient().resolve({"AWS_DEFAULT_REGION": "us-east-2"}) == "us-east-2"

    with pytest.raises(InvalidConfigurationError, match="region name is required"):
        RegionSource.explicit("")
    with pytest.raises(InvalidConfigurationError, match="export AWS_REGION"):
        RegionSource.ambient().resolve({})


def test_create_boto3_config_sets_timeouts() -> None:
    cfg = create_boto3_config(connect_timeout=2.0, read_timeout=5.0)
    assert isinstance(cfg, Config)
    assert cfg.connect_timeout == 2.0
    assert cfg.read_timeout == 5.0


def test_create_dynamodb_client_uses_session_and_endpoint_env() -> None:
    session = _FakeSession()
    cfg = create_boto3_config()

    assert create_dynamodb_client(
        "us-east-1",
        config=cfg,
        session=session,
        environ={"DYNAMODB_ENDPOINT": "http://localhost:8000"},
    ) == "client"
    assert session.calls == [
        ("dynamodb", {"region_name": "us-east-1", "endpoint_url": "http://localhost:8000", "config": cfg})
    ]


def test_create_dynamodb_client_explicit_endpoint_wins() -> None:
    session = _FakeSession()
    create_dynamodb_client(
        "us-east-1",
        endpoint_url="http://dynamo:8000",
        session=session,
        environ={"DYNAMODB_ENDPOINT": "http://localhost:8000"},
    )
    assert session.calls[0][1]["endpoint_url"] == "http://dynamo:8000"

    session = _FakeSession()
    create_dynamodb_client("us-east-1", session=session, environ={})
    assert session.calls[0][1]["endpoint_url"] is None


def test_table_creates_a_client_for_the_schema_region(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[str] = []

    def fake_create(region: str) -> FakeDynamoDBClient:
        seen.append(region)
        return FakeDynamoDBClient()

    monkeypatch.setattr(table_module, "create_dynamodb_client", fake_create)

    table = Table(TableSchema.table("orders").region("ap-south-1"))
    assert seen == ["ap-south-1"]
    assert isinstance(table.client.raw, FakeDynamoDBClient)


def test_table_without_region_fails_fast(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.delenv("AWS_DEFAULT_REGION", raising=False)

    with pytest.raises(InvalidConfigurationError, match="region name is required"):
        Table(TableSchema.table("orders"))
