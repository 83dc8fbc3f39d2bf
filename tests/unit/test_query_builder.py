from __future__ import annotations

from datetime import UTC, datetime

import pytest

from dynamo_client import InvalidStateError, SchemaOptions, Table, TableSchema, ValidationError, field
from dynamo_client.command import CommandState
from dynamo_client.mocks import FakeDynamoDBClient


def _orders(client: FakeDynamoDBClient, options: SchemaOptions | None = None) -> Table:
    schema = TableSchema.table("orders").region("us-east-1").schema(
        {
            "pk": field.pk().template("USER#{userId}"),
            "sk": field.sk().template("ORDER#{?orderId}"),
            "name": field.string(),
            "status": field.string(),
            "tags": field.list_(),
            "createdAt": field.date(),
        },
        options,
    )
    return Table(schema, client=client)


def test_query_renders_filter_and_limit() -> None:
    req = _orders(FakeDynamoDBClient()).query().contains("name", "foo").limit(5).build()
    assert req == {
        "TableName": "orders",
        "FilterExpression": "contains(#name, :name_contains)",
        "ExpressionAttributeNames": {"#name": "name"},
        "ExpressionAttributeValues": {":name_contains": "foo"},
        "Limit": 5,
    }


def test_query_resolves_template_keys_and_sort_prefix() -> None:
    req = (
        _orders(FakeDynamoDBClient())
        .query()
        .keys({"pk": {"userId": "42"}})
        .begins_with("sk", "ORDER#")
        .index("byUser")
        .build()
    )
    assert req["KeyConditionExpression"] == "#pk = :pk and begins_with(#sk, :sk_begins)"
    assert req["ExpressionAttributeNames"] == {"#pk": "pk", "#sk": "sk"}
    assert req["ExpressionAttributeValues"] == {":pk": "USER#42", ":sk_begins": "ORDER#"}
    assert req["IndexName"] == "byUser"
    assert "FilterExpression" not in req


def test_query_filters_are_joined_with_and() -> None:
    req = (
        _orders(FakeDynamoDBClient())
        .query()
        .keys({"pk": {"userId": "42"}})
        .attribute_exists("status")
        .attribute_not_exists("tags")
        .attribute_type("name", "S")
        .size("tags", ">=", 2)
        .build()
    )
    assert req["KeyConditionExpression"] == "#pk = :pk"
    assert req["FilterExpression"] == (
        "attribute_exists(#status) and attribute_not_exists(#tags) and "
        "attribute_type(#name, :name_type) and size(#tags) >= :tags_size"
    )
    assert req["ExpressionAttributeValues"] == {":pk": "USER#42", ":name_type": "S", ":tags_size": 2}


def test_query_uses_snake_case_wire_names() -> None:
    req = (
        _orders(FakeDynamoDBClient(), SchemaOptions(snake_case_wire_names=True))
        .query()
        .attribute_exists("createdAt")
        .build()
    )
    assert req["FilterExpression"] == "attribute_exists(#created_at)"
    assert req["ExpressionAttributeNames"] == {"#created_at": "created_at"}


def test_query_rejects_unknown_fields_and_bad_operands() -> None:
    query = _orders(FakeDynamoDBClient()).query()

    with pytest.raises(ValidationError, match="unknown field: missing"):
        query.contains("missing", "x")
    with pytest.raises(ValidationError, match="unsupported attribute type"):
        query.attribute_type("name", "STRING")
    with pytest.raises(ValidationError, match="unsupported size operator"):
        query.size("tags", "like", 1)
    with pytest.raises(ValidationError, match="limit must be > 0"):
        query.limit(0)


def test_query_execute_sends_marshalled_request_and_returns_native_items() -> None:
    client = FakeDynamoDBClient()
    client.expect(
        "query",
        {
            "TableName": "orders",
            "KeyConditionExpression": "#pk = :pk",
            "ExpressionAttributeValues": {":pk": {"S": "USER#42"}},
        },
        response={
            "Items": [
                {
                    "pk": {"S": "USER#42"},
                    "sk": {"S": "ORDER#1"},
                    "total": {"N": "3"},
                    "price": {"N": "9.5"},
                    "createdAt": {"S": "2024-01-02T03:04:05.000Z"},
                }
            ],
            "Count": 1,
        },
    )

    items = _orders(client).query().keys({"pk": {"userId": "42"}}).execute()

    client.assert_no_pending()
    assert items == [
        {
            "pk": "USER#42",
            "sk": "ORDER#1",
            "total": 3,
            "price": 9.5,
            "createdAt": datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC),
        }
    ]


def test_query_execute_returns_empty_list_without_items() -> None:
    client = FakeDynamoDBClient()
    client.expect("query", response={})
    assert _orders(client).query().keys({"pk": {"userId": "42"}}).execute() == []


def test_query_builder_is_single_use() -> None:
    client = FakeDynamoDBClient()
    client.expect("query", response={"Items": []})

    query = _orders(client).query().keys({"pk": {"userId": "42"}})
    query.execute()

    assert query.state is CommandState.EXECUTED
    with pytest.raises(InvalidStateError, match="already executed"):
        query.limit(1)
    with pytest.raises(InvalidStateError, match="already executed"):
        query.contains("name", "foo")
    with pytest.raises(InvalidStateError, match="already executed"):
        query.execute()
    assert len(client.calls) == 1


def test_query_builders_do_not_share_state() -> None:
    table = _orders(FakeDynamoDBClient())
    first = table.query().contains("name", "a")
    second = table.query().contains("status", "b")

    assert first.build()["ExpressionAttributeNames"] == {"#name": "name"}
    assert second.build()["ExpressionAttributeNames"] == {"#status": "status"}
