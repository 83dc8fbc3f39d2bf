from __future__ import annotations

import logging
import os
import uuid
from datetime import UTC, datetime

from dynamo_client import Table, TableSchema, create_dynamodb_client, field


def main() -> None:
    logging.basicConfig(level=logging.DEBUG if os.environ.get("DEBUG") else logging.INFO)

    region = os.environ.get("AWS_REGION", "us-east-1")
    client = create_dynamodb_client(region, endpoint_url=os.environ.get("DYNAMODB_ENDPOINT", "http://localhost:8000"))
    table_name = f"dynamo_client_example_{uuid.uuid4().hex[:12]}"

    client.create_table(
        TableName=table_name,
        KeySchema=[{"AttributeName": "pk", "KeyType": "HASH"}, {"AttributeName": "sk", "KeyType": "RANGE"}],
        AttributeDefinitions=[
            {"AttributeName": "pk", "AttributeType": "S"},
            {"AttributeName": "sk", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )
    client.get_waiter("table_exists").wait(TableName=table_name)

    try:
        schema = TableSchema.table(table_name).region(region).schema(
            {
                "pk": field.pk().template("USER#{userId}"),
                "sk": field.sk().template("ORDER#{?orderId}"),
                "status": field.string(),
                "createdAt": field.date(),
            }
        )
        orders = Table(schema, client=client)

        for order_id in ("001", "010", "100"):
            (
                orders.put()
                .set("pk", {"userId": "A"})
                .set("sk", {"orderId": order_id})
                .set("status", "new")
                .set("createdAt", datetime.now(UTC))
                .execute()
            )

        orders.update().keys({"pk": {"userId": "A"}, "sk": {"orderId": "010"}}).set("status", "done").execute()
        print("get:", orders.get().keys({"pk": {"userId": "A"}, "sk": {"orderId": "010"}}).execute())

        items = orders.query().keys({"pk": {"userId": "A"}}).begins_with("sk", "ORDER#0").execute()
        print("query begins_with('ORDER#0'):", items)
    finally:
        client.delete_table(TableName=table_name)


if __name__ == "__main__":
    main()
