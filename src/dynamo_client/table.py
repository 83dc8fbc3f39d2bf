from __future__ import annotations

from typing import Any

from .builders import DeleteBuilder, GetBuilder, PutBuilder
from .client import DocumentClient
from .config import create_dynamodb_client
from .query import QueryBuilder
from .schema import TableSchema
from .transaction import TransactionBuilder
from .update_builder import UpdateBuilder


class Table:
    """Entry point binding a :class:`TableSchema` to a DynamoDB client.

    ``client`` may be a low-level boto3 DynamoDB client, a
    :class:`DocumentClient`, or omitted, in which case a boto3 client is
    created for the schema's region.
    """

    def __init__(self, schema: TableSchema, *, client: Any | None = None) -> None:
        if client is None:
            client = create_dynamodb_client(schema.get_region())
        self._schema = schema
        self._client = client if isinstance(client, DocumentClient) else DocumentClient(client)

    @property
    def schema(self) -> TableSchema:
        return self._schema

    @property
    def client(self) -> DocumentClient:
        return self._client

    def get(self) -> GetBuilder:
        return GetBuilder(self._schema, self._client)

    def put(self) -> PutBuilder:
        return PutBuilder(self._schema, self._client)

    def update(self) -> UpdateBuilder:
        return UpdateBuilder(self._schema, self._client)

    def delete(self) -> DeleteBuilder:
        return DeleteBuilder(self._schema, self._client)

    def query(self) -> QueryBuilder:
        return QueryBuilder(self._schema, self._client)

    def transaction(self) -> TransactionBuilder:
        return TransactionBuilder(self._schema, self._client)
