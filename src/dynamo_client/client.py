"""Native-value facade over the low-level boto3 DynamoDB client.

Command builders produce requests holding plain Python values. This client
serializes ``Item``, ``Key`` and ``ExpressionAttributeValues`` into
attribute values on the way out (datetimes become ISO-8601 strings first),
and deserializes ``Item``, ``Items`` and ``Attributes`` on the way back
(ISO-8601 strings become datetimes again). Errors raised by boto3 are
never caught here.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .errors import ValidationError
from .marshalling import deserialize_map, serialize_map

logger = logging.getLogger(__name__)

_SERIALIZED_FIELDS = ("Item", "Key", "ExpressionAttributeValues", "ExclusiveStartKey")
_TRANSACT_KINDS = ("Put", "Update", "Delete", "ConditionCheck")


def marshal_request(req: Mapping[str, Any]) -> dict[str, Any]:
    out = dict(req)
    for name in _SERIALIZED_FIELDS:
        if out.get(name) is not None:
            out[name] = serialize_map(out[name])
    if "TransactItems" in out:
        out["TransactItems"] = [_marshal_transact_item(entry) for entry in out["TransactItems"]]
    return out


def _marshal_transact_item(entry: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for kind, inner in entry.items():
        if kind not in _TRANSACT_KINDS:
            raise ValidationError(f"unsupported transaction entry: {kind}")
        out[kind] = marshal_request(inner)
    return out


def unmarshal_response(resp: Mapping[str, Any]) -> dict[str, Any]:
    out = dict(resp)
    for name in ("Item", "Attributes", "LastEvaluatedKey"):
        if out.get(name):
            out[name] = deserialize_map(out[name])
    if "Items" in out:
        out["Items"] = [deserialize_map(item) for item in out["Items"] or []]
    return out


class DocumentClient:
    def __init__(self, client: Any) -> None:
        self._client = client

    @property
    def raw(self) -> Any:
        return self._client

    def _send(self, method: str, req: Mapping[str, Any]) -> dict[str, Any]:
        logger.debug("dynamodb %s table=%s", method, req.get("TableName", "-"))
        resp = getattr(self._client, method)(**marshal_request(req))
        return unmarshal_response(resp or {})

    def get(self, req: Mapping[str, Any]) -> dict[str, Any]:
        return self._send("get_item", req)

    def put(self, req: Mapping[str, Any]) -> dict[str, Any]:
        return self._send("put_item", req)

    def update(self, req: Mapping[str, Any]) -> dict[str, Any]:
        return self._send("update_item", req)

    def delete(self, req: Mapping[str, Any]) -> dict[str, Any]:
        return self._send("delete_item", req)

    def query(self, req: Mapping[str, Any]) -> dict[str, Any]:
        return self._send("query", req)

    def transact_write(self, req: Mapping[str, Any]) -> dict[str, Any]:
        return self._send("transact_write_items", req)
