from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from .attribute import resolve_wire_value
from .command import Command
from .expression import ExpressionBuilder


class QueryBuilder(Command):
    """Query over a partition, optionally narrowed by sort-key prefix and filters.

    Key conditions and filters are each joined with ``and``; there is no
    ``or`` and no grouping.
    """

    operation = "Query"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._expr = ExpressionBuilder()

    def _attr_name(self, field: str) -> str:
        self._ensure_configuring()
        self._schema.get_attribute(field)
        return self._schema.get_attribute_name(field)

    def keys(self, keys: Mapping[str, Any]) -> Self:
        self._ensure_configuring()
        for field, value in keys.items():
            attr = self._schema.get_attribute(field)
            wire_value = resolve_wire_value(attr, value)
            self._expr.key_equals(self._schema.get_attribute_name(field), wire_value)
        return self

    def attribute_exists(self, field: str) -> Self:
        self._expr.attribute_exists(self._attr_name(field))
        return self

    def attribute_not_exists(self, field: str) -> Self:
        self._expr.attribute_not_exists(self._attr_name(field))
        return self

    def attribute_type(self, field: str, type_: str) -> Self:
        self._expr.attribute_type(self._attr_name(field), type_)
        return self

    def contains(self, field: str, operand: Any) -> Self:
        self._expr.contains(self._attr_name(field), operand)
        return self

    def begins_with(self, field: str, prefix: Any) -> Self:
        self._expr.begins_with(self._attr_name(field), prefix)
        return self

    def size(self, field: str, operator: str, value: int) -> Self:
        self._expr.size(self._attr_name(field), operator, value)
        return self

    def limit(self, limit: int) -> Self:
        self._ensure_configuring()
        self._expr.set_limit(limit)
        return self

    def index(self, index_name: str) -> Self:
        self._ensure_configuring()
        self._expr.set_index(index_name)
        return self

    def build(self) -> dict[str, Any]:
        req: dict[str, Any] = {"TableName": self._schema.get_table()}
        req.update(self._expr.render())
        return req

    def execute(self) -> list[dict[str, Any]]:
        req = self.build()
        self._mark_executed()
        resp = self._client.query(req)
        return list(resp.get("Items", []))
