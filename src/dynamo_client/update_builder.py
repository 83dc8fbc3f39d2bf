from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from .command import Command
from .errors import ValidationError
from .expression import ExpressionBuilder


class UpdateBuilder(Command):
    operation = "UpdateItem"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._key: dict[str, Any] = {}

    def keys(self, keys: Mapping[str, Any]) -> Self:
        self._ensure_configuring()
        self._key.update(self._resolve_keys(keys))
        return self

    def build(self) -> dict[str, Any]:
        if not self.item:
            raise ValidationError("no updates provided")

        expr = ExpressionBuilder()
        for attr_name, value in self.item.items():
            if attr_name in self._key:
                raise ValidationError(f"cannot update key field: {attr_name}")
            expr.assign(attr_name, value)
        rendered = expr.render()

        return {
            "TableName": self._schema.get_table(),
            "Key": dict(self._key),
            "UpdateExpression": rendered["UpdateExpression"],
            "ExpressionAttributeNames": rendered["ExpressionAttributeNames"],
            "ExpressionAttributeValues": rendered["ExpressionAttributeValues"],
        }

    def transact_item(self) -> dict[str, Any]:
        return {"Update": self.build()}

    def execute(self) -> None:
        req = self.build()
        self._mark_executed()
        self._client.update(req)
