from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from .command import Command


class GetBuilder(Command):
    operation = "GetItem"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._key: dict[str, Any] = {}

    def keys(self, keys: Mapping[str, Any]) -> Self:
        self._ensure_configuring()
        self._key.update(self._resolve_keys(keys))
        return self

    def build(self) -> dict[str, Any]:
        return {"TableName": self._schema.get_table(), "Key": dict(self._key)}

    def execute(self) -> dict[str, Any] | None:
        req = self.build()
        self._mark_executed()
        resp = self._client.get(req)
        return resp.get("Item") or None


class PutBuilder(Command):
    operation = "PutItem"

    def build(self) -> dict[str, Any]:
        return {"TableName": self._schema.get_table(), "Item": dict(self.item)}

    def transact_item(self) -> dict[str, Any]:
        return {"Put": self.build()}

    def execute(self) -> dict[str, Any]:
        req = self.build()
        self._mark_executed()
        self._client.put(req)
        return dict(self.item)


class DeleteBuilder(Command):
    """Unconditional delete by key.

    ``execute()`` hands back ``self.item``, which only ``set()`` fills. A
    plain delete therefore returns an empty dict, not the deleted item.
    """

    operation = "DeleteItem"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._key: dict[str, Any] = {}

    def keys(self, keys: Mapping[str, Any]) -> Self:
        self._ensure_configuring()
        self._key.update(self._resolve_keys(keys))
        return self

    def build(self) -> dict[str, Any]:
        return {"TableName": self._schema.get_table(), "Key": dict(self._key)}

    def transact_item(self) -> dict[str, Any]:
        return {"Delete": self.build()}

    def execute(self) -> dict[str, Any]:
        req = self.build()
        self._mark_executed()
        self._client.delete(req)
        return dict(self.item)
