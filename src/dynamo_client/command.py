from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Self

from .attribute import resolve_wire_value
from .errors import InvalidStateError

if TYPE_CHECKING:
    from .client import DocumentClient
    from .schema import TableSchema

logger = logging.getLogger(__name__)


class CommandState(enum.Enum):
    CONFIGURING = "configuring"
    EXECUTED = "executed"


class Command:
    """Base for every command builder.

    A builder collects state through fluent calls while ``CONFIGURING``.
    ``execute()`` moves it to ``EXECUTED`` before the request is sent, so a
    builder is single-use even when the call fails.
    """

    operation = ""

    def __init__(self, schema: TableSchema, client: DocumentClient) -> None:
        self._schema = schema
        self._client = client
        self._state = CommandState.CONFIGURING
        self.item: dict[str, Any] = {}

    @property
    def schema(self) -> TableSchema:
        return self._schema

    @property
    def state(self) -> CommandState:
        return self._state

    def set(self, field: str, value: Any) -> Self:
        self._ensure_configuring()
        attr = self._schema.get_attribute(field)
        self.item[self._schema.get_attribute_name(field)] = resolve_wire_value(attr, value)
        return self

    def _resolve_keys(self, keys: Mapping[str, Any]) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for field, value in keys.items():
            attr = self._schema.get_attribute(field)
            out[self._schema.get_attribute_name(field)] = resolve_wire_value(attr, value)
        return out

    def _ensure_configuring(self) -> None:
        if self._state is not CommandState.CONFIGURING:
            raise InvalidStateError(
                f"{type(self).__name__} was already executed; create a new builder"
            )

    def _mark_executed(self) -> None:
        self._ensure_configuring()
        self._state = CommandState.EXECUTED
        logger.debug("%s on %s", self.operation or type(self).__name__, self._schema.get_table())
