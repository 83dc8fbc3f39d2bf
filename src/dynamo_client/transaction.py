from __future__ import annotations

import logging
from typing import Any, Self

from .builders import DeleteBuilder, PutBuilder
from .command import Command, CommandState
from .errors import InvalidStateError, ValidationError
from .update_builder import UpdateBuilder

logger = logging.getLogger(__name__)

type TransactWriteBuilder = PutBuilder | UpdateBuilder | DeleteBuilder

MAX_TRANSACT_ITEMS = 100


class TransactionBuilder(Command):
    """Sends already-configured put/update/delete builders as one TransactWriteItems call.

    Members keep their own table names, so one transaction may span tables.
    ``execute()`` returns this builder's own ``item`` (empty unless ``set()``
    was called on it), not the members' items.
    """

    operation = "TransactWriteItems"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._members: list[TransactWriteBuilder] = []

    @property
    def members(self) -> tuple[TransactWriteBuilder, ...]:
        return tuple(self._members)

    def with_(self, builder: TransactWriteBuilder) -> Self:
        self._ensure_configuring()
        if not isinstance(builder, (PutBuilder, UpdateBuilder, DeleteBuilder)):
            raise ValidationError(f"unsupported transaction action: {type(builder).__name__}")
        if builder.state is not CommandState.CONFIGURING:
            raise InvalidStateError(f"{type(builder).__name__} was already executed")
        if any(member is builder for member in self._members):
            raise ValidationError(f"{type(builder).__name__} is already part of this transaction")
        self._members.append(builder)
        return self

    def build(self) -> dict[str, Any]:
        if not self._members:
            raise ValidationError("a transaction requires at least one action")
        if len(self._members) > MAX_TRANSACT_ITEMS:
            raise ValidationError(f"a transaction supports at most {MAX_TRANSACT_ITEMS} actions")
        return {"TransactItems": [member.transact_item() for member in self._members]}

    def execute(self) -> dict[str, Any]:
        req = self.build()
        # Nothing is marked until every member is known to be usable.
        self._ensure_configuring()
        for member in self._members:
            member._ensure_configuring()

        self._mark_executed()
        for member in self._members:
            member._mark_executed()
        logger.debug("transaction with %d actions", len(req["TransactItems"]))
        self._client.transact_write(req)
        return dict(self.item)
