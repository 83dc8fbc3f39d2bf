"""Placeholder-safe expression accumulation.

Every attribute referenced in an expression goes through ``#name`` /
``:value`` placeholders, so reserved words (``status``, ``name``, ``size``
...) and odd characters in attribute names never reach the expression text.
Placeholder tokens derive from the wire attribute name plus an
operation suffix, which keeps two conditions on the same attribute apart::

    contains(#name, :name_contains) and size(#name) > :name_size
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from .errors import ValidationError

_UNSAFE_TOKEN_CHARS = re.compile(r"[^A-Za-z0-9_]")

ATTRIBUTE_TYPES = frozenset({"S", "SS", "N", "NS", "B", "BS", "BOOL", "NULL", "L", "M"})
SIZE_OPERATORS = frozenset({"=", "<>", "<", "<=", ">", ">="})


@dataclass
class ExpressionBuilder:
    key_conditions: list[str] = field(default_factory=list)
    filter_conditions: list[str] = field(default_factory=list)
    assignments: list[str] = field(default_factory=list)
    names: dict[str, str] = field(default_factory=dict)
    values: dict[str, Any] = field(default_factory=dict)
    limit: int | None = None
    index_name: str | None = None
    _tokens: dict[str, str] = field(default_factory=dict, repr=False)
    _value_refs: dict[tuple[str, str], str] = field(default_factory=dict, repr=False)

    def token(self, attr_name: str) -> str:
        existing = self._tokens.get(attr_name)
        if existing is not None:
            return existing

        base = _UNSAFE_TOKEN_CHARS.sub("_", attr_name) or "_"
        candidate = base
        taken = set(self._tokens.values())
        counter = 1
        while candidate in taken:
            counter += 1
            candidate = f"{base}_{counter}"

        self._tokens[attr_name] = candidate
        return candidate

    def name_ref(self, attr_name: str) -> str:
        ref = f"#{self.token(attr_name)}"
        self.names[ref] = attr_name
        return ref

    def value_ref(self, attr_name: str, value: Any, suffix: str = "") -> str:
        # One ref per (attribute, operation); repeating it rewrites the value.
        owner = (attr_name, suffix)
        ref = self._value_refs.get(owner)
        if ref is None:
            base = f":{self.token(attr_name)}{suffix}"
            ref = base
            taken = set(self._value_refs.values())
            counter = 1
            while ref in taken:
                counter += 1
                ref = f"{base}_{counter}"
            self._value_refs[owner] = ref

        self.values[ref] = value
        return ref

    def key_equals(self, attr_name: str, value: Any) -> ExpressionBuilder:
        name = self.name_ref(attr_name)
        self.key_conditions.append(f"{name} = {self.value_ref(attr_name, value)}")
        return self

    def begins_with(self, attr_name: str, prefix: Any) -> ExpressionBuilder:
        name = self.name_ref(attr_name)
        self.key_conditions.append(f"begins_with({name}, {self.value_ref(attr_name, prefix, '_begins')})")
        return self

    def attribute_exists(self, attr_name: str) -> ExpressionBuilder:
        self.filter_conditions.append(f"attribute_exists({self.name_ref(attr_name)})")
        return self

    def attribute_not_exists(self, attr_name: str) -> ExpressionBuilder:
        self.filter_conditions.append(f"attribute_not_exists({self.name_ref(attr_name)})")
        return self

    def attribute_type(self, attr_name: str, type_: str) -> ExpressionBuilder:
        if type_ not in ATTRIBUTE_TYPES:
            raise ValidationError(f"unsupported attribute type: {type_}")
        name = self.name_ref(attr_name)
        self.filter_conditions.append(f"attribute_type({name}, {self.value_ref(attr_name, type_, '_type')})")
        return self

    def contains(self, attr_name: str, operand: Any) -> ExpressionBuilder:
        name = self.name_ref(attr_name)
        self.filter_conditions.append(f"contains({name}, {self.value_ref(attr_name, operand, '_contains')})")
        return self

    def size(self, attr_name: str, operator: str, value: int) -> ExpressionBuilder:
        op = str(operator or "").strip()
        if op == "!=":
            op = "<>"
        if op not in SIZE_OPERATORS:
            raise ValidationError(f"unsupported size operator: {operator}")
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError("size requires an integer value")
        name = self.name_ref(attr_name)
        self.filter_conditions.append(f"size({name}) {op} {self.value_ref(attr_name, value, '_size')}")
        return self

    def assign(self, attr_name: str, value: Any) -> ExpressionBuilder:
        name = self.name_ref(attr_name)
        self.assignments.append(f"{name} = {self.value_ref(attr_name, value)}")
        return self

    def set_limit(self, limit: int) -> ExpressionBuilder:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise ValidationError("limit must be > 0")
        self.limit = limit
        return self

    def set_index(self, index_name: str) -> ExpressionBuilder:
        if not index_name:
            raise ValidationError("index name is required")
        self.index_name = index_name
        return self

    def render(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.key_conditions:
            out["KeyConditionExpression"] = " and ".join(self.key_conditions)
        if self.filter_conditions:
            out["FilterExpression"] = " and ".join(self.filter_conditions)
        if self.assignments:
            out["UpdateExpression"] = "SET " + ", ".join(self.assignments)
        if self.names:
            out["ExpressionAttributeNames"] = dict(self.names)
        if self.values:
            out["ExpressionAttributeValues"] = dict(self.values)
        if self.limit is not None:
            out["Limit"] = self.limit
        if self.index_name is not None:
            out["IndexName"] = self.index_name
        return out
