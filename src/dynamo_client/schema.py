from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .attribute import Attribute
from .config import RegionSource, ambient_region
from .errors import InvalidConfigurationError, ValidationError

_UPPER = re.compile(r"(?<!^)([A-Z])")


def to_snake_case(key: str) -> str:
    return _UPPER.sub(r"_\1", key).lower()


@dataclass(frozen=True)
class SchemaOptions:
    snake_case_wire_names: bool = False


class TableSchema:
    """Declarative description of one table.

    Configure it once at startup::

        users = TableSchema.table("users").region("us-east-1").schema(
            {"pk": field.pk().template("USER#{userId}"), "createdAt": field.date()},
            SchemaOptions(snake_case_wire_names=True),
        )

    and share it between any number of command builders; they only read it.
    """

    def __init__(self, table_name: str) -> None:
        if not table_name:
            raise InvalidConfigurationError("table name is required")
        self._table_name = table_name
        self._region_source = RegionSource.ambient()
        self._fields: Mapping[str, Attribute] = MappingProxyType({})
        self._options = SchemaOptions()

    @classmethod
    def table(cls, name: str) -> TableSchema:
        return cls(name)

    def region(self, name: str | None = None, *, environ: Mapping[str, str] = os.environ) -> TableSchema:
        if name:
            self._region_source = RegionSource.explicit(name)
            return self
        if ambient_region(environ) is None:
            raise InvalidConfigurationError("region name is required")
        self._region_source = RegionSource.ambient()
        return self

    def schema(self, fields: Mapping[str, Attribute], options: SchemaOptions | None = None) -> TableSchema:
        for key, attr in fields.items():
            if not isinstance(attr, Attribute):
                raise InvalidConfigurationError(f"field {key!r} must be an Attribute")
        self._fields = MappingProxyType(dict(fields))
        self._options = options or SchemaOptions()
        return self

    def get_table(self) -> str:
        return self._table_name

    def get_region(self, environ: Mapping[str, str] = os.environ) -> str:
        return self._region_source.resolve(environ)

    def get_region_source(self) -> RegionSource:
        return self._region_source

    def get_schema(self) -> Mapping[str, Attribute]:
        return self._fields

    def get_schema_options(self) -> SchemaOptions:
        return self._options

    def get_attribute(self, key: str) -> Attribute:
        attr = self._fields.get(key)
        if attr is None:
            raise ValidationError(f"unknown field: {key}")
        return attr

    def get_attribute_name(self, key: str) -> str:
        attr = self._fields.get(key)
        if attr is not None and attr.name:
            return attr.name
        if self._options.snake_case_wire_names:
            return to_snake_case(key)
        return key

    def __repr__(self) -> str:
        return f"TableSchema(table={self._table_name!r}, fields={list(self._fields)!r})"
