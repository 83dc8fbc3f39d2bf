"""Key templates such as ``"USER#{userId}"`` or ``"ORDER#{?orderId}"``.

``{name}`` marks a required variable and ``{?name}`` an optional one. Any
other brace syntax is left untouched.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import MissingRequiredVariableError, TemplateSyntaxError, ValidationError

_PLACEHOLDER = re.compile(r"\{(\??)(\w+)\}")


def parse_template(literal: str) -> tuple[tuple[str, ...], tuple[str, ...]]:
    if not isinstance(literal, str):
        raise TemplateSyntaxError(literal=repr(literal), detail="template must be a string")

    required: list[str] = []
    optional: list[str] = []
    seen: set[str] = set()

    for match in _PLACEHOLDER.finditer(literal):
        flag, name = match.groups()
        if name in seen:
            raise TemplateSyntaxError(literal=literal, detail=f"duplicate variable: {name}")
        seen.add(name)
        if flag == "?":
            optional.append(name)
        else:
            required.append(name)

    return tuple(required), tuple(optional)


def generate(
    literal: str,
    required_keys: tuple[str, ...],
    optional_keys: tuple[str, ...],
    values: Mapping[str, Any],
) -> str:
    if not isinstance(values, Mapping):
        raise ValidationError("template values must be a mapping")

    # All required keys are checked before anything is substituted.
    for key in required_keys:
        if values.get(key) is None:
            raise MissingRequiredVariableError(key)

    for key in (*required_keys, *optional_keys):
        value = values.get(key)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"template value for {key} must be a string")

    def substitute(match: re.Match[str]) -> str:
        value = values.get(match.group(2))
        return "" if value is None else value

    return _PLACEHOLDER.sub(substitute, literal)


@dataclass(frozen=True)
class KeyTemplate:
    literal: str
    required_keys: tuple[str, ...]
    optional_keys: tuple[str, ...]

    @classmethod
    def parse(cls, literal: str) -> KeyTemplate:
        required, optional = parse_template(literal)
        return cls(literal=literal, required_keys=required, optional_keys=optional)

    @property
    def variables(self) -> tuple[str, ...]:
        return (*self.required_keys, *self.optional_keys)

    def generate(self, values: Mapping[str, Any]) -> str:
        return generate(self.literal, self.required_keys, self.optional_keys, values)
