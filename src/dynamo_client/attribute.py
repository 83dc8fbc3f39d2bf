from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from .errors import ValidationError
from .marshalling import to_timestamp
from .template import KeyTemplate


@dataclass(frozen=True)
class PlainKind:
    transform: Callable[[Any], Any] | None = None


@dataclass(frozen=True)
class TemplateKind:
    template: KeyTemplate


type AttributeKind = PlainKind | TemplateKind


@dataclass(frozen=True)
class Attribute:
    """One schema field: an optional wire name plus how its value is produced."""

    name: str | None = None
    kind: AttributeKind = PlainKind()

    @property
    def is_template(self) -> bool:
        return isinstance(self.kind, TemplateKind)

    def template(self, literal: str) -> Attribute:
        return replace(self, kind=TemplateKind(KeyTemplate.parse(literal)))


def resolve_wire_value(attribute: Attribute, raw_value: Any) -> Any:
    match attribute.kind:
        case TemplateKind(template=template):
            if raw_value is None or not isinstance(raw_value, Mapping):
                raise ValidationError(
                    f"template field expects a mapping of variables, got {type(raw_value).__name__}"
                )
            return template.generate(raw_value)
        case PlainKind(transform=None):
            return raw_value
        case PlainKind(transform=transform):
            return transform(raw_value)
        case _:
            raise TypeError(f"unsupported attribute kind: {type(attribute.kind).__name__}")


def template(literal: str, name: str | None = None) -> Attribute:
    return Attribute(name=name, kind=TemplateKind(KeyTemplate.parse(literal)))


def pk(name: str | None = None, *, template: str | None = None) -> Attribute:
    attr = Attribute(name=name)
    return attr.template(template) if template is not None else attr


def sk(name: str | None = None, *, template: str | None = None) -> Attribute:
    attr = Attribute(name=name)
    return attr.template(template) if template is not None else attr


def string(name: str | None = None) -> Attribute:
    return Attribute(name=name)


def number(name: str | None = None) -> Attribute:
    return Attribute(name=name)


def boolean(name: str | None = None) -> Attribute:
    return Attribute(name=name)


def object_(name: str | None = None) -> Attribute:
    return Attribute(name=name)


def list_(name: str | None = None) -> Attribute:
    return Attribute(name=name)


def date(name: str | None = None) -> Attribute:
    return Attribute(name=name, kind=PlainKind(transform=_date_transform))


def _date_transform(value: Any) -> Any:
    if value is None:
        return None
    try:
        return to_timestamp(value)
    except (TypeError, ValueError) as err:
        raise ValidationError(str(err)) from err
