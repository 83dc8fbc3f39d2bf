from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import asdict, is_dataclass
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any

from boto3.dynamodb.types import Binary, TypeDeserializer, TypeSerializer

_ISO_TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    out = value.astimezone(UTC).isoformat(timespec="milliseconds")
    return out.replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    # Strings without an offset are UTC, same as naive datetimes.
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _midnight_utc(value: date) -> datetime:
    return datetime(value.year, value.month, value.day, tzinfo=UTC)


def to_timestamp(value: Any) -> str:
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, date):
        return format_timestamp(_midnight_utc(value))
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return format_timestamp(datetime.fromtimestamp(float(value) / 1000.0, tz=UTC))
    if isinstance(value, str):
        try:
            return format_timestamp(parse_timestamp(value))
        except ValueError as err:
            raise ValueError(f"invalid timestamp: {value!r}") from err
    raise TypeError(f"cannot convert {type(value).__name__} to a timestamp")


def to_wire(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, date):
        return format_timestamp(_midnight_utc(value))
    if is_dataclass(value) and not isinstance(value, type):
        return to_wire(asdict(value))
    if isinstance(value, Mapping):
        return {k: to_wire(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_wire(v) for v in value]
    if isinstance(value, tuple):
        return [to_wire(v) for v in value]
    return value


def from_wire(value: Any) -> Any:
    if isinstance(value, str) and _ISO_TIMESTAMP.match(value):
        return parse_timestamp(value)
    if isinstance(value, Mapping):
        return {k: from_wire(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_wire(v) for v in value]
    return value


def _floats_to_decimal(value: Any) -> Any:
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, Mapping):
        return {k: _floats_to_decimal(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_floats_to_decimal(v) for v in value]
    if isinstance(value, set):
        return {_floats_to_decimal(v) for v in value}
    return value


def _to_native(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, Mapping):
        return {k: _to_native(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_native(v) for v in value]
    if isinstance(value, set):
        return {_to_native(v) for v in value}
    if isinstance(value, Binary):
        return bytes(value.value)
    return value


def serialize_map(values: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, v in to_wire(dict(values)).items():
        out[k] = _serializer.serialize(_floats_to_decimal(v))
    return out


def deserialize_map(item: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, av in item.items():
        out[k] = _to_native(_deserializer.deserialize(av))
    return from_wire(out)
