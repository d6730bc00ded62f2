"""Value serializer.

Converts domain values (numbers, dates, geo points, objects, nested
queries) into JSON-safe primitives for the wire, and decodes typed JSON
values coming back from the server.

Anything without a JSON form raises `SerializationError`: a malformed
request must never reach the transport.
"""

import base64
import binascii
import json
import math
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .exceptions import SerializationError
from .schema import GeoPoint
from .types import JSONValue, ObjectFactory

__all__ = (
    "to_json_value",
    "from_json_value",
    "dumps",
    "format_date",
    "parse_date",
)

_datetime_adapter = TypeAdapter(datetime)


def format_date(value: datetime) -> str:
    """Format a datetime as UTC ISO-8601 with millisecond precision.

    Naive datetimes are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return f"{value:%Y-%m-%dT%H:%M:%S}.{value.microsecond // 1000:03d}Z"


def parse_date(iso: str) -> datetime:
    try:
        return _datetime_adapter.validate_python(iso)
    except PydanticValidationError as e:
        raise SerializationError("Invalid date value", iso=iso) from e


def to_json_value(value: Any) -> JSONValue:
    """Recursively convert `value` to JSON-safe primitives.

    Objects exposing a callable `to_json_value()` (queries, geo points,
    distances, domain objects) are converted through it.

    Raises:
        SerializationError: If some part of `value` has no JSON form
    """
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError("Cannot serialize non-finite number", value=value)
        return value
    if isinstance(value, datetime):
        return {"__type": "Date", "iso": format_date(value)}
    if isinstance(value, (bytes, bytearray)):
        return {"__type": "Bytes", "base64": base64.b64encode(bytes(value)).decode("ascii")}
    if isinstance(value, dict):
        result = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise SerializationError("Object keys must be strings", key=key)
            result[key] = to_json_value(item)
        return result
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]

    converter = getattr(value, "to_json_value", None)
    if callable(converter):
        return to_json_value(converter())

    raise SerializationError("Cannot serialize value", type=type(value).__name__)


def dumps(value: Any) -> str:
    """Serialize `value` into a compact JSON string."""
    return json.dumps(to_json_value(value), separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def from_json_value(value: Any, object_factory: Optional[ObjectFactory] = None) -> Any:
    """Decode typed JSON values (`{"__type": ...}`) returned by the server.

    Pointers and embedded objects are handed to `object_factory` when one
    is given; otherwise they stay plain dicts.
    """
    if isinstance(value, list):
        return [from_json_value(item, object_factory) for item in value]
    if not isinstance(value, dict):
        return value

    type_name = value.get("__type")
    if type_name == "Date" and isinstance(value.get("iso"), str):
        return parse_date(value["iso"])
    if type_name == "GeoPoint":
        try:
            return GeoPoint(latitude=value.get("latitude", 0.0), longitude=value.get("longitude", 0.0))
        except PydanticValidationError as e:
            raise SerializationError("Invalid geo point value", value=value) from e
    if type_name == "Bytes" and isinstance(value.get("base64"), str):
        try:
            return base64.b64decode(value["base64"], validate=True)
        except binascii.Error as e:
            raise SerializationError("Invalid bytes value", value=value) from e
    if type_name in ("Pointer", "Object") and object_factory is not None and isinstance(value.get("className"), str):
        return object_factory(value["className"], value)

    return {key: from_json_value(item, object_factory) for key, item in value.items()}
