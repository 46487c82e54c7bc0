"""Task values to and from the Firestore REST typed-value format.

Only the shapes a task document holds are supported: null, bool, int,
text, timestamps and arrays. Enums are stored by value and calendar dates
as 'YYYY-MM-DD' strings so documents stay readable in the console.
"""

from datetime import UTC, date, datetime
from enum import Enum
from typing import Any


def encode_value(value: Any) -> dict[str, Any]:
    """Wrap one Python value in its Firestore typed-value object."""
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, Enum):
        return {"stringValue": str(value.value)}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, datetime):
        stamp = value.astimezone(UTC) if value.tzinfo else value.replace(tzinfo=UTC)
        return {"timestampValue": stamp.strftime("%Y-%m-%dT%H:%M:%S.%fZ")}
    if isinstance(value, date):
        return {"stringValue": value.isoformat()}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    raise TypeError(f"Cannot store {type(value).__name__} in a task document")


def encode_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Document body ({'fields': ...}) for a field map."""
    return {"fields": {name: encode_value(v) for name, v in data.items()}}


def decode_value(typed: dict[str, Any]) -> Any:
    if "stringValue" in typed:
        return typed["stringValue"]
    if "timestampValue" in typed:
        # Firestore sends nanoseconds; fromisoformat keeps microseconds.
        return datetime.fromisoformat(typed["timestampValue"].replace("Z", "+00:00"))
    if "arrayValue" in typed:
        return [decode_value(v) for v in typed["arrayValue"].get("values") or []]
    if "integerValue" in typed:
        return int(typed["integerValue"])
    if "booleanValue" in typed:
        return typed["booleanValue"]
    return None


def decode_fields(fields: dict[str, Any] | None) -> dict[str, Any]:
    """Plain dict from a document's 'fields' map (missing map gives {})."""
    return {name: decode_value(v) for name, v in (fields or {}).items()}
