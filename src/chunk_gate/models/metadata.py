"""Typed access to the open chunk metadata bag."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal

MetadataKind = Literal["int", "str", "timestamp", "other"]


@dataclass(frozen=True)
class MetadataValue:
    kind: MetadataKind
    value: Any


def classify(value: Any) -> MetadataValue:
    """Tag a raw metadata value with its kind. Booleans are never integers."""
    if isinstance(value, bool):
        return MetadataValue("other", value)
    if isinstance(value, int):
        return MetadataValue("int", value)
    if isinstance(value, datetime):
        return MetadataValue("timestamp", _as_utc(value))
    if isinstance(value, str):
        return MetadataValue("str", value)
    return MetadataValue("other", value)


def lookup(metadata: Mapping[str, Any] | None, key: str) -> MetadataValue | None:
    if not metadata or key not in metadata:
        return None
    return classify(metadata[key])


def get_int(metadata: Mapping[str, Any] | None, key: str) -> int | None:
    """Return an integer value, or None if the key is missing or not an int."""
    entry = lookup(metadata, key)
    if entry is None or entry.kind != "int":
        return None
    return entry.value


def parse_int(metadata: Mapping[str, Any] | None, key: str) -> int | None:
    """Like get_int, but also accepts integer strings such as "12" and integral floats."""
    entry = lookup(metadata, key)
    if entry is None:
        return None
    if entry.kind == "int":
        return entry.value
    if entry.kind == "str":
        try:
            return int(entry.value.strip())
        except ValueError:
            return None
    if isinstance(entry.value, float) and entry.value.is_integer():
        return int(entry.value)
    return None


def get_str(metadata: Mapping[str, Any] | None, key: str) -> str | None:
    entry = lookup(metadata, key)
    if entry is None or entry.value is None:
        return None
    return entry.value if entry.kind == "str" else str(entry.value)


def get_datetime(metadata: Mapping[str, Any] | None, key: str) -> datetime | None:
    """Return a UTC timestamp from a datetime or ISO-8601 string value."""
    entry = lookup(metadata, key)
    if entry is None:
        return None
    if entry.kind == "timestamp":
        return entry.value
    if entry.kind == "str":
        try:
            return _as_utc(datetime.fromisoformat(entry.value.strip()))
        except ValueError:
            return None
    return None


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
