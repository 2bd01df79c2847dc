"""JSON decoding helpers for speedrun.com response envelopes.

Every payload the service returns is wrapped as ``{"data": ...}``; list
endpoints add ``{"pagination": {"size": n, ...}}`` and embedded
sub-resources are wrapped again (``{"game": {"data": {...}}}``). The helpers
here validate JSON types strictly and raise :class:`SpeedrunDecodeError` on
any mismatch so schema drift surfaces to the caller instead of producing
half-populated records.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

from ..errors import SpeedrunDecodeError

T = TypeVar("T")

Decoder = Callable[[Any], T]

__all__ = [
    "Page",
    "decode",
    "data_envelope",
    "page_envelope",
    "embedded",
    "require_dict",
    "get_str",
    "get_int",
    "get_float",
    "get_bool",
    "get_dict",
    "get_list",
    "get_str_list",
    "get_str_map",
    "get_datetime",
]


@dataclass
class Page(Generic[T]):
    """One decoded list response."""

    records: List[T] = field(default_factory=list)
    # pagination.size as reported by the service; len(records) when absent.
    size: int = 0


def decode(body: bytes | str, decoder: Decoder[T]) -> T:
    """Parse ``body`` as JSON and hand the result to ``decoder``."""

    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise SpeedrunDecodeError(f"Response is not valid JSON: {exc}") from exc
    return decoder(payload)


def data_envelope(decoder: Decoder[T]) -> Decoder[T]:
    """Wrap ``decoder`` so it unwraps a ``{"data": {...}}`` envelope first."""

    def _decode(payload: Any) -> T:
        envelope = require_dict(payload, "envelope")
        if "data" not in envelope:
            raise SpeedrunDecodeError("Envelope has no 'data' field")
        return decoder(envelope["data"])

    return _decode


def page_envelope(decoder: Decoder[T]) -> Decoder[Page[T]]:
    """Wrap ``decoder`` so it decodes a ``{"data": [...]}`` list envelope."""

    def _decode(payload: Any) -> Page[T]:
        envelope = require_dict(payload, "envelope")
        items = envelope.get("data")
        if not isinstance(items, list):
            raise SpeedrunDecodeError(
                f"Expected list under 'data', got {type(items).__name__}"
            )
        records = [decoder(item) for item in items]
        pagination = get_dict(envelope, "pagination")
        size = get_int(pagination, "size", len(records))
        return Page(records=records, size=size)

    return _decode


def embedded(
    payload: Mapping[str, Any], key: str, decoder: Decoder[T]
) -> Optional[T]:
    """Decode an embedded ``{"key": {"data": {...}}}`` sub-resource.

    Returns ``None`` when the resource was not embedded, or when the service
    embedded an empty placeholder (it sends ``{"data": []}`` for the level of
    a full-game run).
    """

    wrapper = payload.get(key)
    if wrapper is None:
        return None
    wrapper = require_dict(wrapper, key)
    data = wrapper.get("data")
    if data is None or data == []:
        return None
    return decoder(require_dict(data, key))


def require_dict(value: Any, context: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise SpeedrunDecodeError(
            f"Expected JSON object for {context}, got {type(value).__name__}"
        )
    return value


def _mismatch(key: str, expected: str, value: Any) -> SpeedrunDecodeError:
    return SpeedrunDecodeError(
        f"Field '{key}' should be {expected}, got {type(value).__name__}"
    )


# JSON null is treated like a missing field throughout: the service uses it
# freely for optional values (pronouns, location, level, ...).


def get_str(payload: Mapping[str, Any], key: str, default: str = "") -> str:
    value = payload.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise _mismatch(key, "a string", value)
    return value


def get_int(payload: Mapping[str, Any], key: str, default: int = 0) -> int:
    value = payload.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise _mismatch(key, "an integer", value)
    return value


def get_float(payload: Mapping[str, Any], key: str, default: float = 0.0) -> float:
    value = payload.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _mismatch(key, "a number", value)
    return float(value)


def get_bool(payload: Mapping[str, Any], key: str, default: bool = False) -> bool:
    value = payload.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise _mismatch(key, "a boolean", value)
    return value


def get_dict(payload: Mapping[str, Any], key: str) -> Dict[str, Any]:
    value = payload.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise _mismatch(key, "an object", value)
    return value


def get_list(payload: Mapping[str, Any], key: str) -> List[Any]:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise _mismatch(key, "a list", value)
    return value


def get_str_list(payload: Mapping[str, Any], key: str) -> List[str]:
    items = get_list(payload, key)
    for item in items:
        if not isinstance(item, str):
            raise _mismatch(f"{key}[]", "a string", item)
    return list(items)


def get_str_map(payload: Mapping[str, Any], key: str) -> Dict[str, str]:
    mapping = get_dict(payload, key)
    for name, item in mapping.items():
        if not isinstance(item, str):
            raise _mismatch(f"{key}.{name}", "a string", item)
    return dict(mapping)


def get_datetime(payload: Mapping[str, Any], key: str) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into an aware UTC datetime."""

    raw = get_str(payload, key)
    if not raw:
        return None
    text = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
    try:
        value = datetime.fromisoformat(text)
    except ValueError as exc:
        raise SpeedrunDecodeError(f"Field '{key}' is not a timestamp: {raw!r}") from exc
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
