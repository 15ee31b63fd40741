"""
JSON serialization helpers shared by the formatters.

orjson produces bytes directly; formatters decode once when they need text.
Values orjson cannot encode natively go through `_default`. Values orjson
rejects outright (integers beyond 64 bits, cyclic containers) are written as
their text instead: logging must not fail because a context value is exotic.
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from typing import Any

import orjson

from . import diagnostics

_OPTIONS = orjson.OPT_NON_STR_KEYS


def describe_exception(exc: BaseException) -> dict[str, Any]:
    """Flatten an exception into type/message/stack_trace fields."""
    return {
        "type": type(exc).__name__,
        "message": str(exc),
        "stack_trace": "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        ),
    }


def _default(obj: Any) -> Any:
    if hasattr(obj, "model_dump"):
        return obj.model_dump(exclude_none=True)
    if isinstance(obj, BaseException):
        return describe_exception(obj)
    if isinstance(obj, Mapping):
        return dict(obj)
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return bytes(obj).decode("utf-8", errors="replace")
    return str(obj)


def _encodable(value: Any) -> bool:
    try:
        orjson.dumps(value, default=_default, option=_OPTIONS)
    except (TypeError, orjson.JSONEncodeError):
        return False
    return True


def serialize_mapping_to_json_bytes(payload: Mapping[str, Any]) -> bytes:
    """Serialize a mapping to compact JSON bytes.

    Top-level values orjson refuses are replaced by their ``str()`` and keys
    that are not strings are stringified; the rest of the mapping is kept.
    """
    try:
        return orjson.dumps(dict(payload), default=_default, option=_OPTIONS)
    except (TypeError, orjson.JSONEncodeError) as e:
        reason = str(e)

    safe: dict[str, Any] = {}
    for key, value in payload.items():
        name = key if isinstance(key, str) else str(key)
        if _encodable(value):
            safe[name] = value
        else:
            diagnostics.warn(
                "serialization",
                "value not JSON encodable, written as text",
                key=name,
                value_type=type(value).__name__,
                reason=reason,
            )
            safe[name] = str(value)
    return orjson.dumps(safe, default=_default, option=_OPTIONS)


def serialize_value(value: Any) -> str:
    """Serialize any value to a compact JSON string."""
    try:
        return orjson.dumps(value, default=_default, option=_OPTIONS).decode("utf-8")
    except (TypeError, orjson.JSONEncodeError):
        return orjson.dumps(str(value)).decode("utf-8")


__all__ = [
    "describe_exception",
    "serialize_mapping_to_json_bytes",
    "serialize_value",
]
