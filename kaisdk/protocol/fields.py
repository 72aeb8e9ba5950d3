"""Typed field access for decoded JSON objects.

Every helper raises ``MalformedError`` when a field is missing or has the
wrong JSON type. Booleans are never accepted where a number is expected.
"""
from __future__ import annotations

from typing import Any, List, Mapping

from ..errors import MalformedError

_MISSING = object()


def _get(obj: Mapping[str, Any], key: str) -> Any:
    if not isinstance(obj, Mapping):
        raise MalformedError(f"expected an object holding '{key}', got {type(obj).__name__}")
    value = obj.get(key, _MISSING)
    if value is _MISSING or value is None:
        raise MalformedError(f"missing field '{key}'")
    return value


def as_bool(value: Any, what: str) -> bool:
    if not isinstance(value, bool):
        raise MalformedError(f"'{what}' must be a boolean, got {value!r}")
    return value


def as_int(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedError(f"'{what}' must be an integer, got {value!r}")
    return value


def as_float(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedError(f"'{what}' must be a number, got {value!r}")
    try:
        return float(value)
    except OverflowError:
        raise MalformedError(f"'{what}' is out of range for a float")


def require_bool(obj: Mapping[str, Any], key: str) -> bool:
    return as_bool(_get(obj, key), key)


def require_int(obj: Mapping[str, Any], key: str) -> int:
    return as_int(_get(obj, key), key)


def require_float(obj: Mapping[str, Any], key: str) -> float:
    return as_float(_get(obj, key), key)


def require_str(obj: Mapping[str, Any], key: str) -> str:
    value = _get(obj, key)
    if not isinstance(value, str):
        raise MalformedError(f"'{key}' must be a string, got {value!r}")
    return value


def require_list(obj: Mapping[str, Any], key: str) -> List[Any]:
    value = _get(obj, key)
    if not isinstance(value, list):
        raise MalformedError(f"'{key}' must be an array, got {type(value).__name__}")
    return value


def require_object(obj: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = _get(obj, key)
    if not isinstance(value, Mapping):
        raise MalformedError(f"'{key}' must be an object, got {type(value).__name__}")
    return value


def optional_bool(obj: Mapping[str, Any], key: str, default: bool = False) -> bool:
    """Read a boolean that may be absent (or null)."""
    value = obj.get(key)
    if value is None:
        return default
    return as_bool(value, key)
