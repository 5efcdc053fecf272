"""Helpers for decoding backend payloads whose key names drift between endpoints."""
from __future__ import annotations

import uuid
from typing import Any, Mapping, Sequence, TypeVar

T = TypeVar("T")


def _matches(value: Any, kind: type | tuple[type, ...] | None) -> bool:
    if value is None:
        return False
    if kind is None:
        return True
    # bool is an int subclass; a JSON true/false is never a valid count or id.
    if isinstance(value, bool) and not _accepts_bool(kind):
        return False
    return isinstance(value, kind)


def _accepts_bool(kind: type | tuple[type, ...]) -> bool:
    kinds = kind if isinstance(kind, tuple) else (kind,)
    return bool in kinds


def first_present(
    data: Mapping[str, Any],
    keys: Sequence[str],
    default: T = None,
    *,
    kind: type | tuple[type, ...] | None = None,
) -> Any | T:
    """
    Return the value of the first key in ``keys`` that is present and usable.

    A key is skipped when it is missing, null, or (if ``kind`` is given) holds a
    value of the wrong type. ``default`` is returned when no key qualifies.

    Example:
        >>> first_present({"_id": "abc"}, ("id", "_id"), "")
        'abc'
    """
    for key in keys:
        value = data.get(key)
        if _matches(value, kind):
            return value
    return default


def first_present_str(data: Mapping[str, Any], keys: Sequence[str], default: T = None) -> str | T:
    return first_present(data, keys, default, kind=str)


def new_placeholder_id() -> str:
    """Identifier for records the backend returned without one."""

    return str(uuid.uuid4()).upper()
