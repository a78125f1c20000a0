"""Helpers for reading untyped TOML tables.

Config files are parsed into plain dicts; these helpers validate values at
that boundary and narrow their types.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


class WrongType(ValueError):
    """A config value is present but has the wrong type."""

    def __init__(self, key: str, expected: str, value: object) -> None:
        super().__init__(f"'{key}' must be {expected}, got {type(value).__name__}")
        self.key = key


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value from a mapping.

    Returns None if the key is missing. Whitespace is preserved, since
    patterns and comment templates may rely on it.

    Raises:
        WrongType: The value is not a string.
    """
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise WrongType(key, "a string", value)
    return value


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    """Get a boolean value from a mapping, None if missing.

    Raises:
        WrongType: The value is not a boolean.
    """
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise WrongType(key, "a boolean", value)
    return value


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping.

    Raises:
        WrongType: The value exists but is not a table.
    """
    value = table.get(key)
    if value is None:
        return None
    result = as_str_dict(value)
    if result is None:
        raise WrongType(key, "a table", value)
    return result
