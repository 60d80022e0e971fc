"""Helpers for reading untyped TOML data.

Use these at the config boundary: they validate at runtime and narrow types
for the checker.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    """Return obj as StrDict if it matches, else None."""
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a non-empty string value from a mapping.

    Unlike most accessors this does not strip: patterns and templates can
    carry meaningful leading or trailing spaces. Returns None if the key is
    missing, not a str, or empty.
    """
    value = table.get(key)
    if not isinstance(value, str) or not value:
        return None
    return value


def get_list(table: Mapping[str, object], key: str) -> list[object] | None:
    """Get a list from a mapping."""
    value = table.get(key)
    if isinstance(value, list):
        return cast(list[object], value)
    return None


def get_str_list(table: Mapping[str, object], key: str) -> list[str] | None:
    """Get a list of strings, or None if missing or any item is not a str."""
    items = get_list(table, key)
    if items is None:
        return None
    out: list[str] = []
    for item in items:
        if not isinstance(item, str):
            return None
        out.append(item)
    return out
