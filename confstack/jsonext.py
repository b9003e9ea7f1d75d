"""Helpers for finding, creating, overriding and merging values in JSON trees.

JSON trees are plain Python data: ``dict``, ``list``, ``str``, ``int``,
``float``, ``bool`` and ``None``.  The :data:`UNDEFINED` marker stands for a
value that was never set; in :func:`deep_merge` it means "keep what is there".
"""

from __future__ import annotations

import copy
import re
from collections.abc import Sequence
from typing import Any

from .exceptions import ConfigError

__all__ = [
    "UNDEFINED",
    "split_key",
    "check_segment_size",
    "find",
    "deep_find",
    "get_or_override",
    "deep_get_or_override",
    "deep_merge",
    "update_with",
]

KEY_SEPARATOR = ":"

_INDEX_PATTERN = re.compile(r"[0-9]+")


class _Undefined:
    """Marker for a JSON slot that holds no value yet."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Undefined:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Undefined:
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()

Keys = str | Sequence[str]


def _is_index(key: str) -> bool:
    return _INDEX_PATTERN.fullmatch(key) is not None


def _to_keys(key: Keys) -> list[str]:
    return split_key(key) if isinstance(key, str) else list(key)


def split_key(key: str) -> list[str]:
    """Split a ``a:b:c`` style key into its segments."""
    return key.split(KEY_SEPARATOR)


def check_segment_size(keys: Sequence[str]) -> None:
    """Raise :class:`ConfigError` when a key has no segments."""
    if not keys:
        raise ConfigError("Bad configuration key parameter, there should be at least one segment")


def find(json: Any, key: str | int) -> Any:
    """Return the direct child of ``json`` under ``key``, or :data:`UNDEFINED`.

    Objects are looked up by name, arrays by a non-negative decimal index.
    """
    if isinstance(json, dict):
        return json.get(key, UNDEFINED) if isinstance(key, str) else UNDEFINED
    if isinstance(json, list):
        if isinstance(key, str):
            if not _is_index(key):
                return UNDEFINED
            key = int(key)
        if isinstance(key, bool) or key < 0 or key >= len(json):
            return UNDEFINED
        return json[key]
    return UNDEFINED


def deep_find(json: Any, key: Keys) -> Any:
    """Follow a multi-segment key through ``json``; :data:`UNDEFINED` if absent."""
    keys = _to_keys(key)
    check_segment_size(keys)
    current = json
    for segment in keys:
        current = find(current, segment)
        if current is UNDEFINED:
            break
    return current


def get_or_override(json: dict | list, key: str | int) -> Any:
    """Return the child of container ``json`` under ``key``, creating it if absent.

    New object entries are :data:`UNDEFINED`; arrays are padded with
    :data:`UNDEFINED` up to the requested index.
    """
    if isinstance(json, dict):
        return json.setdefault(key, UNDEFINED)
    if isinstance(json, list):
        if isinstance(key, str):
            if not _is_index(key):
                raise ConfigError(f"Array index expected, got '{key}'")
            key = int(key)
        if key < 0:
            raise ConfigError(f"Array index must not be negative, got {key}")
        if key >= len(json):
            json.extend([UNDEFINED] * (key + 1 - len(json)))
        return json[key]
    raise ConfigError(f"Cannot look up '{key}' in a non-container value")


def _deep_slot(json: dict, keys: Keys) -> tuple[dict | list, str | int]:
    """Create the path ``keys`` in ``json`` and return the parent and slot of its end."""
    segments = _to_keys(keys)
    check_segment_size(segments)
    container: dict | list = json
    slot: str | int = segments[0]
    get_or_override(container, slot)
    for segment in segments[1:]:
        child = container[slot]
        index_like = _is_index(segment)
        if not isinstance(child, (dict, list)) or (isinstance(child, list) and not index_like):
            child = [] if index_like and not isinstance(child, list) and not isinstance(child, dict) else {}
            container[slot] = child
        next_slot: str | int = int(segment) if isinstance(child, list) else segment
        get_or_override(child, next_slot)
        container, slot = child, next_slot
    return container, slot


def deep_get_or_override(json: dict, keys: Keys) -> Any:
    """Return the value at ``keys``, creating the path and reshaping values in its way.

    Scalars along the path are replaced by an array (for a numeric next
    segment) or an object; arrays met by a non-numeric segment become objects.
    """
    container, slot = _deep_slot(json, keys)
    return container[slot]


def update_with(json: dict, keys: Keys, value: Any) -> None:
    """Store ``value`` at ``keys`` inside ``json``, creating the path as needed."""
    container, slot = _deep_slot(json, keys)
    container[slot] = value


def deep_merge(json: Any, override: Any) -> Any:
    """Merge ``override`` into ``json`` and return the result.

    Objects merge key by key and arrays element by element, in place;
    :data:`UNDEFINED` in ``override`` leaves the existing value alone; any
    other mismatch replaces the value with a copy of ``override``.
    """
    if override is UNDEFINED:
        return json
    if isinstance(json, dict) and isinstance(override, dict):
        if not json:
            json.update(copy.deepcopy(override))
            return json
        for key, value in override.items():
            json[key] = deep_merge(json.get(key, UNDEFINED), value)
        return json
    if isinstance(json, list) and isinstance(override, list):
        if not json:
            json.extend(copy.deepcopy(override))
            return json
        for index, value in enumerate(override):
            if index >= len(json):
                json.append(UNDEFINED)
            json[index] = deep_merge(json[index], value)
        return json
    return copy.deepcopy(override)