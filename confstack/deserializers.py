"""Typed deserializers that turn raw setting text into JSON values."""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from .exceptions import ConfigError, SettingParserError, ValueNotFoundError
from .jsonext import UNDEFINED

__all__ = [
    "Deserializer",
    "StringDeserializer",
    "BoolDeserializer",
    "IntDeserializer",
    "UIntDeserializer",
    "DoubleDeserializer",
    "JsonDeserializer",
    "NullDeserializer",
    "default_deserializers",
    "ValueDeserializersMap",
    "add_default_deserializers",
]

_C_WHITESPACE = " \t\n\v\f\r"
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MAX = 2**64 - 1

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"\+?[0-9]+")
_DOUBLE = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def _strip_leading(text: str) -> str:
    return text.lstrip(_C_WHITESPACE)


def _to_int(text: str) -> int:
    stripped = _strip_leading(text)
    if not _SIGNED_INT.fullmatch(stripped):
        raise SettingParserError(f"Cannot convert '{text}' to an integer")
    number = int(stripped)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise SettingParserError(f"Integer '{text}' is out of range")
    return number


def _to_uint(text: str) -> int:
    stripped = _strip_leading(text)
    if not _UNSIGNED_INT.fullmatch(stripped):
        raise SettingParserError(f"Cannot convert '{text}' to an unsigned integer")
    number = int(stripped)
    if number > _UINT64_MAX:
        raise SettingParserError(f"Unsigned integer '{text}' is out of range")
    return number


def _to_bool(text: str) -> bool:
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        return _to_int(text) != 0
    except SettingParserError:
        raise SettingParserError(f"Cannot convert '{text}' to a boolean") from None


def _to_double(text: str) -> float:
    stripped = _strip_leading(text)
    if not _DOUBLE.fullmatch(stripped):
        raise SettingParserError(f"Cannot convert '{text}' to a floating point number")
    return float(stripped)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unsupported JSON constant '{name}'")


class Deserializer(ABC):
    """Turns an optional raw text value into a JSON value."""

    @abstractmethod
    def deserialize(self, value: str | None) -> Any:
        """Return the JSON value for ``value`` (``None`` means no value was given)."""


class StringDeserializer(Deserializer):
    """Keeps the text as it is; a missing value becomes an empty string."""

    def deserialize(self, value: str | None) -> Any:
        return value if value is not None else ""


class BoolDeserializer(Deserializer):
    """Accepts ``true``/``false`` in any case or an integer (non-zero is true)."""

    def deserialize(self, value: str | None) -> Any:
        return value is not None and _to_bool(value)


class IntDeserializer(Deserializer):
    """Parses a signed 64-bit integer; a missing value becomes 0."""

    def deserialize(self, value: str | None) -> Any:
        return _to_int(value) if value is not None else 0


class UIntDeserializer(Deserializer):
    """Parses an unsigned 64-bit integer; a missing value becomes 0."""

    def deserialize(self, value: str | None) -> Any:
        return _to_uint(value) if value is not None else 0


class DoubleDeserializer(Deserializer):
    """Parses a floating point number; a missing value becomes 0.0."""

    def deserialize(self, value: str | None) -> Any:
        return _to_double(value) if value is not None else 0.0


class JsonDeserializer(Deserializer):
    """Parses a JSON document; a missing value stays undefined."""

    def deserialize(self, value: str | None) -> Any:
        if value is None:
            return UNDEFINED
        try:
            return json.loads(value, parse_constant=_reject_constant)
        except ValueError as error:
            raise SettingParserError(f"Cannot parse '{value}' as json: {error}") from error


class NullDeserializer(Deserializer):
    """Always yields JSON null."""

    def deserialize(self, value: str | None) -> Any:
        return None


def default_deserializers() -> list[tuple[str, Deserializer]]:
    """Return fresh instances of the built-in deserializers with their type names."""
    return [
        ("string", StringDeserializer()),
        ("bool", BoolDeserializer()),
        ("int", IntDeserializer()),
        ("double", DoubleDeserializer()),
        ("uint", UIntDeserializer()),
        ("json", JsonDeserializer()),
        ("null", NullDeserializer()),
    ]


class ValueDeserializersMap:
    """Deserializers looked up by type name, ignoring case."""

    def __init__(
        self,
        default_type: str,
        throw_on_unknown_type: bool = True,
        deserializers: Iterable[tuple[str, Deserializer | None]] = (),
    ) -> None:
        self._default_type = default_type
        self._throw_on_unknown_type = throw_on_unknown_type
        self._entries: dict[str, tuple[str, Deserializer | None]] = {}
        for type_name, deserializer in deserializers:
            self.set(type_name, deserializer)

    @property
    def default_type(self) -> str:
        return self._default_type

    @property
    def throw_on_unknown_type(self) -> bool:
        return self._throw_on_unknown_type

    def set(self, type_name: str, deserializer: Deserializer | None) -> None:
        """Register ``deserializer`` for ``type_name``, replacing any earlier one."""
        folded = type_name.lower()
        name = self._entries[folded][0] if folded in self._entries else type_name
        self._entries[folded] = (name, deserializer)

    def types(self) -> list[str]:
        """Return the registered type names."""
        return [name for name, _ in self._entries.values()]

    def deserializer_for(self, type_name: str | None) -> Deserializer:
        """Return the deserializer for ``type_name``, or the default one.

        ``None`` selects the default type.  An unknown type raises
        :class:`ValueNotFoundError` unless unknown types fall back to the default.
        """
        if type_name is None:
            return self._default_deserializer()
        deserializer = self._find(type_name)
        if deserializer is not None:
            return deserializer
        if self._throw_on_unknown_type:
            raise ValueNotFoundError(f"Deserializer for type '{type_name}' was not found")
        return self._default_deserializer()

    def _default_deserializer(self) -> Deserializer:
        deserializer = self._find(self._default_type)
        if deserializer is None:
            raise ConfigError(f"Default deserializer for type '{self._default_type}' was not found")
        return deserializer

    def _find(self, type_name: str) -> Deserializer | None:
        entry = self._entries.get(type_name.lower())
        return entry[1] if entry is not None else None


def add_default_deserializers(deserializers_map: ValueDeserializersMap) -> None:
    """Register the built-in deserializers in ``deserializers_map``."""
    for type_name, deserializer in default_deserializers():
        deserializers_map.set(type_name, deserializer)