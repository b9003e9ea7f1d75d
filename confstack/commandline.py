"""Parsing of command-line arguments into a JSON configuration object."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from .exceptions import ConfigError, NullValueError
from .jsonext import update_with

__all__ = ["SplitResult", "SettingSplitter", "DeserializerLookup", "CommandLineParser"]


@dataclass
class SplitResult:
    """A setting split into key segments, an optional type and an optional value."""

    keys: list[str] = field(default_factory=list)
    type: str | None = None
    value: str | None = None


class SettingSplitter(Protocol):
    def split(self, setting: str) -> SplitResult: ...


class _Deserializer(Protocol):
    def deserialize(self, value: str | None) -> Any: ...


class DeserializerLookup(Protocol):
    def deserializer_for(self, type_name: str | None) -> _Deserializer: ...


_END = object()


class CommandLineParser:
    """Turns arguments such as ``--a:b!int=3`` into a nested JSON object."""

    def __init__(
        self,
        option_splitter: SettingSplitter,
        value_deserializers_map: DeserializerLookup,
        option_prefixes: Iterable[str],
        consider_separated: bool = True,
    ) -> None:
        if option_splitter is None:
            raise NullValueError("Option splitter cannot be None")
        if value_deserializers_map is None:
            raise NullValueError("Value deserializers map cannot be None")
        self._option_splitter = option_splitter
        self._value_deserializers_map = value_deserializers_map
        self._option_prefixes = tuple(option_prefixes)
        self._consider_separated = consider_separated

    @property
    def option_splitter(self) -> SettingSplitter:
        return self._option_splitter

    @property
    def value_deserializers_map(self) -> DeserializerLookup:
        return self._value_deserializers_map

    @property
    def option_prefixes(self) -> tuple[str, ...]:
        return self._option_prefixes

    @property
    def consider_separated(self) -> bool:
        return self._consider_separated

    def parse(self, arguments: Sequence[str]) -> dict:
        """Parse ``arguments`` and return the configuration they describe.

        An option with a prefix and no value takes the next argument as its
        value when separated values are considered and that argument is not
        itself an option.
        """
        result: dict = {}
        remaining = iter(arguments)
        upcoming = next(remaining, _END)
        while upcoming is not _END:
            argument = upcoming
            upcoming = next(remaining, _END)
            try:
                keys, value, consumed_next = self._parse_argument(argument, upcoming)
                if consumed_next:
                    upcoming = next(remaining, _END)
                update_with(result, keys, value)
            except Exception as error:
                raise ConfigError(f"Parsing error for argument '{argument}' error: {error}") from error
        return result

    def _parse_argument(self, argument: str, upcoming: Any) -> tuple[list[str], Any, bool]:
        prefix = self._option_prefix(argument)
        if prefix is not None:
            argument = argument[len(prefix):]
        split = self._option_splitter.split(argument)
        value = split.value
        consumed_next = False
        if (
            self._consider_separated
            and prefix is not None
            and value is None
            and upcoming is not _END
            and self._option_prefix(upcoming) is None
        ):
            value = upcoming
            consumed_next = True
        deserializer = self._value_deserializers_map.deserializer_for(split.type)
        return list(split.keys), deserializer.deserialize(value), consumed_next

    def _option_prefix(self, argument: str) -> str | None:
        return next((prefix for prefix in self._option_prefixes if argument.startswith(prefix)), None)