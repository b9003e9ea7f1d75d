"""Configuration read from a directory holding one JSON file per top-level key."""

from __future__ import annotations

import functools
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .exceptions import ConfigFileNotFoundError
from .json_sources import JsonFileConfigurationSource
from .jsonext import update_with
from .providers import ChainedConfigurationSource, ConfigurationProvider, ConfigurationSource

__all__ = ["KeyPerFileConfigurationSource"]

_NAME_SEPARATOR = "__"
_JSON_EXTENSION = ".json"


def _nest_under(name: str, configuration: dict) -> dict:
    result: dict = {}
    update_with(result, name.split(_NAME_SEPARATOR), configuration)
    return result


class _MappedConfigurationProvider(ConfigurationProvider):
    def __init__(self, inner: ConfigurationProvider, mapping: Callable[[dict], dict]) -> None:
        super().__init__()
        self._inner = inner
        self._mapping = mapping

    def load(self) -> None:
        self._inner.load()
        self.set(self._mapping(self._inner.configuration))


class _MappedConfigurationSource(ConfigurationSource):
    def __init__(self, source: ConfigurationSource, mapping: Callable[[dict], dict]) -> None:
        self._source = source
        self._mapping = mapping

    def build(self, builder: Any) -> _MappedConfigurationProvider:
        return _MappedConfigurationProvider(self._source.build(builder), self._mapping)


class KeyPerFileConfigurationSource(ConfigurationSource):
    """Each ``<name>.json`` file in a directory becomes the value of key ``name``.

    Double underscores in a file name nest the key (``a__b.json`` goes to
    ``a:b``).  Files whose names start with ``ignore_prefix``, or for which
    ``ignore_condition`` returns true, are skipped.
    """

    def __init__(
        self,
        directory_path: str | os.PathLike[str],
        is_optional: bool = False,
        ignore_prefix: str = "",
        ignore_condition: Callable[[Path], bool] | None = None,
    ) -> None:
        self._directory_path = Path(directory_path)
        self._is_optional = is_optional
        self._ignore_prefix = ignore_prefix
        self._ignore_condition = ignore_condition

    @property
    def directory_path(self) -> Path:
        return self._directory_path

    @property
    def is_optional(self) -> bool:
        return self._is_optional

    @property
    def ignore_prefix(self) -> str:
        return self._ignore_prefix

    @property
    def ignore_condition(self) -> Callable[[Path], bool] | None:
        return self._ignore_condition

    def build(self, builder: Any) -> ConfigurationProvider:
        sources = ChainedConfigurationSource()
        directory = self._directory_path
        if not directory.exists():
            if self._is_optional:
                return sources.build(builder)
            raise ConfigFileNotFoundError(directory)
        for entry in sorted(directory.iterdir()):
            source = self._mapped_file_source(entry)
            if source is not None:
                sources.add(source)
        return sources.build(builder)

    def can_ignore(self, file_path: str | os.PathLike[str]) -> bool:
        """Tell whether ``file_path`` is excluded by the prefix or the condition."""
        path = Path(file_path)
        if self._ignore_prefix and path.name.startswith(self._ignore_prefix):
            return True
        return bool(self._ignore_condition is not None and self._ignore_condition(path))

    def _mapped_file_source(self, path: Path) -> ConfigurationSource | None:
        if not path.is_file() or self.can_ignore(path) or path.suffix != _JSON_EXTENSION:
            return None
        mapping = functools.partial(_nest_under, path.stem)
        return _MappedConfigurationSource(JsonFileConfigurationSource(path), mapping)