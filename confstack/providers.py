"""Configuration sources and providers, with chained and in-memory ones."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import Any

from .exceptions import NullValueError
from .jsonext import Keys, deep_merge, update_with

__all__ = [
    "ConfigurationSource",
    "ConfigurationProvider",
    "ChainedConfigurationSource",
    "ChainedConfigurationProvider",
    "InMemoryConfigurationSource",
    "InMemoryConfigurationProvider",
]


class ConfigurationProvider(ABC):
    """Loads configuration and holds it as a JSON object."""

    def __init__(self) -> None:
        self._configuration: dict = {}

    @property
    def configuration(self) -> dict:
        """The configuration loaded so far."""
        return self._configuration

    @abstractmethod
    def load(self) -> None:
        """(Re)load the configuration."""

    def clear(self) -> None:
        """Drop everything loaded so far."""
        self._configuration = {}

    def set(self, configuration: dict) -> None:
        """Replace the configuration with ``configuration``."""
        self._configuration = configuration

    def update(self, configuration: dict) -> None:
        """Deep-merge ``configuration`` over the current configuration."""
        self._configuration = deep_merge(self._configuration, configuration)

    def update_with(self, keys: Keys, value: Any) -> None:
        """Store ``value`` at the (possibly nested) key ``keys``."""
        update_with(self._configuration, keys, value)


class ConfigurationSource(ABC):
    """Describes where configuration comes from and builds a provider for it."""

    @abstractmethod
    def build(self, builder: Any) -> ConfigurationProvider:
        """Return a provider that loads this source's configuration."""


def _require(value: Any, what: str) -> Any:
    if value is None:
        raise NullValueError(f"{what} cannot be None")
    return value


class ChainedConfigurationProvider(ConfigurationProvider):
    """Loads several providers in turn, later ones overriding earlier ones."""

    def __init__(self, providers: Iterable[ConfigurationProvider] = ()) -> None:
        super().__init__()
        self._providers = [_require(provider, "Configuration provider") for provider in providers]

    @property
    def providers(self) -> list[ConfigurationProvider]:
        return self._providers

    def load(self) -> None:
        self.clear()
        for provider in self._providers:
            _require(provider, "Configuration provider")
            provider.load()
            self.update(provider.configuration)


class ChainedConfigurationSource(ConfigurationSource):
    """A sequence of sources whose configurations are merged in order."""

    def __init__(self, sources: Iterable[ConfigurationSource] = ()) -> None:
        self._sources = [_require(source, "Configuration source") for source in sources]

    @property
    def sources(self) -> list[ConfigurationSource]:
        return self._sources

    def add(self, source: ConfigurationSource) -> None:
        """Append ``source`` to the chain."""
        self._sources.append(_require(source, "Configuration source"))

    def build(self, builder: Any) -> ChainedConfigurationProvider:
        providers = [_require(source, "Configuration source").build(builder) for source in self._sources]
        return ChainedConfigurationProvider(providers)


class InMemoryConfigurationSource(ConfigurationSource):
    """Settings given as ``(key, value)`` pairs, keys in ``a:b:c`` form."""

    def __init__(self, settings: Iterable[tuple[str, Any]] = ()) -> None:
        self._settings = list(settings)

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(self._settings)

    def __len__(self) -> int:
        return len(self._settings)

    def build(self, builder: Any) -> InMemoryConfigurationProvider:
        return InMemoryConfigurationProvider(self)


class InMemoryConfigurationProvider(ConfigurationProvider):
    """Builds a configuration object from in-memory settings."""

    def __init__(self, source: InMemoryConfigurationSource) -> None:
        super().__init__()
        self._source = _require(source, "Configuration source")

    def load(self) -> None:
        self.clear()
        for key, value in self._source:
            self.update_with(key, copy.deepcopy(value))