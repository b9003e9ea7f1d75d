"""Configuration sources backed by JSON objects, files and streams."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import IO, Any

from .exceptions import BadConfigFileError, BadStreamError, ConfigFileNotFoundError, NullValueError
from .providers import ConfigurationProvider, ConfigurationSource

__all__ = [
    "JsonConfigurationSource",
    "JsonConfigurationProvider",
    "JsonFileConfigurationSource",
    "JsonFileConfigurationProvider",
    "JsonStreamConfigurationSource",
    "JsonStreamConfigurationProvider",
]


def _require_source(source: Any) -> Any:
    if source is None:
        raise NullValueError("Configuration source cannot be None")
    return source


class JsonConfigurationSource(ConfigurationSource):
    """A configuration given directly as a JSON object."""

    def __init__(self, configuration: dict | None = None) -> None:
        self._configuration = configuration if configuration is not None else {}

    @property
    def configuration(self) -> dict:
        return self._configuration

    def build(self, builder: Any) -> JsonConfigurationProvider:
        return JsonConfigurationProvider(self)


class JsonConfigurationProvider(ConfigurationProvider):
    """Provides a copy of a JSON object source."""

    def __init__(self, source: JsonConfigurationSource) -> None:
        super().__init__()
        self._source = _require_source(source)

    def load(self) -> None:
        self.set(copy.deepcopy(self._source.configuration))


class JsonFileConfigurationSource(ConfigurationSource):
    """A JSON file holding an object; an optional file may be missing."""

    def __init__(self, file_path: str | os.PathLike[str], is_optional: bool = False) -> None:
        self._file_path = Path(file_path)
        self._is_optional = is_optional

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def is_optional(self) -> bool:
        return self._is_optional

    def build(self, builder: Any) -> JsonFileConfigurationProvider:
        return JsonFileConfigurationProvider(self)


class JsonFileConfigurationProvider(ConfigurationProvider):
    """Reads a JSON file source."""

    def __init__(self, source: JsonFileConfigurationSource) -> None:
        super().__init__()
        self._source = _require_source(source)

    def load(self) -> None:
        self.set(self._read_file())

    def _read_file(self) -> dict:
        file_path = self._source.file_path
        if not file_path.exists():
            if self._source.is_optional:
                return {}
            raise ConfigFileNotFoundError(file_path)
        try:
            with file_path.open(encoding="utf-8") as file:
                data = json.load(file)
        except ValueError as error:
            raise BadConfigFileError(file_path, f"invalid json: {error}") from error
        if not isinstance(data, dict):
            raise BadConfigFileError(file_path, "file does not contain json object")
        return data


class JsonStreamConfigurationSource(ConfigurationSource):
    """A readable stream holding a JSON object."""

    def __init__(self, stream: IO[str] | IO[bytes]) -> None:
        self._stream = stream

    @property
    def stream(self) -> IO[str] | IO[bytes]:
        return self._stream

    def build(self, builder: Any) -> JsonStreamConfigurationProvider:
        return JsonStreamConfigurationProvider(self)


class JsonStreamConfigurationProvider(ConfigurationProvider):
    """Reads the remaining content of a stream source as a JSON object."""

    def __init__(self, source: JsonStreamConfigurationSource) -> None:
        super().__init__()
        self._source = _require_source(source)

    def load(self) -> None:
        self.set(self._read_stream())

    def _read_stream(self) -> dict:
        try:
            data = json.loads(self._source.stream.read())
        except (ValueError, OSError) as error:
            raise BadStreamError(f"Cannot read json from stream: {error}") from error
        if not isinstance(data, dict):
            raise BadStreamError("Stream does not contain json object")
        return data