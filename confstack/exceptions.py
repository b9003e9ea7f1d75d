"""Exception hierarchy for configuration loading and parsing."""

from __future__ import annotations

import os


class ConfigError(Exception):
    """Base class for every configuration error."""


class NullValueError(ConfigError):
    """A required object was missing (``None``)."""


class ValueNotFoundError(ConfigError):
    """A requested configuration value does not exist."""


class ConfigFileNotFoundError(ConfigError):
    """A required configuration file does not exist."""

    def __init__(self, file_path: str | os.PathLike[str]) -> None:
        self.file_path = file_path
        super().__init__(f"Configuration file '{os.fspath(file_path)}' was not found")


class BadConfigFileError(ConfigError):
    """A configuration file exists but its content is unusable."""

    def __init__(self, file_path: str | os.PathLike[str], why: str) -> None:
        self.file_path = file_path
        self.why = why
        super().__init__(f"Bad configuration file '{os.fspath(file_path)}': {why}")


class BadStreamError(ConfigError):
    """A configuration stream could not be read or holds bad content."""


class SettingParserError(ConfigError):
    """A single setting could not be parsed."""