from pathlib import Path

import pytest

from confstack.exceptions import (
    BadConfigFileError,
    BadStreamError,
    ConfigError,
    ConfigFileNotFoundError,
    NullValueError,
    SettingParserError,
    ValueNotFoundError,
)


@pytest.mark.parametrize(
    "error_type",
    [NullValueError, ValueNotFoundError, BadStreamError, SettingParserError],
)
def test_simple_errors_are_config_errors_and_keep_message(error_type):
    error = error_type("something went wrong")
    assert isinstance(error, ConfigError)
    assert str(error) == "something went wrong"


def test_file_not_found_keeps_path():
    path = Path("settings") / "missing.json"
    error = ConfigFileNotFoundError(path)
    assert isinstance(error, ConfigError)
    assert error.file_path == path
    assert str(path) in str(error)


def test_bad_config_file_keeps_path_and_reason():
    error = BadConfigFileError("appsettings.json", "file does not contain json object")
    assert isinstance(error, ConfigError)
    assert error.file_path == "appsettings.json"
    assert error.why == "file does not contain json object"
    assert "appsettings.json" in str(error)
    assert "file does not contain json object" in str(error)


def test_bad_config_file_can_be_caught_as_base():
    error = BadConfigFileError("a.json", "broken")
    assert isinstance(error, ConfigError)
    assert "broken" in str(error)
    assert "a.json" in str(error)