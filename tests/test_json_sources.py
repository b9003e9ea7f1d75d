import io
import json

import pytest

from confstack.exceptions import BadConfigFileError, BadStreamError, ConfigFileNotFoundError, NullValueError
from confstack.json_sources import (
    JsonConfigurationProvider,
    JsonConfigurationSource,
    JsonFileConfigurationProvider,
    JsonFileConfigurationSource,
    JsonStreamConfigurationProvider,
    JsonStreamConfigurationSource,
)


def test_json_provider_requires_source():
    with pytest.raises(NullValueError):
        JsonConfigurationProvider(None)


def test_load_simple_json_config():
    provider = JsonConfigurationSource({"hello": 12345}).build(None)
    provider.load()
    assert provider.configuration == {"hello": 12345}


def test_json_provider_does_not_share_source_object():
    data = {"a": {"b": 1}}
    provider = JsonConfigurationSource(data).build(None)
    provider.load()
    provider.update_with("a:b", 2)
    assert data == {"a": {"b": 1}}
    assert provider.configuration == {"a": {"b": 2}}


def test_stream_provider_requires_source():
    with pytest.raises(NullValueError):
        JsonStreamConfigurationProvider(None)


def test_load_config_from_stream():
    stream = io.StringIO('{"hello": 12345, "string": "asdf"}')
    provider = JsonStreamConfigurationSource(stream).build(None)
    provider.load()
    assert provider.configuration == {"hello": 12345, "string": "asdf"}


def test_fail_loading_config_from_bad_stream():
    provider = JsonStreamConfigurationSource(io.StringIO('"hello"')).build(None)
    with pytest.raises(BadStreamError):
        provider.load()


def test_fail_loading_due_to_double_stream_read():
    stream = io.StringIO('{"hello": 12345, "string": "asdf"}')
    provider = JsonStreamConfigurationSource(stream).build(None)
    provider.load()
    with pytest.raises(BadStreamError):
        provider.load()


def test_file_provider_requires_source():
    with pytest.raises(NullValueError):
        JsonFileConfigurationProvider(None)


def test_load_json_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"key": [1, 2], "inner": {"x": "y"}}))
    provider = JsonFileConfigurationSource(path).build(None)
    provider.load()
    assert provider.configuration == {"key": [1, 2], "inner": {"x": "y"}}


def test_missing_required_file_raises(tmp_path):
    provider = JsonFileConfigurationSource(tmp_path / "missing.json").build(None)
    with pytest.raises(ConfigFileNotFoundError):
        provider.load()


def test_missing_optional_file_loads_empty(tmp_path):
    provider = JsonFileConfigurationSource(tmp_path / "missing.json", True).build(None)
    provider.load()
    assert provider.configuration == {}


def test_file_without_object_raises(tmp_path):
    path = tmp_path / "array.json"
    path.write_text("[1, 2, 3]")
    provider = JsonFileConfigurationSource(path).build(None)
    with pytest.raises(BadConfigFileError):
        provider.load()


def test_file_with_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text('{"a": ')
    provider = JsonFileConfigurationSource(path).build(None)
    with pytest.raises(BadConfigFileError):
        provider.load()