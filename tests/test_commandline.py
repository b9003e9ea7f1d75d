import pytest

from confstack.commandline import CommandLineParser, SplitResult
from confstack.deserializers import ValueDeserializersMap, add_default_deserializers
from confstack.exceptions import ConfigError


class FixedSplitter:
    def __init__(self, results):
        self.results = results
        self.received = []

    def split(self, setting):
        self.received.append(setting)
        return self.results[setting]


class SimpleSplitter:
    """Splits ``a:b!type=value`` without any configuration."""

    def split(self, setting):
        key_part, sep, value = setting.partition("=")
        keys_text, marker, type_name = key_part.partition("!")
        return SplitResult(keys_text.split(":"), type_name if marker else None, value if sep else None)


class RecordingDeserializer:
    def __init__(self, returned):
        self.returned = returned
        self.received = []

    def deserialize(self, value):
        self.received.append(value)
        return self.returned


class FixedLookup:
    def __init__(self, deserializer):
        self.deserializer = deserializer
        self.requested = []

    def deserializer_for(self, type_name):
        self.requested.append(type_name)
        return self.deserializer


def default_map():
    deserializers = ValueDeserializersMap("string")
    add_default_deserializers(deserializers)
    return deserializers


def test_should_parse_setting():
    splitter = FixedSplitter(
        {
            "option:deep:deep!string=123": SplitResult(["option", "deep", "deep"], "string", "123"),
            "option2=123": SplitResult(["option2"], None, "123"),
        }
    )
    lookup = FixedLookup(RecordingDeserializer("123"))
    parser = CommandLineParser(splitter, lookup, ["--"], False)

    result = parser.parse(["--option:deep:deep!string=123", "--option2=123"])

    assert result == {"option2": "123", "option": {"deep": {"deep": "123"}}}
    assert splitter.received == ["option:deep:deep!string=123", "option2=123"]
    assert lookup.requested == ["string", None]


def test_should_parse_separated_setting():
    splitter = FixedSplitter({"option:deep:deep!int": SplitResult(["option", "deep", "deep"], "int", None)})
    deserializer = RecordingDeserializer(123)
    parser = CommandLineParser(splitter, FixedLookup(deserializer), ["--"], True)

    result = parser.parse(["--option:deep:deep!int", "123"])

    assert result == {"option": {"deep": {"deep": 123}}}
    assert deserializer.received == ["123"]


def test_should_parse_separated_end_setting():
    splitter = FixedSplitter({"option:deep:deep!int": SplitResult(["option", "deep", "deep"], "int", None)})
    deserializer = RecordingDeserializer(0)
    parser = CommandLineParser(splitter, FixedLookup(deserializer), ["--"], True)

    result = parser.parse(["--option:deep:deep!int"])

    assert result == {"option": {"deep": {"deep": 0}}}
    assert deserializer.received == [None]


def test_should_fail_create_parser_due_null_splitter():
    with pytest.raises(ConfigError):
        CommandLineParser(None, FixedLookup(RecordingDeserializer(1)), ["--"])


def test_should_fail_create_parser_due_null_deserializers():
    with pytest.raises(ConfigError):
        CommandLineParser(SimpleSplitter(), None, ["--"])


def test_next_option_is_not_taken_as_value():
    parser = CommandLineParser(SimpleSplitter(), default_map(), ["--", "/"])

    result = parser.parse(["--flag!bool", "/name", "value", "plain=1"])

    assert result == {"flag": False, "name": "value", "plain": "1"}


def test_argument_without_prefix_does_not_take_next():
    parser = CommandLineParser(SimpleSplitter(), default_map(), ["--"])

    result = parser.parse(["plain", "other=2"])

    assert result == {"plain": "", "other": "2"}


def test_parses_arrays_with_real_deserializers():
    parser = CommandLineParser(SimpleSplitter(), default_map(), ["--"])

    result = parser.parse(["--list:0!int=3", "--list:1!int", "4", "array!json=[3,2,1]"])

    assert result == {"list": [3, 4], "array": [3, 2, 1]}


def test_deserialization_error_is_wrapped():
    parser = CommandLineParser(SimpleSplitter(), default_map(), ["--"])

    with pytest.raises(ConfigError, match="Parsing error for argument '--count!int=abc'"):
        parser.parse(["--count!int=abc"])