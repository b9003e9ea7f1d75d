# confstack

Layered configuration for Python applications. Settings come from JSON
objects, JSON files, JSON streams, directories holding one JSON file per key,
in-memory key/value pairs and command-line arguments. They are merged deeply
into one JSON-like dictionary, and later sources override earlier ones.

## Installation

```
pip install confstack
```

## JSON trees and keys

Configuration is plain Python data: `dict`, `list`, `str`, `int`, `float`,
`bool` and `None`. The helpers in `confstack.jsonext` work on such trees.

Keys are paths whose segments are separated by `:` (a list of segments may be
given instead). A segment that is a non-negative decimal number addresses a
list element. Slots that were created but never given a value hold the
`UNDEFINED` marker, which is also what lookups return for a missing value:

```python
from confstack.jsonext import UNDEFINED, deep_find, update_with

config = {}
update_with(config, "array:2:name", "value")
# {"array": [UNDEFINED, UNDEFINED, {"name": "value"}]}

deep_find(config, "array:2:name")         # "value"
deep_find(config, "array:5") is UNDEFINED  # True
```

- `find(json, key)` looks up one direct child.
- `deep_find(json, key)` follows all segments of a key.
- `get_or_override(container, key)` returns a child, creating it if absent.
- `deep_get_or_override(json, keys)` returns the value at a path, creating it;
  scalars in the way are replaced by a list (for a numeric next segment) or an
  object, and a list met by a non-numeric segment becomes an object.
- `update_with(json, keys, value)` stores a value at a path.
- `deep_merge(json, override)` merges objects key by key and lists element by
  element and returns the result; `UNDEFINED` in the override keeps the
  existing value, and any other mismatch is replaced by a copy of the override.
- An empty key list raises `ConfigError`.

## Sources and providers

A source (`confstack.providers.ConfigurationSource`) describes where settings
live. Its `build(builder)` returns a `ConfigurationProvider`, and the
provider's `load()` reads the settings into its `configuration` property. The
`builder` argument is passed through to nested sources; the sources in this
package do not use it, so `None` will do.

```python
from confstack.providers import ChainedConfigurationSource, InMemoryConfigurationSource
from confstack.json_sources import JsonConfigurationSource, JsonFileConfigurationSource

source = ChainedConfigurationSource([
    JsonFileConfigurationSource("appsettings.json", is_optional=True),
    JsonConfigurationSource({"number": 1}),
    InMemoryConfigurationSource([("logging:level", "Warning")]),
])
provider = source.build(None)
provider.load()
print(provider.configuration)
```

Available sources:

- `JsonConfigurationSource(configuration)` – a dictionary given directly.
- `JsonFileConfigurationSource(file_path, is_optional=False)` – a JSON file
  holding an object. A missing required file raises `ConfigFileNotFoundError`
  (a missing optional one gives `{}`); invalid JSON or a non-object raises
  `BadConfigFileError`.
- `JsonStreamConfigurationSource(stream)` – reads the rest of a readable
  stream. Invalid JSON, a non-object, or a stream already read to its end
  raises `BadStreamError`.
- `InMemoryConfigurationSource(settings)` – `(key, value)` pairs with
  `a:b:c` keys.
- `ChainedConfigurationSource(sources)` – several sources merged in order;
  `add(source)` appends one more.
- `KeyPerFileConfigurationSource` – see below.

Providers also offer `clear()`, `set(configuration)`, `update(configuration)`
(deep merge) and `update_with(keys, value)`. Passing `None` where a source or
provider is required raises `NullValueError`. All errors derive from
`ConfigError` in `confstack.exceptions`.

### One file per key

`KeyPerFileConfigurationSource(directory_path, is_optional=False,
ignore_prefix="", ignore_condition=None)` reads every regular `*.json` file in
a directory, in sorted order. Each file's contents go under a key made from
the file's stem, and `__` in the name separates nested segments, so
`logging__level.json` fills `logging:level`. Files are skipped when their name
starts with `ignore_prefix` or when `ignore_condition(path)` returns true
(`can_ignore(path)` tells which). A missing directory raises
`ConfigFileNotFoundError` at `build` unless the source is optional.

```python
from confstack.key_per_file import KeyPerFileConfigurationSource

source = KeyPerFileConfigurationSource("settings.d", is_optional=True, ignore_prefix="_")
```

## Typed values

`confstack.deserializers` converts setting text by type name. Type names are
matched without regard to case. The built-in types are `string`, `bool`,
`int`, `uint`, `double`, `json` and `null`:

```python
from confstack.deserializers import ValueDeserializersMap, add_default_deserializers

types = ValueDeserializersMap("string")
add_default_deserializers(types)
types.deserializer_for("INT").deserialize("-12")  # -12
types.types()  # ["string", "bool", "int", "double", "uint", "json", "null"]
```

`deserializer_for(None)` gives the default type's deserializer. An unknown
type raises `ValueNotFoundError`, or falls back to the default type when the
map is created with `throw_on_unknown_type=False`. Text that does not fit the
type raises `SettingParserError`. A missing value (`None`) becomes `""`,
`False`, `0`, `0.0`, `UNDEFINED` (json) or `None` (null).

## Command-line arguments

`confstack.commandline.CommandLineParser(option_splitter,
value_deserializers_map, option_prefixes, consider_separated=True)` turns
arguments into nested settings. The splitter is any object with a
`split(setting)` method returning a `SplitResult(keys, type, value)`; the
package does not ship one, so you provide it:

```python
from confstack.commandline import CommandLineParser, SplitResult

class Splitter:
    def split(self, setting):
        name, sep, value = setting.partition("=")
        name, _, type_name = name.partition("!")
        return SplitResult(name.split(":"), type_name or None, value if sep else None)

parser = CommandLineParser(Splitter(), types, ["--"])
parser.parse(["--db:port!int=5432", "--db:host", "localhost"])
# {"db": {"port": 5432, "host": "localhost"}}
```

When a prefixed option has no value of its own, the next argument serves as
its value if separated values are considered and that argument is not itself
an option. Any failure is raised as `ConfigError` naming the argument.

## What is not included

The package has no builder object that collects sources and produces a final
configuration, no source that reads environment variables, no ready-made
setting splitter, and no command-line program. Combine sources with
`ChainedConfigurationSource` and load the resulting provider yourself.