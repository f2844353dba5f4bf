# cliframe

Building blocks for command-line applications:

- `cliframe.args.Args` holds the positional arguments left after flag
  parsing. It offers `first()`, `get(n)`, `tail()`, `present()` and
  `slice()`, and also supports `len()`, iteration and `==`. `get` returns
  an empty string for an index with no argument, and `tail()` and
  `slice()` return copies.
- `cliframe.category.CommandCategories` and `CommandCategory` group
  commands by category name, in the order the categories were first seen.
  `CommandCategory.visible_commands()` leaves out every command whose
  `hidden` attribute is true.
- Alternate input sources let flag values come from configuration data
  when they were not given on the command line or in the environment:
  - `cliframe.map_source.MapInputSource` serves values from a dictionary,
  - `cliframe.file_loaders` loads YAML and TOML files into a `MapInputSource`,
  - `cliframe.json_source.JSONInputSource` serves values from a decoded
    JSON object.

  They all derive from `cliframe.input_source.InputSource`. It has the
  accessors `integer`, `duration`, `floating`, `string`, `string_slice`,
  `int_slice`, `generic` and `boolean`, and a `source` property that gives
  the file the values came from.

## Installation

```
pip install .
```

## Reading values from a map

```python
from cliframe.map_source import MapInputSource

source = MapInputSource("settings", {"timeout": "1m", "top": {"port": 8080}})
source.duration("timeout")   # datetime.timedelta(seconds=60)
source.integer("top.port")   # 8080: dotted names reach into nested mappings
source.string("missing")     # "": a missing key gives the zero value
source.string_slice("nope")  # None
```

A value of the wrong type raises `cliframe.input_source.InputSourceError`.
A duration may be a `timedelta` or text such as `"300ms"` or `"1h30m"`.
`parse_duration` and `format_duration` in `cliframe.input_source` convert
between the two forms. `default_input_source()` returns an empty
`MapInputSource`.

## Loading from files

```python
from cliframe.file_loaders import yaml_source_from_file, toml_source_from_file
from cliframe.json_source import json_source_from_file

yaml_source_from_file("config.yaml").integer("test")
toml_source_from_file("config.toml").integer("top.test")
json_source_from_file("config.json").string("name")
```

- `load_data_from(path)` reads a local file, or an `http` or `https` URL.
  Any other URL scheme, and any file that does not exist, raises
  `InputSourceError`.
- A YAML file must hold a mapping at the top level. An empty YAML file
  gives an empty source.
- TOML date and time values are rejected.
- JSON sources are built with `json_source(data)`,
  `json_source_from_reader(stream)` or `json_source_from_file(path)`. The
  JSON must hold an object. Unlike the map source, a missing key raises
  `InputSourceError`.
  - `integer` truncates floats, and `floating` accepts integers.
  - JSON has no duration type, so `duration` raises for any JSON value.

## Feeding flags from a source

`cliframe.apply.InputSourceFlag` describes a flag with these fields:

- a name and aliases,
- the environment variables it reads,
- its kind, a `FlagKind`: generic, string, path, int, float64, duration,
  bool, string slice or int slice,
- `flag_set`, the mapping where its value is stored.

`apply_input_source_values(context, source, flags)` fills each such flag
under every one of its names. A flag is skipped when `context.is_set(name)`
is true or when one of its environment variables is present.

```python
from cliframe.apply import FlagKind, InputSourceFlag, apply_input_source_values
from cliframe.map_source import MapInputSource

class Parsed:
    def __init__(self, given):
        self.given = given

    def is_set(self, name):
        return name in self.given

values = {}
port = InputSourceFlag("port", FlagKind.INT, aliases=["p"],
                       env_vars=["APP_PORT"], flag_set=values)
apply_input_source_values(Parsed(set()), MapInputSource("", {"port": 8080}), [port])
values  # {"port": "8080", "p": "8080"}, unless APP_PORT is set
```

How values are stored and which ones are skipped:

- Scalar values are stored as text, and slices as lists.
- Zero numbers, zero durations, `false` and empty strings are not applied.
- A relative path is joined to the directory of the source's file.
- Floats are rendered by `float64_to_string`.

Hooks to run before a command:

- `init_input_source(flags, create)` returns a function that builds the
  source with `create()` and then applies it to the flags.
- `init_input_source_with_context(flags, create)` does the same, but
  calls `create(context)`.
- If the factory fails, either hook raises `InputSourceError`.

Ready-made factories:

- `yaml_source_from_flag_func("load")` and `toml_source_from_flag_func("load")`
  in `cliframe.file_loaders`, and `json_source_from_flag_func("load")` in
  `cliframe.json_source`.
- Each opens the file named by the `load` flag, through
  `context.string("load")`.
- When the flag is not set, each returns an empty source.

## What this package does not do

There is no application or command runner here. The package does not:

- parse command lines into flags,
- route to subcommands,
- print help or version text,
- generate shell completion.

A "context" is any object with an `is_set(name)` method, and with
`string(name)` for the flag-driven factories. Your own parsing code must
provide it.

## Running the tests

```
pip install .[test]
pytest
```