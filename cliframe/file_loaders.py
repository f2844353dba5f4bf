"""Loading YAML and TOML files as input sources."""

from __future__ import annotations

import os
import tomllib
import urllib.request
from collections.abc import Callable, Mapping
from typing import Any, Protocol

import yaml

from cliframe.input_source import InputSource, InputSourceError
from cliframe.map_source import MapInputSource, default_input_source


class FlagContext(Protocol):
    """What a flag-driven source factory needs from a parsed command context."""

    def is_set(self, name: str) -> bool: ...

    def string(self, name: str) -> str: ...


def load_data_from(file_path: str) -> bytes:
    """Read raw bytes from an http(s) URL or a local file."""
    try:
        parsed = urllib.request.urlparse(file_path)
    except ValueError as err:
        raise InputSourceError(str(err)) from err

    if parsed.netloc:
        if parsed.scheme in ("http", "https"):
            with urllib.request.urlopen(file_path) as response:
                return response.read()
        raise InputSourceError(f"scheme of {file_path} is unsupported")
    if parsed.path or (os.name == "nt" and "\\" in file_path):
        if not os.path.exists(file_path):
            raise InputSourceError(
                f"Cannot read from file: '{file_path}' because it does not exist."
            )
        with open(file_path, "rb") as handle:
            return handle.read()
    raise InputSourceError(f"unable to determine how to load from path {file_path}")


def yaml_source_from_file(file: str) -> MapInputSource:
    """Create an input source from a YAML file or URL."""
    try:
        loaded = yaml.safe_load(load_data_from(file))
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, Mapping):
            raise InputSourceError(
                f"expected a mapping at the top level, got {type(loaded).__name__}"
            )
    except (InputSourceError, yaml.YAMLError, OSError) as err:
        raise InputSourceError(
            f"Unable to load Yaml file '{file}': inner error: \n'{err}'"
        ) from err
    return MapInputSource(file, loaded)


def _convert_toml(table: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in table.items():
        if isinstance(value, (bool, str, int, float, list)):
            result[key] = value
        elif isinstance(value, Mapping):
            result[key] = _convert_toml(value)
        else:
            raise InputSourceError(f"Unsupported: type = {type(value).__name__}")
    return result


def toml_source_from_file(file: str) -> MapInputSource:
    """Create an input source from a TOML file or URL."""
    try:
        data = load_data_from(file)
        values = _convert_toml(tomllib.loads(data.decode("utf-8")))
    except (InputSourceError, tomllib.TOMLDecodeError, UnicodeDecodeError, OSError) as err:
        raise InputSourceError(
            f"Unable to load TOML file '{file}': inner error: \n'{err}'"
        ) from err
    return MapInputSource(file, values)


def _from_flag(
    flag_file_name: str, loader: Callable[[str], InputSource]
) -> Callable[[FlagContext], InputSource]:
    def create(context: FlagContext) -> InputSource:
        if context.is_set(flag_file_name):
            return loader(context.string(flag_file_name))
        return default_input_source()

    return create


def yaml_source_from_flag_func(flag_file_name: str) -> Callable[[FlagContext], InputSource]:
    """Return a factory loading YAML from the file named by the given flag."""
    return _from_flag(flag_file_name, yaml_source_from_file)


def toml_source_from_flag_func(flag_file_name: str) -> Callable[[FlagContext], InputSource]:
    """Return a factory loading TOML from the file named by the given flag."""
    return _from_flag(flag_file_name, toml_source_from_file)