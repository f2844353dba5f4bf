"""An input source backed by JSON data."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import timedelta
from typing import IO, Any

from cliframe.file_loaders import FlagContext, load_data_from
from cliframe.input_source import Generic, InputSource, InputSourceError
from cliframe.map_source import default_input_source


def _type_error(value: Any, name: str) -> InputSourceError:
    return InputSourceError(f'unexpected type {type(value).__name__} for "{name}"')


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class JSONInputSource(InputSource):
    """Serves flag values from a decoded JSON object; missing keys are errors."""

    def __init__(self, data: dict[str, Any], file: str = "") -> None:
        self._data = data
        self._file = file

    @property
    def source(self) -> str:
        return self._file

    def _value(self, key: str) -> Any:
        working: Any = self._data
        segments = key.split(".")
        value: Any = None
        for index, segment in enumerate(segments):
            if not isinstance(working, dict) or segment not in working:
                raise InputSourceError(f'missing key "{key}"')
            value = working[segment]
            if not isinstance(value, dict) and index < len(segments) - 1:
                raise InputSourceError(
                    f'unexpected intermediate value at "{segment}" segment of "{key}": '
                    f"{type(value).__name__}"
                )
            working = value
        return value

    def integer(self, name: str) -> int:
        value = self._value(name)
        if _is_int(value):
            return value
        if isinstance(value, float):
            return int(value)
        raise _type_error(value, name)

    def duration(self, name: str) -> timedelta:
        value = self._value(name)
        if not isinstance(value, timedelta):
            raise _type_error(value, name)
        return value

    def floating(self, name: str) -> float:
        value = self._value(name)
        if isinstance(value, float) or _is_int(value):
            return float(value)
        raise _type_error(value, name)

    def string(self, name: str) -> str:
        value = self._value(name)
        if not isinstance(value, str):
            raise _type_error(value, name)
        return value

    def string_slice(self, name: str) -> list[str]:
        value = self._value(name)
        if not isinstance(value, list):
            raise _type_error(value, name)
        for item in value:
            if not isinstance(item, str):
                raise InputSourceError(
                    f'unexpected item type {type(item).__name__} in list for "{name}"'
                )
        return list(value)

    def int_slice(self, name: str) -> list[int]:
        value = self._value(name)
        if not isinstance(value, list):
            raise _type_error(value, name)
        for item in value:
            if not _is_int(item):
                raise InputSourceError(
                    f'unexpected item type {type(item).__name__} in list for "{name}"'
                )
        return list(value)

    def generic(self, name: str) -> Generic:
        value = self._value(name)
        if not isinstance(value, Generic) or isinstance(value, (str, int, float, list, dict)):
            raise _type_error(value, name)
        return value

    def boolean(self, name: str) -> bool:
        value = self._value(name)
        if not isinstance(value, bool):
            raise _type_error(value, name)
        return value


def json_source(data: bytes | str) -> JSONInputSource:
    """Create an input source from raw JSON text holding an object."""
    try:
        decoded = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        raise InputSourceError(str(err)) from err
    if not isinstance(decoded, dict):
        raise InputSourceError(f"cannot use JSON {type(decoded).__name__} as an object")
    return JSONInputSource(decoded)


def json_source_from_reader(reader: IO) -> JSONInputSource:
    """Create an input source from a readable stream of JSON."""
    return json_source(reader.read())


def json_source_from_file(path: str) -> JSONInputSource:
    """Create an input source from a JSON file or URL."""
    return json_source(load_data_from(path))


def json_source_from_flag_func(flag: str) -> Callable[[FlagContext], InputSource]:
    """Return a factory loading JSON from the file named by the given flag."""

    def create(context: FlagContext) -> InputSource:
        if context.is_set(flag):
            return json_source_from_file(context.string(flag))
        return default_input_source()

    return create