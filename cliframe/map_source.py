"""An input source backed by an in-memory mapping."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta
from typing import Any

from cliframe.input_source import (
    Generic,
    InputSource,
    InputSourceError,
    parse_duration,
)

_MISSING = object()


def _nested_value(name: str, tree: Mapping) -> Any:
    """Follow a dotted name through nested mappings, or return _MISSING."""
    sections = name.split(".")
    if len(sections) < 2:
        return _MISSING
    node = tree
    for section in sections[:-1]:
        child = node.get(section, _MISSING)
        if not isinstance(child, Mapping):
            return _MISSING
        node = child
    return node.get(sections[-1], _MISSING)


def _type_error(name: str, expected: str, value: Any) -> InputSourceError:
    actual = "" if value is None else type(value).__name__
    return InputSourceError(
        f"Mismatched type for flag '{name}'. Expected '{expected}' but actual is '{actual}'"
    )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class MapInputSource(InputSource):
    """Serves flag values from a mapping; dotted names reach into nested mappings."""

    def __init__(self, file: str = "", value_map: Mapping | None = None) -> None:
        self._file = file
        self._values: Mapping = {} if value_map is None else value_map

    @property
    def source(self) -> str:
        return self._file

    def _lookup(self, name: str) -> Any:
        value = self._values.get(name, _MISSING)
        if value is _MISSING:
            value = _nested_value(name, self._values)
        return value

    def integer(self, name: str) -> int:
        value = self._lookup(name)
        if value is _MISSING:
            return 0
        if not _is_int(value):
            raise _type_error(name, "int", value)
        return value

    def duration(self, name: str) -> timedelta:
        value = self._lookup(name)
        if value is _MISSING:
            return timedelta(0)
        if isinstance(value, timedelta):
            return value
        if isinstance(value, str):
            try:
                return parse_duration(value)
            except ValueError:
                pass
        raise _type_error(name, "duration", value)

    def floating(self, name: str) -> float:
        value = self._lookup(name)
        if value is _MISSING:
            return 0.0
        if not isinstance(value, float):
            raise _type_error(name, "float", value)
        return value

    def string(self, name: str) -> str:
        value = self._lookup(name)
        if value is _MISSING:
            return ""
        if not isinstance(value, str):
            raise _type_error(name, "str", value)
        return value

    def _sequence(self, name: str) -> list | None:
        value = self._lookup(name)
        if value is _MISSING:
            return None
        if not isinstance(value, (list, tuple)):
            raise _type_error(name, "list", value)
        return list(value)

    def string_slice(self, name: str) -> list[str] | None:
        items = self._sequence(name)
        if items is None:
            return None
        for i, item in enumerate(items):
            if not isinstance(item, str):
                raise _type_error(f"{name}[{i}]", "str", item)
        return items

    def int_slice(self, name: str) -> list[int] | None:
        items = self._sequence(name)
        if items is None:
            return None
        for i, item in enumerate(items):
            if not _is_int(item):
                raise _type_error(f"{name}[{i}]", "int", item)
        return items

    def generic(self, name: str) -> Generic | None:
        value = self._lookup(name)
        if value is _MISSING:
            return None
        if not isinstance(value, Generic):
            raise _type_error(name, "Generic", value)
        return value

    def boolean(self, name: str) -> bool:
        value = self._lookup(name)
        if value is _MISSING:
            return False
        if not isinstance(value, bool):
            raise _type_error(name, "bool", value)
        return value


def default_input_source() -> MapInputSource:
    """Return an empty input source with no file behind it."""
    return MapInputSource("", {})