"""Applying values from an input source to flags not set elsewhere."""

from __future__ import annotations

import math
import os
from collections.abc import Callable, Iterable, MutableMapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol

from cliframe.input_source import InputSource, InputSourceError, format_duration


class SetContext(Protocol):
    """What applying needs from a parsed command context."""

    def is_set(self, name: str) -> bool: ...


class FlagKind(Enum):
    GENERIC = "generic"
    STRING_SLICE = "string_slice"
    INT_SLICE = "int_slice"
    BOOL = "bool"
    STRING = "string"
    PATH = "path"
    INT = "int"
    DURATION = "duration"
    FLOAT64 = "float64"


def is_env_var_set(env_vars: Iterable[str]) -> bool:
    """Tell whether any of the named environment variables is present."""
    return any(name in os.environ for name in env_vars)


def float64_to_string(value: float) -> str:
    """Render a float in shortest form, as "1.3", "15" or "1e+21"."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    number = Decimal(repr(value))
    if number == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    exponent = number.adjusted()
    if -4 <= exponent < 21:
        text = format(number, "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    sign, digits, _ = number.as_tuple()
    digit_text = "".join(map(str, digits)).rstrip("0") or "0"
    mantissa = digit_text[0] + ("." + digit_text[1:] if len(digit_text) > 1 else "")
    return f"{'-' if sign else ''}{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent):02d}"


@dataclass
class InputSourceFlag:
    """A flag whose value may be filled from an input source.

    ``flag_set`` holds the parsed values keyed by flag name; scalar values are
    stored as their textual form and slices as lists.
    """

    name: str
    kind: FlagKind
    aliases: list[str] = field(default_factory=list)
    env_vars: list[str] = field(default_factory=list)
    flag_set: MutableMapping[str, Any] | None = None

    @property
    def names(self) -> list[str]:
        return [self.name, *self.aliases]

    def _store(self, value: Any) -> None:
        for name in self.names:
            self.flag_set[name] = value

    def apply_input_source_value(self, context: SetContext, input_source: InputSource) -> None:
        """Fill the flag from the source unless the command line or environment set it."""
        if self.flag_set is None:
            return
        if context.is_set(self.name) or is_env_var_set(self.env_vars):
            return

        kind = self.kind
        if kind is FlagKind.GENERIC:
            value = input_source.generic(self.name)
            if value is not None:
                self._store(str(value))
        elif kind is FlagKind.STRING_SLICE:
            items = input_source.string_slice(self.name)
            if items is not None:
                self._store(list(items))
        elif kind is FlagKind.INT_SLICE:
            items = input_source.int_slice(self.name)
            if items is not None:
                self._store(list(items))
        elif kind is FlagKind.BOOL:
            if input_source.boolean(self.name):
                self._store("true")
        elif kind is FlagKind.STRING:
            text = input_source.string(self.name)
            if text:
                self._store(text)
        elif kind is FlagKind.PATH:
            text = input_source.string(self.name)
            if text:
                if not os.path.isabs(text) and input_source.source:
                    base = os.path.dirname(os.path.abspath(input_source.source))
                    text = os.path.join(base, text)
                self._store(text)
        elif kind is FlagKind.INT:
            number = input_source.integer(self.name)
            if number > 0:
                self._store(str(number))
        elif kind is FlagKind.DURATION:
            duration = input_source.duration(self.name)
            if duration.total_seconds() > 0:
                self._store(format_duration(duration))
        elif kind is FlagKind.FLOAT64:
            number = input_source.floating(self.name)
            if number > 0:
                self._store(float64_to_string(number))


def apply_input_source_values(
    context: SetContext, input_source: InputSource, flags: Iterable[Any]
) -> None:
    """Apply the source to every flag that supports input sources."""
    for flag in flags:
        if isinstance(flag, InputSourceFlag):
            flag.apply_input_source_value(context, input_source)


def init_input_source(
    flags: Iterable[Any], create_input_source: Callable[[], InputSource]
) -> Callable[[SetContext], None]:
    """Return a before-hook that creates a source and applies it to the flags."""
    flag_list = list(flags)

    def before(context: SetContext) -> None:
        try:
            source = create_input_source()
        except Exception as err:
            raise InputSourceError(
                f"Unable to create input source: inner error: \n'{err}'"
            ) from err
        apply_input_source_values(context, source, flag_list)

    return before


def init_input_source_with_context(
    flags: Iterable[Any], create_input_source: Callable[[Any], InputSource]
) -> Callable[[Any], None]:
    """Like init_input_source, but the factory receives the context."""
    flag_list = list(flags)

    def before(context: Any) -> None:
        try:
            source = create_input_source(context)
        except Exception as err:
            raise InputSourceError(
                f"Unable to create input source with context: inner error: \n'{err}'"
            ) from err
        apply_input_source_values(context, source, flag_list)

    return before