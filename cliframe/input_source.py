"""The interface of alternate flag value sources, and duration text handling."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from datetime import timedelta
from fractions import Fraction
from typing import Protocol, runtime_checkable


class InputSourceError(Exception):
    """Raised when an input source cannot supply a value of the requested type."""


@runtime_checkable
class Generic(Protocol):
    """A flag value that can be set from text and shown as text."""

    def set(self, value: str) -> None: ...

    def __str__(self) -> str: ...


class InputSource(ABC):
    """A source of flag values other than the command line."""

    @property
    @abstractmethod
    def source(self) -> str:
        """An identifier of the source, such as a file path."""

    @abstractmethod
    def integer(self, name: str) -> int: ...

    @abstractmethod
    def duration(self, name: str) -> timedelta: ...

    @abstractmethod
    def floating(self, name: str) -> float: ...

    @abstractmethod
    def string(self, name: str) -> str: ...

    @abstractmethod
    def string_slice(self, name: str) -> list[str] | None: ...

    @abstractmethod
    def int_slice(self, name: str) -> list[int] | None: ...

    @abstractmethod
    def generic(self, name: str) -> Generic | None: ...

    @abstractmethod
    def boolean(self, name: str) -> bool: ...


_NANOS_PER_UNIT = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_SEGMENT = re.compile(r"(\d*)(?:\.(\d*))?([^\d.]*)")


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as "1h30m" or "-1.5s"; raise ValueError if malformed."""
    rest = text
    negative = False
    if rest.startswith(("-", "+")):
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise ValueError(f'invalid duration "{text}"')

    total = Fraction(0)
    pos = 0
    while pos < len(rest):
        match = _SEGMENT.match(rest, pos)
        whole, frac, unit = match.groups()
        if not whole and not frac:
            raise ValueError(f'invalid duration "{text}"')
        if not unit:
            raise ValueError(f'missing unit in duration "{text}"')
        if unit not in _NANOS_PER_UNIT:
            raise ValueError(f'unknown unit "{unit}" in duration "{text}"')
        value = Fraction(int(whole or "0"))
        if frac:
            value += Fraction(int(frac), 10 ** len(frac))
        total += value * _NANOS_PER_UNIT[unit]
        pos = match.end()

    result = timedelta(microseconds=int(total) // 1_000)
    return -result if negative else result


def _with_fraction(value: int, precision: int) -> str:
    whole, frac = divmod(value, 10**precision)
    digits = f"{frac:0{precision}d}".rstrip("0")
    return f"{whole}.{digits}" if digits else str(whole)


def format_duration(value: timedelta) -> str:
    """Render a duration in the compact "1h2m3.5s" form."""
    nanos = (value // timedelta(microseconds=1)) * 1_000
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)

    if nanos == 0:
        return "0s"
    if nanos < 1_000:
        return f"{sign}{nanos}ns"
    if nanos < 1_000_000:
        return f"{sign}{_with_fraction(nanos, 3)}\u00b5s"
    if nanos < 1_000_000_000:
        return f"{sign}{_with_fraction(nanos, 6)}ms"

    seconds, frac_nanos = divmod(nanos, 1_000_000_000)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    sec_text = _with_fraction(secs * 1_000_000_000 + frac_nanos, 9)
    if hours:
        return f"{sign}{hours}h{minutes}m{sec_text}s"
    if minutes:
        return f"{sign}{minutes}m{sec_text}s"
    return f"{sign}{sec_text}s"