"""Positional arguments left over after flag parsing."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class Args:
    """A read-only view of the positional arguments of a command line."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[str] = ()) -> None:
        self._items: list[str] = list(items)

    def get(self, n: int) -> str:
        """Return the nth argument, or an empty string if there is none."""
        if 0 <= n < len(self._items):
            return self._items[n]
        return ""

    def first(self) -> str:
        """Return the first argument, or an empty string."""
        return self.get(0)

    def tail(self) -> list[str]:
        """Return a copy of every argument after the first."""
        return list(self._items[1:])

    def present(self) -> bool:
        """Tell whether any argument is present."""
        return bool(self._items)

    def slice(self) -> list[str]:
        """Return a copy of all arguments."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __bool__(self) -> bool:
        return self.present()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Args):
            return self._items == other._items
        return NotImplemented

    def __repr__(self) -> str:
        return f"Args({self._items!r})"