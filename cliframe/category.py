"""Grouping of commands into named categories for help output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass
class CommandCategory:
    """A named category holding commands."""

    name: str
    commands: list[Any] = field(default_factory=list)

    def visible_commands(self) -> list[Any]:
        """Return the commands of this category that are not hidden."""
        return [c for c in self.commands if not getattr(c, "hidden", False)]


class CommandCategories:
    """An ordered collection of command categories."""

    def __init__(self) -> None:
        self._categories: list[CommandCategory] = []

    def add_command(self, category: str, command: Any) -> None:
        """Add a command to a category, creating the category if needed."""
        for existing in self._categories:
            if existing.name == category:
                existing.commands.append(command)
                return
        self._categories.append(CommandCategory(category, [command]))

    def categories(self) -> list[CommandCategory]:
        """Return a copy of the list of categories."""
        return list(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[CommandCategory]:
        return iter(self.categories())