"""Positional arguments, command categories, and alternate flag value sources (maps, YAML, TOML, JSON)."""

__version__ = "0.1.0"