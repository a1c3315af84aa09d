"""
Exception hierarchy for Database Filler.

Run-level failures (a missing schema file) stop the whole fill. Everything
else is scoped to a single table: the orchestrator records the failure for
that table and moves on to the next one.
"""

from __future__ import annotations


class DatabaseFillerError(Exception):
    """Base class for all errors raised by the package."""


class SchemaFileNotFoundError(DatabaseFillerError):
    """The configured schema file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"The schema file '{path}' does not exist.")
        self.path = path


class SchemaParseError(DatabaseFillerError):
    """A table block could not be turned into a table model."""


class MissingPrimaryKeyError(SchemaParseError):
    """The table declares no backtick-quoted PRIMARY KEY."""

    def __init__(self, table_name: str) -> None:
        super().__init__(f"Table '{table_name}' declares no backtick-quoted PRIMARY KEY.")
        self.table_name = table_name


class UnsupportedColumnError(DatabaseFillerError):
    """Raised in strict mode when a column type matches no known category."""

    def __init__(self, table_name: str, column_names: list[str]) -> None:
        joined = ", ".join(column_names)
        super().__init__(f"Table '{table_name}' has columns of unsupported type: {joined}")
        self.table_name = table_name
        self.column_names = column_names


class SinkError(DatabaseFillerError):
    """The database sink could not be set up (e.g. connection refused)."""


__all__ = [
    "DatabaseFillerError",
    "SchemaFileNotFoundError",
    "SchemaParseError",
    "MissingPrimaryKeyError",
    "UnsupportedColumnError",
    "SinkError",
]
