"""
Error taxonomy for tablerecord.

Every failure raised by the mapper derives from MapperError, so callers
can catch the whole family in one place. None of these are recovered
internally: each one terminates the current operation, and all input
checks run before any statement reaches the connection.

    MapperError
        SchemaError             table missing / metadata query failed
        UnsupportedDialect      dialect tag is neither family A nor B
        UnknownColumn           column name not in the table schema
        TypeMismatch            non-numeric value for a NUMERIC column
        ImmutableField          write to an identity column
        NotNullViolation        None headed for a NOT NULL column
        AutoIncrementConflict   explicit value on an auto-increment key
        CardinalityError        a point operation did not touch 1 row
        RecordStateError        operation called in the wrong lifecycle state
        DatabaseError           driver error, wrapped with statement text
"""

from __future__ import annotations

from typing import Any, Optional


class MapperError(Exception):
    """Base class for every error raised by tablerecord."""


class SchemaError(MapperError):
    """The table could not be described."""

    def __init__(self, message: str, table: Optional[str] = None):
        self.table = table
        super().__init__(message)


class UnsupportedDialect(MapperError):
    """A dialect tag outside the supported families was supplied."""


class UnknownColumn(MapperError):
    """The column does not exist in the table (case-sensitive match)."""

    def __init__(self, column: str, table: Optional[str] = None):
        self.column = column
        self.table = table
        where = f" on table {table!r}" if table else ""
        super().__init__(f"Column {column!r} does not exist{where} or does not match case")


class TypeMismatch(MapperError):
    """A value does not fit the column's primitive class."""

    def __init__(self, message: str, column: Optional[str] = None, value: Any = None):
        self.column = column
        self.value = value
        super().__init__(message)


class ImmutableField(MapperError):
    """An identity column was targeted by set()."""

    def __init__(self, message: str, column: Optional[str] = None):
        self.column = column
        super().__init__(message)


class NotNullViolation(MapperError):
    def __init__(self, column: str):
        self.column = column
        super().__init__(f"Attempting to write a null value into not null column {column!r}")


class AutoIncrementConflict(MapperError):
    def __init__(self, column: str):
        self.column = column
        super().__init__(
            f"Attempting to insert a defined value into auto increment primary key {column!r}; "
            "None expected"
        )


class CardinalityError(MapperError):
    """A read or write did not match exactly one row."""

    def __init__(self, message: str, rows: Optional[int] = None, sql: Optional[str] = None):
        self.rows = rows
        self.sql = sql
        super().__init__(message)


class RecordStateError(MapperError):
    """The record instance is not in a state that allows the operation."""


class DatabaseError(MapperError):
    """A driver-level failure, carrying the statement that caused it."""

    def __init__(self, message: str, sql: Optional[str] = None):
        self.sql = sql
        super().__init__(message)


__all__ = [
    "MapperError",
    "SchemaError",
    "UnsupportedDialect",
    "UnknownColumn",
    "TypeMismatch",
    "ImmutableField",
    "NotNullViolation",
    "AutoIncrementConflict",
    "CardinalityError",
    "RecordStateError",
    "DatabaseError",
]
