"""
tablerecord

Schema-aware single-record mapper for MariaDB/MySQL and SQLite.

Submodules include:
    - db/        connections, cursors, statements, backends
    - schema/    type classification and table introspection
    - record/    record state, statement builders, CRUD operations
    - escaping   value escaper for literal SQL
    - errors     exception taxonomy
    - config     environment-driven configuration

The root package re-exports the pieces most callers need.
"""

from .config import TableRecordConfig, load_config
from .core import open_database
from .dialects import Dialect, Primitive
from .errors import (
    AutoIncrementConflict,
    CardinalityError,
    DatabaseError,
    ImmutableField,
    MapperError,
    NotNullViolation,
    RecordStateError,
    SchemaError,
    TypeMismatch,
    UnknownColumn,
    UnsupportedDialect,
)
from .escaping import escape
from .record import DeleteRecord, NewRecord, ReadUpdateRecord, UpsertRecord
from .schema import TableSchema, classify, describe

__all__ = [
    "TableRecordConfig",
    "load_config",
    "open_database",
    "Dialect",
    "Primitive",
    "escape",
    "classify",
    "describe",
    "TableSchema",
    "ReadUpdateRecord",
    "NewRecord",
    "UpsertRecord",
    "DeleteRecord",
    # Errors
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
