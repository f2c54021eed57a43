"""
Statement builders.

Pure functions: schema + values in, Statement out. Nothing here touches
a connection. Identifiers are quoted for the schema's dialect and every
value travels as a typed BoundValue, so the connection can either bind
it or escape it inline.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence, Tuple

from ..db.statement import Statement, StatementWriter
from ..dialects import Dialect, quote_identifier
from ..schema.models import ColumnSpec, TableSchema

Assignment = Tuple[ColumnSpec, Any]


def _q(schema: TableSchema, name: str) -> str:
    return quote_identifier(name, schema.dialect)


def _write_predicate(w: StatementWriter, schema: TableSchema, where: Mapping[str, Any]) -> None:
    for i, (name, value) in enumerate(where.items()):
        w.write(" WHERE " if i == 0 else " AND ")
        w.write(_q(schema, name))
        if value is None:
            w.write(" IS NULL")
        else:
            w.write(" = ")
            w.bind(value, schema.column(name).primitive)


def build_select(schema: TableSchema, where: Mapping[str, Any]) -> Statement:
    """SELECT * FROM table [WHERE col = ? AND ...]"""
    w = StatementWriter()
    w.write("SELECT * FROM " + _q(schema, schema.table))
    _write_predicate(w, schema, where)
    return w.build()


def build_update(
    schema: TableSchema,
    assignments: Sequence[Assignment],
    where: Mapping[str, Any],
) -> Statement:
    """UPDATE table SET a = ?, b = ? WHERE <identity>"""
    if not assignments:
        raise ValueError("UPDATE needs at least one assignment")
    if not where:
        raise ValueError("UPDATE needs an identifying predicate")

    w = StatementWriter()
    w.write("UPDATE " + _q(schema, schema.table) + " SET ")
    for i, (spec, value) in enumerate(assignments):
        if i:
            w.write(", ")
        w.write(_q(schema, spec.name) + " = ")
        w.bind(value, spec.primitive)
    _write_predicate(w, schema, where)
    return w.build()


def build_insert(schema: TableSchema, assignments: Sequence[Assignment]) -> Statement:
    """INSERT INTO table (a, b) VALUES (?, ?)"""
    w = StatementWriter()
    w.write("INSERT INTO " + _q(schema, schema.table))

    if not assignments:
        # Every column takes its default
        if schema.dialect is Dialect.MARIADB:
            w.write(" () VALUES ()")
        else:
            w.write(" DEFAULT VALUES")
        return w.build()

    w.write(" (" + ", ".join(_q(schema, spec.name) for spec, _ in assignments) + ") VALUES (")
    for i, (spec, value) in enumerate(assignments):
        if i:
            w.write(", ")
        w.bind(value, spec.primitive)
    w.write(")")
    return w.build()


def build_delete(schema: TableSchema, where: Mapping[str, Any]) -> Statement:
    """DELETE FROM table WHERE <identity>"""
    if not where:
        raise ValueError("DELETE needs an identifying predicate")

    w = StatementWriter()
    w.write("DELETE FROM " + _q(schema, schema.table))
    _write_predicate(w, schema, where)
    return w.build()


def assignments_for(columns: Iterable[Any]) -> list:
    """(spec, value) pairs from ColumnDescriptors."""
    return [(c.spec, c.value) for c in columns]


__all__ = [
    "build_select",
    "build_update",
    "build_insert",
    "build_delete",
    "assignments_for",
]
