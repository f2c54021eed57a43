"""
Schema introspector.

Describes a live table as a TableSchema. All dialect-specific metadata
handling lives here:

    MariaDB  `SHOW COLUMNS FROM t` exposes name, type, nullability,
             key flag and an "Extra" string carrying auto_increment.

    SQLite   `PRAGMA [schema.]table_info('t')` exposes name, type, notnull and a
             primary-key ordinal. Auto-increment is not reported per
             column, so for the primary key we look for the table in the
             internal sqlite_sequence table, and fall back to the
             AUTOINCREMENT keyword in the table's DDL (sqlite_sequence
             only gets a row after the first insert).
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Tuple

from ..db.statement import StatementWriter
from ..dialects import Dialect, Primitive, quote_identifier
from ..errors import DatabaseError, SchemaError
from .classifier import classify
from .models import ColumnSpec, TableSchema

logger = logging.getLogger(__name__)

_AUTOINCREMENT_RE = re.compile(r"\bAUTOINCREMENT\b", re.IGNORECASE)


def describe(connection: Any, table: str) -> TableSchema:
    """
    Introspect `table` through `connection` and return its TableSchema.

    Parameters
    ----------
    connection:
        DBConnection (anything with .dialect and .query()).
    table:
        Table name, matched with the database's own case rules.

    Raises
    ------
    SchemaError
        Metadata query failed, the table does not exist, or it uses a
        composite primary key.
    UnsupportedDialect
        The connection carries an unknown dialect tag.
    """
    dialect = Dialect.parse(connection.dialect)

    try:
        if dialect is Dialect.MARIADB:
            columns = _describe_mariadb(connection, table)
        else:
            columns = _describe_sqlite(connection, table)
    except DatabaseError as e:
        raise SchemaError(f"Could not load table structure for {table!r}: {e}", table) from e

    if not columns:
        raise SchemaError(f"Table {table!r} does not exist or has no columns", table)

    schema = TableSchema(table=table, dialect=dialect, columns=tuple(columns))
    logger.debug(
        "Described %s table %r: %s (pk=%s)",
        dialect.value,
        table,
        ", ".join(f"{c.name}:{c.primitive.name}" for c in columns),
        schema.primary_key.name if schema.primary_key else None,
    )
    return schema


# ----------------------------------------------------------------------
# MariaDB / MySQL
# ----------------------------------------------------------------------

def _describe_mariadb(connection: Any, table: str) -> List[ColumnSpec]:
    sql = "SHOW COLUMNS FROM " + quote_identifier(table, Dialect.MARIADB)

    columns: List[ColumnSpec] = []
    for row in connection.query(sql):
        is_pk = str(row.get("Key") or "").upper() == "PRI"
        is_ai = "auto_increment" in str(row.get("Extra") or "").lower()

        columns.append(
            ColumnSpec(
                name=row["Field"],
                primitive=classify(row["Type"], Dialect.MARIADB),
                nullable=str(row.get("Null") or "").upper() == "YES",
                is_primary_key=is_pk,
                # auto_increment on a non-primary key column is not tracked
                is_auto_increment=is_ai and is_pk,
                declared_type=str(row["Type"]),
            )
        )
    return columns


# ----------------------------------------------------------------------
# SQLite
# ----------------------------------------------------------------------

def _split_sqlite_name(table: str) -> Tuple[str, str]:
    """
    "schema.table" -> ('"schema".', "table"); a bare name gets no prefix.
    The prefix qualifies PRAGMA and the sqlite_master / sqlite_sequence
    lookups so attached databases are described from their own catalog.
    """
    if "." not in table:
        return "", table
    schema_name, name = table.split(".", 1)
    return quote_identifier(schema_name, Dialect.SQLITE) + ".", name


def _describe_sqlite(connection: Any, table: str) -> List[ColumnSpec]:
    prefix, name = _split_sqlite_name(table)
    literal = "'" + name.replace("'", "''") + "'"
    rows: List[Dict[str, Any]] = list(connection.query(f"PRAGMA {prefix}table_info({literal})"))

    composite = [r["name"] for r in rows if int(r["pk"] or 0) > 1]
    if composite:
        raise SchemaError(
            f"Composite primary keys are not supported (table {table!r}, key columns beyond the first: {composite})",
            table,
        )

    columns: List[ColumnSpec] = []
    for row in rows:
        is_pk = int(row["pk"] or 0) == 1
        declared = row["type"] or ""
        columns.append(
            ColumnSpec(
                name=row["name"],
                primitive=classify(declared, Dialect.SQLITE),
                nullable=not int(row["notnull"] or 0),
                is_primary_key=is_pk,
                is_auto_increment=is_pk and _sqlite_is_autoincrement(connection, prefix, name),
                declared_type=declared,
            )
        )
    return columns


def _sqlite_is_autoincrement(connection: Any, prefix: str, name: str) -> bool:
    seq_table = _sqlite_fetch_one(
        connection,
        f"SELECT COUNT(*) AS num FROM {prefix}sqlite_master WHERE type = 'table' AND name = ",
        "sqlite_sequence",
    )
    if seq_table and int(seq_table["num"]) == 1:
        seq_row = _sqlite_fetch_one(
            connection, f"SELECT COUNT(*) AS num FROM {prefix}sqlite_sequence WHERE name = ", name
        )
        if seq_row and int(seq_row["num"]) == 1:
            return True

    # No sequence row yet: look at the declaration itself
    ddl = _sqlite_fetch_one(
        connection, f"SELECT sql FROM {prefix}sqlite_master WHERE type = 'table' AND name = ", name
    )
    return bool(ddl and ddl.get("sql") and _AUTOINCREMENT_RE.search(ddl["sql"]))


def _sqlite_fetch_one(connection: Any, sql: str, name: str):
    w = StatementWriter()
    w.write(sql)
    w.bind(name, Primitive.TEXT)

    cursor = connection.query(w.build())
    row = cursor.fetch_row()
    cursor.close()
    return row


__all__ = ["describe"]
