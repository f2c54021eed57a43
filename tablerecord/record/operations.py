"""
Single-record operations.

Each class binds to one table (introspecting it once, or reusing a
TableSchema handed in by the caller) and performs one terminal action
on exactly one row:

    ReadUpdateRecord   add_where() ... read_one() [set() ... update()]
    NewRecord          set() ... insert()
    UpsertRecord       set() ... upsert()  [reset() and go again]
    DeleteRecord       delete(identity)

Lifecycle:

    SCHEMA_LOADED --add_where/set--> FILTERED --read_one--> LOADED
          |                             |                     |
          +------- terminal action -----+---------------------+--> EXECUTED

EXECUTED is final, except on UpsertRecord where reset() returns to
SCHEMA_LOADED from the shadow schema without re-introspecting.

Every check (types, identity, not-null, auto-increment) runs before a
statement is sent, so a rejected operation never leaves a partial write.
Instances are not thread-safe and expect exclusive use of their
connection for the duration of a call.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from ..dialects import Dialect, Primitive
from ..errors import (
    AutoIncrementConflict,
    CardinalityError,
    NotNullViolation,
    RecordStateError,
    SchemaError,
    TypeMismatch,
)
from ..escaping import is_numeric
from ..schema.introspector import describe
from ..schema.models import TableSchema
from .state import MODE_INSERT, MODE_UPDATE, RecordState
from .statements import (
    Assignment,
    assignments_for,
    build_delete,
    build_insert,
    build_select,
    build_update,
)

logger = logging.getLogger(__name__)


class RecordStatus(str, Enum):
    SCHEMA_LOADED = "schema-loaded"
    FILTERED = "filtered"
    LOADED = "loaded"
    EXECUTED = "executed"


# ----------------------------------------------------------------------
# Common base
# ----------------------------------------------------------------------

class SingleRecord:
    """
    Shared plumbing for the single-record operations.

    Parameters
    ----------
    connection:
        DBConnection (or anything exposing dialect, execute(), query()
        and last_inserted_identity()).
    table : str
        Table to bind to. Case must match the database.
    schema : Optional[TableSchema]
        Pre-built schema; skips introspection. Lets many instances share
        one describe() call.
    """

    mode = MODE_INSERT

    def __init__(self, connection: Any, table: str, *, schema: Optional[TableSchema] = None):
        self.connection = connection
        self.table = table

        if schema is None:
            schema = describe(connection, table)
        elif schema.table != table:
            raise SchemaError(
                f"Schema describes {schema.table!r}, not {table!r}", table
            )
        if schema.dialect is not Dialect.parse(connection.dialect):
            raise SchemaError(
                f"Schema was described for {schema.dialect.value}, "
                f"connection speaks {Dialect.parse(connection.dialect).value}",
                table,
            )

        self.schema = schema
        self.where: Dict[str, Any] = {}
        self.state = RecordState(schema, self.mode, filters=lambda: self.where)
        self.status = RecordStatus.SCHEMA_LOADED

    def __repr__(self) -> str:
        return f"<{type(self).__name__} table={self.table!r} status={self.status.value}>"

    # ------------------------------------------------------------------
    # Field access
    # ------------------------------------------------------------------

    def get(self, name: str) -> Any:
        """Current value of a column (case-sensitive name)."""
        return self.state.get(name)

    def set(self, name: str, value: Any) -> None:
        """Validate and set a column value; see RecordState.set."""
        self._require_open()
        self.state.set(name, value)
        if self.status is RecordStatus.SCHEMA_LOADED:
            self.status = RecordStatus.FILTERED

    def values(self) -> Dict[str, Any]:
        return self.state.values()

    # ------------------------------------------------------------------
    # Internal checks
    # ------------------------------------------------------------------

    def _require_open(self) -> None:
        if self.status is RecordStatus.EXECUTED:
            raise RecordStateError(
                f"{type(self).__name__} on {self.table!r} has already executed"
            )

    def _require_primary_key(self, action: str):
        pk = self.schema.primary_key
        if pk is None:
            raise RecordStateError(f"Cannot {action} on {self.table!r}: table has no primary key")
        return pk

    def _check_identity(self, identity: Any) -> None:
        pk = self.schema.primary_key
        if identity is None:
            raise TypeMismatch(f"An identity value is required for {self.table!r}", column=pk.name)
        if pk.primitive is Primitive.NUMERIC and not is_numeric(identity):
            raise TypeMismatch(
                f"Identity {identity!r} does not match the numeric primary key {pk.name!r}",
                column=pk.name,
                value=identity,
            )

    @staticmethod
    def _check_not_null(assignments: Sequence[Assignment]) -> None:
        for spec, value in assignments:
            if value is None and not spec.nullable:
                raise NotNullViolation(spec.name)

    def _check_auto_increment(self) -> None:
        pk = self.schema.primary_key
        if pk is not None and pk.is_auto_increment and self.state.get(pk.name) is not None:
            raise AutoIncrementConflict(pk.name)

    def _execute_one(self, statement, action: str) -> int:
        rows = self.connection.execute(statement)
        if rows != 1:
            raise CardinalityError(
                f"{action} on {self.table!r} affected {rows} rows; exactly 1 expected",
                rows=rows,
                sql=str(statement),
            )
        return rows

    def _inserted_identity(self) -> Any:
        """
        Explicit key value, else the generated one. A key that is neither
        set nor generated has no identity to report; the driver's rowid
        or 0 would be misleading.
        """
        pk = self.schema.primary_key
        if pk is not None and self.state.get(pk.name) is not None:
            return self.state.get(pk.name)
        if pk is not None and not (pk.is_auto_increment or self._is_rowid_alias(pk)):
            return None
        return self.connection.last_inserted_identity()

    def _is_rowid_alias(self, pk) -> bool:
        # SQLite fills a NULL "INTEGER PRIMARY KEY" from the rowid
        return (
            self.schema.dialect is Dialect.SQLITE
            and pk.declared_type.strip().upper() == "INTEGER"
        )


# ----------------------------------------------------------------------
# Read / update
# ----------------------------------------------------------------------

class ReadUpdateRecord(SingleRecord):
    """
    Load one known record, read it field by field, optionally change it
    and write it back.

    With a primary key, the update is keyed on it and every other column
    may change. Without one, the where-filter used for the read also
    identifies the row for the update, and those filter columns are
    frozen.
    """

    mode = MODE_UPDATE

    def add_where(self, name: str, value: Any) -> None:
        """
        Add a `column = value` condition for read_one().

        None matches with IS NULL. NUMERIC columns only accept numeric
        values.
        """
        self._require_open()
        spec = self.schema.column(name)
        if spec.primitive is Primitive.NUMERIC and value is not None and not is_numeric(value):
            raise TypeMismatch(
                f"Type error for where condition on numeric column {name!r}: {value!r}",
                column=name,
                value=value,
            )

        self.where[name] = value
        if self.status is RecordStatus.SCHEMA_LOADED:
            self.status = RecordStatus.FILTERED

    def set(self, name: str, value: Any) -> None:
        """
        Change a column of the loaded record.

        Only allowed after read_one(): the read would otherwise replace
        the value before update() writes it.
        """
        self._require_open()
        if self.status is not RecordStatus.LOADED:
            raise RecordStateError(
                f"No record loaded from {self.table!r}; call read_one() before set()"
            )
        self.state.set(name, value)

    def read_one(self) -> Dict[str, Any]:
        """
        Read the record matching the where conditions.

        No LIMIT is applied: zero rows means the filter or the data is
        wrong, and several rows mean the filter does not pin down one
        record. Both raise CardinalityError.

        Returns
        -------
        dict
            Column -> value for the loaded record.
        """
        self._require_open()
        statement = build_select(self.schema, self.where)

        first: Optional[Dict[str, Any]] = None
        count = 0
        for row in self.connection.query(statement):
            if first is None:
                first = row
            count += 1

        if count != 1:
            raise CardinalityError(
                f"Query on {self.table!r} returned {count} rows. Only 1 row is expected",
                rows=count,
                sql=str(statement),
            )

        self.state.load(first)
        self.status = RecordStatus.LOADED
        logger.debug("Loaded one record from %r", self.table)
        return self.state.values()

    def update(self) -> int:
        """
        Write every non-identity column back to the loaded record.

        Raises
        ------
        RecordStateError
            No record loaded, or nothing identifies the row.
        NotNullViolation
            A written column holds None but is NOT NULL.
        CardinalityError
            The update did not affect exactly one row.
        """
        self._require_open()
        if self.status is not RecordStatus.LOADED:
            raise RecordStateError(f"No record loaded from {self.table!r}; call read_one() first")

        identity = self._identity_predicate()
        assignments = assignments_for(c for c in self.state if c.name not in identity)
        if not assignments:
            raise RecordStateError(f"Nothing to update on {self.table!r}: only identity columns")

        self._check_not_null(assignments)
        statement = build_update(self.schema, assignments, identity)
        rows = self._execute_one(statement, "Update")

        self.status = RecordStatus.EXECUTED
        logger.debug("Updated %r where %r", self.table, identity)
        return rows

    def _identity_predicate(self) -> Dict[str, Any]:
        pk = self.schema.primary_key
        if pk is not None:
            return {pk.name: self.state.get(pk.name)}
        if not self.where:
            raise RecordStateError(
                f"Table {self.table!r} has no primary key and no where condition "
                "identifies the record"
            )
        return dict(self.where)


# ----------------------------------------------------------------------
# Insert
# ----------------------------------------------------------------------

class NewRecord(SingleRecord):
    """
    Insert one new record built up with set().

    Every column is written (None where nothing was set), except an
    auto-increment primary key, which the database fills in.
    """

    mode = MODE_INSERT

    def insert(self) -> Any:
        """
        Insert the record and return its identity: the primary-key value
        when one was set explicitly, otherwise the identity generated by
        the database.
        """
        self._require_open()
        self._check_auto_increment()

        assignments = assignments_for(c for c in self.state if not c.spec.is_auto_increment)
        self._check_not_null(assignments)

        self._execute_one(build_insert(self.schema, assignments), "Insert")
        identity = self._inserted_identity()
        self.state.assign_identity(identity)

        self.status = RecordStatus.EXECUTED
        logger.debug("Inserted into %r, identity=%r", self.table, identity)
        return identity


# ----------------------------------------------------------------------
# Upsert (minimal diff)
# ----------------------------------------------------------------------

class UpsertRecord(SingleRecord):
    """
    Insert or update one record, writing only the columns set since the
    last reset.

    Parameters
    ----------
    identity:
        None selects insert mode. A primary-key value selects update
        mode, keyed on that value.

    One instance can run many cycles against the same table:

        up = UpsertRecord(conn, "contacts")
        for row in batch:
            for k, v in row.items():
                up.set(k, v)
            up.upsert()
            up.reset()
    """

    def __init__(
        self,
        connection: Any,
        table: str,
        identity: Any = None,
        *,
        schema: Optional[TableSchema] = None,
    ):
        super().__init__(connection, table, schema=schema)
        self.identity: Any = None
        self._select_mode(identity)

    def _select_mode(self, identity: Any) -> None:
        if identity is None:
            self.mode = MODE_INSERT
        else:
            self._require_primary_key("update by identity")
            self._check_identity(identity)
            self.mode = MODE_UPDATE

        self.identity = identity
        self.state.mode = self.mode
        if identity is not None:
            self.state.assign_identity(identity)

    @property
    def is_update(self) -> bool:
        return self.mode == MODE_UPDATE

    def upsert(self) -> Any:
        """
        Write the changed columns and return the record's identity.

        Raises
        ------
        AutoIncrementConflict
            Insert mode with a value set on the auto-increment key.
        NotNullViolation
            A changed column holds None but is NOT NULL.
        RecordStateError
            Update mode with nothing changed.
        CardinalityError
            The statement did not affect exactly one row.
        """
        self._require_open()
        changed = self.state.changed_columns()

        if self.is_update:
            pk = self.schema.primary_key
            assignments = assignments_for(changed)
            if not assignments:
                raise RecordStateError(f"Nothing changed on {self.table!r}; no update to send")
            self._check_not_null(assignments)

            statement = build_update(self.schema, assignments, {pk.name: self.identity})
            self._execute_one(statement, "Update")
            identity = self.identity
        else:
            self._check_auto_increment()
            assignments = assignments_for(c for c in changed if not c.spec.is_auto_increment)
            self._check_not_null(assignments)

            self._execute_one(build_insert(self.schema, assignments), "Insert")
            identity = self._inserted_identity()
            self.state.assign_identity(identity)
            self.identity = identity

        self.status = RecordStatus.EXECUTED
        logger.debug(
            "Upserted %r (%s, %d column(s)), identity=%r",
            self.table,
            self.mode,
            len(assignments),
            identity,
        )
        return identity

    def reset(self, identity: Any = None) -> None:
        """
        Return to a clean slate from the shadow schema and pick the mode
        for the next cycle. No introspection query is issued.
        """
        self.state.reset()
        self.where.clear()
        self.status = RecordStatus.SCHEMA_LOADED
        self._select_mode(identity)


# ----------------------------------------------------------------------
# Delete
# ----------------------------------------------------------------------

class DeleteRecord(SingleRecord):
    """Delete one record by primary key."""

    mode = MODE_UPDATE

    def delete(self, identity: Any) -> int:
        """
        Delete the row whose primary key equals `identity`.

        A NUMERIC key needs a numeric identity. The affected-row count is
        checked like every other write: anything but 1 raises
        CardinalityError.
        """
        self._require_open()
        pk = self._require_primary_key("delete")
        self._check_identity(identity)

        rows = self._execute_one(build_delete(self.schema, {pk.name: identity}), "Delete")
        self.status = RecordStatus.EXECUTED
        logger.debug("Deleted %r where %s = %r", self.table, pk.name, identity)
        return rows


__all__ = [
    "RecordStatus",
    "SingleRecord",
    "ReadUpdateRecord",
    "NewRecord",
    "UpsertRecord",
    "DeleteRecord",
]
