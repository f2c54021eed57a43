"""
Dialect-tagged connections.

DBConnection is the single boundary between the record layer and a
driver: the introspector and the record operations only ever call
execute(), query(), last_inserted_identity() and read `.dialect`.
ConnectionFactory opens DBConnections from a backend (see
backend_base for the contract a backend fulfils).
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple, Union

from ..dialects import Dialect
from ..errors import DatabaseError
from . import helpers as default_helpers
from .cursor import RowCursor
from .statement import Statement

logger = logging.getLogger(__name__)

StatementLike = Union[Statement, str]


class DBConnection:
    """
    A raw DB-API connection plus the dialect it speaks.

    Parameters
    ----------
    raw_conn:
        sqlite3 or pymysql connection, already open.
    dialect:
        Dialect or a tag Dialect.parse() accepts.
    helpers:
        Module with safe_execute / safe_fetch_one / row_to_dict.
    bind_parameters : bool
        Send Statement values through the driver's parameter binding.
        When False they are escaped into the SQL text instead.
    autocommit : bool
        Commit after every successful execute().

    A DBConnection is meant for one caller at a time. Closing it twice
    is harmless.
    """

    def __init__(
        self,
        raw_conn: Any,
        dialect: Union[Dialect, str],
        helpers: Any = default_helpers,
        *,
        bind_parameters: bool = True,
        autocommit: bool = True,
    ):
        self.raw = raw_conn
        self.dialect = Dialect.parse(dialect)
        self.helpers = helpers
        self.bind_parameters = bind_parameters
        self.autocommit = autocommit
        self.affected_rows: Optional[int] = None
        self._last_insert_id: Any = None

    def __repr__(self) -> str:
        mode = "bound" if self.bind_parameters else "literal"
        return f"<DBConnection {self.dialect.value} {mode}>"

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, statement: StatementLike) -> Tuple[str, Optional[Tuple[Any, ...]]]:
        """
        (sql, params) as they will reach the driver.

        Plain strings go out verbatim with no params. A Statement with
        values is bound, or rendered literally when binding is off.
        """
        if isinstance(statement, str):
            return statement, None
        if not statement.values:
            return statement.fragments[0], None
        if not self.bind_parameters:
            return statement.literal(self.dialect), None
        return statement.sql(self.dialect), statement.params

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def execute(self, statement: StatementLike) -> int:
        """Run a write and return the affected-row count."""
        sql, params = self.render(statement)
        cursor = self.helpers.safe_execute(self.raw, sql, params)
        try:
            self.affected_rows = cursor.rowcount
            self._last_insert_id = getattr(cursor, "lastrowid", None)
        finally:
            cursor.close()

        if self.autocommit:
            self.commit()

        logger.debug("%d row(s) affected", self.affected_rows)
        return self.affected_rows

    def query(self, statement: StatementLike) -> RowCursor:
        """Run a SELECT, PRAGMA or SHOW and return a lazy row cursor."""
        sql, params = self.render(statement)
        return RowCursor(self.helpers.safe_execute(self.raw, sql, params), self.helpers)

    def last_inserted_identity(self) -> Any:
        """Driver-reported identity of the last insert, or None."""
        return self._last_insert_id

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def commit(self) -> None:
        try:
            self.raw.commit()
        except Exception as exc:
            raise DatabaseError(f"Commit failed: {exc}") from exc

    def rollback(self) -> None:
        try:
            self.raw.rollback()
        except Exception:
            # Nothing to undo when the driver has no open transaction
            logger.debug("Rollback failed", exc_info=True)

    def close(self) -> None:
        try:
            self.raw.close()
        except Exception:
            logger.debug("Close failed", exc_info=True)


# ----------------------------------------------------------------------
# Factory
# ----------------------------------------------------------------------

class ConnectionFactory:
    """
    Opens DBConnections for one backend.

    Each get() opens a new raw connection; there is no pooling. Use the
    context manager to have it closed (and rolled back on error):

        with factory.connection() as conn:
            NewRecord(conn, "contacts").insert()
    """

    def __init__(self, backend: Any, *, bind_parameters: bool = True):
        self.backend = backend
        self.bind_parameters = bind_parameters

    @property
    def dialect(self) -> Dialect:
        return Dialect.parse(self.backend.dialect)

    def get(self) -> DBConnection:
        return DBConnection(
            self.backend.connect(),
            self.backend.dialect,
            self.backend.helpers,
            bind_parameters=self.bind_parameters,
        )

    def connection(self) -> "_ConnectionContext":
        return _ConnectionContext(self)


class _ConnectionContext:

    def __init__(self, factory: ConnectionFactory):
        self.factory = factory
        self.conn: Optional[DBConnection] = None

    def __enter__(self) -> DBConnection:
        self.conn = self.factory.get()
        return self.conn

    def __exit__(self, exc_type, exc, tb):
        if self.conn is None:
            return False
        try:
            if exc_type is not None:
                self.conn.rollback()
        finally:
            self.conn.close()
            self.conn = None
        return False


__all__ = [
    "DBConnection",
    "ConnectionFactory",
]
