"""Shared fixtures: SQLite files under tmp_path and a scripted MariaDB driver."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest

from tablerecord.db import ConnectionFactory, DBConnection, SQLiteBackend
from tablerecord.dialects import Dialect


CONTACTS_DDL = """
CREATE TABLE contacts (
    contact_id INTEGER PRIMARY KEY AUTOINCREMENT,
    first_name VARCHAR(40) NOT NULL,
    last_name  VARCHAR(40),
    age        INT,
    score      REAL
)
"""

NOTES_DDL = """
CREATE TABLE notes (
    slug  TEXT NOT NULL,
    body  TEXT,
    views INTEGER
)
"""

CODES_DDL = """
CREATE TABLE codes (
    code  TEXT PRIMARY KEY,
    label TEXT NOT NULL
)
"""


@pytest.fixture
def factory(tmp_path):
    """ConnectionFactory over a fresh SQLite file holding the test tables."""
    backend = SQLiteBackend(tmp_path / "records.db")
    raw = backend.connect()
    raw.executescript(CONTACTS_DDL + ";" + NOTES_DDL + ";" + CODES_DDL + ";")
    raw.commit()
    raw.close()
    return ConnectionFactory(backend)


@pytest.fixture
def conn(factory):
    """Open DBConnection, closed after the test."""
    c = factory.get()
    yield c
    c.close()


def raw_rows(conn: DBConnection, sql: str) -> List[Dict[str, Any]]:
    """Read rows straight from the driver, bypassing the mapper."""
    cur = conn.raw.execute(sql)
    rows = [dict(r) for r in cur.fetchall()]
    cur.close()
    return rows


# ----------------------------------------------------------------------
# Scripted DB-API driver for the MariaDB family
# ----------------------------------------------------------------------

class FakeCursor:
    def __init__(self, conn: "FakeMariaDB"):
        self.conn = conn
        self._rows: List[Dict[str, Any]] = []
        self.rowcount = -1
        self.lastrowid: Optional[int] = None
        self.description = None
        self.closed = False

    def execute(self, query: str, params: Optional[Tuple[Any, ...]] = None):
        self.conn.executed.append((query, params))
        result = self.conn.respond(query, params)
        if isinstance(result, Exception):
            raise result
        rows, rowcount, lastrowid = result
        self._rows = list(rows)
        self.rowcount = rowcount
        self.lastrowid = lastrowid
        if self._rows:
            self.description = [(k,) for k in self._rows[0]]

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None

    def close(self):
        self.closed = True


class FakeMariaDB:
    """
    Minimal pymysql stand-in: answers SHOW COLUMNS from a column list
    and every other statement from a queue of scripted results.
    """

    def __init__(self, columns: Sequence[Dict[str, str]]):
        self.columns = list(columns)
        self.results: List[Any] = []
        self.executed: List[Tuple[str, Any]] = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def respond(self, query: str, params):
        if query.startswith("SHOW COLUMNS"):
            return self.columns, len(self.columns), None
        if self.results:
            return self.results.pop(0)
        return [], 1, None

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


PEOPLE_COLUMNS = [
    {"Field": "id", "Type": "int(11) unsigned", "Null": "NO", "Key": "PRI", "Default": None, "Extra": "auto_increment"},
    {"Field": "name", "Type": "varchar(64)", "Null": "NO", "Key": "", "Default": None, "Extra": ""},
    {"Field": "balance", "Type": "decimal(10,2)", "Null": "YES", "Key": "", "Default": None, "Extra": ""},
    {"Field": "home", "Type": "point", "Null": "YES", "Key": "", "Default": None, "Extra": ""},
]


@pytest.fixture
def mariadb():
    """(raw fake driver, DBConnection) pair for the MariaDB family."""
    raw = FakeMariaDB(PEOPLE_COLUMNS)
    return raw, DBConnection(raw, Dialect.MARIADB)
