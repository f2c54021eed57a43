"""
SQLite backend (dialect family B), on the standard library driver.

Rows come back as sqlite3.Row so the helpers can key them by column
name. Transactions follow the driver's default: DML opens one
implicitly and DBConnection commits it.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Union

from ..dialects import Dialect
from . import helpers
from .backend_base import DBBackend

MEMORY = ":memory:"


class SQLiteBackend(DBBackend):
    """
    Parameters
    ----------
    db_path : str or Path
        Database file; missing parent directories are created on
        connect. ":memory:" gives a private in-memory database per
        connection.
    """

    def __init__(self, db_path: Union[str, Path]):
        self.path = str(db_path)

    @property
    def dialect(self) -> Dialect:
        return Dialect.SQLITE

    @property
    def helpers(self):
        return helpers

    def connect(self) -> sqlite3.Connection:
        if self.path != MEMORY:
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)

        raw = sqlite3.connect(self.path)
        raw.row_factory = sqlite3.Row
        return raw


__all__ = ["SQLiteBackend"]
