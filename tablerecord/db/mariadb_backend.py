"""
MariaDB / MySQL backend for tablerecord (dialect family A).

Connections are opened through pymysql with:
    - DictCursor, so rows come back keyed by column name
    - CLIENT.FOUND_ROWS, so UPDATE reports matched rows rather than
      changed rows (an update that rewrites identical values still
      counts as one affected row)
    - autocommit off; DBConnection commits after each write
"""

from __future__ import annotations

from typing import Any, Optional

import pymysql
import pymysql.cursors
from pymysql.constants import CLIENT

from ..dialects import Dialect
from . import helpers
from .backend_base import DBBackend


class MariaDBBackend(DBBackend):
    """
    Minimal MariaDB backend.

    Parameters
    ----------
    host : str
        Hostname or IP address of the server.
    database : str
        Database (schema) to open.
    user, password : Optional[str]
        Credentials.
    port : int
        Defaults to 3306.
    charset : str
        Connection character set, "utf8mb4" by default.
    """

    def __init__(
        self,
        host: str,
        database: str,
        user: Optional[str] = None,
        password: Optional[str] = None,
        port: int = 3306,
        charset: str = "utf8mb4",
    ):
        self.host = host
        self.database = database
        self.user = user
        self.password = password
        self.port = port
        self.charset = charset

    @property
    def dialect(self) -> Dialect:
        return Dialect.MARIADB

    @property
    def helpers(self):
        return helpers

    def connect(self) -> Any:
        """
        Create a pymysql connection with dict-like row access.
        """
        return pymysql.connect(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password or "",
            database=self.database,
            charset=self.charset,
            cursorclass=pymysql.cursors.DictCursor,
            client_flag=CLIENT.FOUND_ROWS,
            autocommit=False,
        )


__all__ = ["MariaDBBackend"]
