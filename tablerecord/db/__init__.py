"""
tablerecord.db

Everything that talks to a driver:

    connection   DBConnection, ConnectionFactory
    cursor       RowCursor (lazy, dict rows)
    statement    Statement, StatementWriter, BoundValue
    helpers      safe_execute, safe_fetch_one, row_to_dict
    backends     SQLiteBackend (family B), MariaDBBackend (family A),
                 DBBackend / BackendLike / ensure_backend
"""

from .backend_base import BackendLike, DBBackend, ensure_backend
from .connection import ConnectionFactory, DBConnection
from .cursor import RowCursor
from .helpers import row_to_dict, safe_execute, safe_fetch_one
from .mariadb_backend import MariaDBBackend
from .sqlite_backend import SQLiteBackend
from .statement import BoundValue, Statement, StatementWriter

__all__ = [
    "DBConnection",
    "ConnectionFactory",
    "RowCursor",
    "BoundValue",
    "Statement",
    "StatementWriter",
    "SQLiteBackend",
    "MariaDBBackend",
    "DBBackend",
    "BackendLike",
    "ensure_backend",
    "safe_execute",
    "safe_fetch_one",
    "row_to_dict",
]
