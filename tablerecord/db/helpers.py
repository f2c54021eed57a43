"""
Driver-facing helpers shared by both backends.

DBConnection never touches a raw cursor directly; it goes through the
three functions below, which is also where driver exceptions turn into
DatabaseError and where every statement is logged at DEBUG.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

from ..errors import DatabaseError

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Execution
# ----------------------------------------------------------------------

def safe_execute(conn: Any, query: str, params: Optional[Sequence[Any]] = None):
    """
    Run one statement on a raw connection and hand back its cursor.

    Parameters
    ----------
    conn:
        sqlite3 or pymysql connection.
    query:
        SQL text. Carries placeholders only when `params` is given.
    params:
        Values to bind. None sends the text untouched, which also keeps
        pymysql from %-formatting literal SQL.

    Raises
    ------
    DatabaseError
        Whatever the driver raised, with the query attached.
    """
    logger.debug("SQL: %s | params: %r", query, params)
    cursor = conn.cursor()
    try:
        if params is None:
            cursor.execute(query)
        else:
            cursor.execute(query, tuple(params))
    except Exception as exc:
        cursor.close()
        raise DatabaseError(f"{exc} | Query: {query!r} | Params: {params!r}", sql=query) from exc
    return cursor


def safe_fetch_one(cursor: Any) -> Optional[Dict[str, Any]]:
    """Next row as a dict; None once the cursor is exhausted."""
    try:
        row = cursor.fetchone()
    except Exception as exc:
        raise DatabaseError(f"Fetching a row failed: {exc}") from exc
    if row is None:
        return None
    return row_to_dict(row)


# ----------------------------------------------------------------------
# Rows
# ----------------------------------------------------------------------

def row_to_dict(row: Any) -> Dict[Any, Any]:
    """
    Plain dict from a sqlite3.Row or a pymysql DictCursor row, in column
    order. Bare tuples are keyed by position.
    """
    if isinstance(row, dict):
        return dict(row)
    if isinstance(row, (tuple, list)):
        return dict(enumerate(row))
    return {name: row[name] for name in row.keys()}


__all__ = [
    "safe_execute",
    "safe_fetch_one",
    "row_to_dict",
]
