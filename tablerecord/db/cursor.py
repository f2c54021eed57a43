"""
Row cursor over a query result.

Wraps the raw DB-API cursor returned by the connection and hands rows
back one at a time as ordered dicts, so large result sets are never
materialised. `end` flips to True once the result is exhausted.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional


class RowCursor:

    def __init__(self, raw_cursor: Any, helpers: Any):
        self.raw = raw_cursor
        self.helpers = helpers
        self.end = False

    def fetch_row(self) -> Optional[Dict[str, Any]]:
        """Return the next row, or None (and set `end`) when exhausted."""
        if self.end:
            return None

        row = self.helpers.safe_fetch_one(self.raw)
        if row is None:
            self.end = True
            self.close()
        return row

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        while True:
            row = self.fetch_row()
            if row is None:
                return
            yield row

    @property
    def columns(self) -> Optional[list]:
        """Column names from the cursor description, when the driver has one."""
        desc = getattr(self.raw, "description", None)
        if not desc:
            return None
        return [d[0] for d in desc]

    def close(self) -> None:
        try:
            self.raw.close()
        except Exception:
            # Some drivers refuse a second close; nothing to release then
            pass


__all__ = ["RowCursor"]
