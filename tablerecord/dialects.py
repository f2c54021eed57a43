"""
Dialect tags shared by the connection, schema and record layers.

Two SQL families are supported:

    Dialect.MARIADB  (family A) – MariaDB / MySQL, driven through pymysql
    Dialect.SQLITE   (family B) – SQLite, driven through the stdlib sqlite3

The tag is resolved once, when a connection is wrapped, and every other
component branches on the enum rather than on free-form strings.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from .errors import UnsupportedDialect


class Dialect(str, Enum):
    MARIADB = "mariadb"
    SQLITE = "sqlite"

    @property
    def placeholder(self) -> str:
        """Bind-parameter marker understood by the family's driver."""
        return "%s" if self is Dialect.MARIADB else "?"

    @classmethod
    def parse(cls, tag: Union[str, "Dialect"]) -> "Dialect":
        """
        Resolve a backend name to a Dialect.

        Accepts the enum itself, or the names used in configuration
        ("mariadb", "mysql", "sqlite", "sqlite3"). Anything else is a
        configuration error.
        """
        if isinstance(tag, Dialect):
            return tag

        name = (tag or "").strip().lower()
        if name in ("mariadb", "mysql"):
            return cls.MARIADB
        if name in ("sqlite", "sqlite3"):
            return cls.SQLITE

        raise UnsupportedDialect(f"Database type not recognised: {tag!r}")


class Primitive(str, Enum):
    """Two-valued simplification of a column type, used to pick escaping."""

    NUMERIC = "NUM"
    TEXT = "STR"


def quote_identifier(name: str, dialect: Dialect) -> str:
    """
    Quote a table or column name for the given dialect.

    Dotted names ("schema.table") are quoted part by part. Embedded quote
    characters are doubled.
    """
    quote = "`" if dialect is Dialect.MARIADB else '"'
    parts = name.split(".")
    return ".".join(f"{quote}{p.replace(quote, quote * 2)}{quote}" for p in parts)


__all__ = [
    "Dialect",
    "Primitive",
    "quote_identifier",
]
