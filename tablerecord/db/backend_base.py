"""
Backend contract.

A backend knows how to open a raw DB-API connection for one dialect
family and which helper module normalises that driver's cursors and
rows. ConnectionFactory is the only consumer:

    raw  = backend.connect()
    conn = DBConnection(raw, backend.dialect, backend.helpers)

Two ways to satisfy the contract:
    DBBackend     subclass it (SQLiteBackend, MariaDBBackend do)
    BackendLike   or duck-type it; ensure_backend() checks at wiring time
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol, Union, runtime_checkable

from ..dialects import Dialect


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------

class DBBackend(ABC):
    """
    Base for the bundled backends. Constructor arguments are up to each
    subclass (a file path for SQLite, host and credentials for MariaDB).
    """

    @property
    @abstractmethod
    def dialect(self) -> Dialect:
        """Family this backend's connections speak."""

    @property
    @abstractmethod
    def helpers(self) -> Any:
        """
        Module exposing safe_execute / safe_fetch_one / row_to_dict.

        The bundled backends return tablerecord.db.helpers; a test double
        may hand in its own.
        """

    @abstractmethod
    def connect(self) -> Any:
        """Open a fresh raw connection. The caller owns and closes it."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} dialect={self.dialect.value}>"


# ---------------------------------------------------------------------------
# Duck-typed equivalent
# ---------------------------------------------------------------------------

@runtime_checkable
class BackendLike(Protocol):
    dialect: Union[Dialect, str]
    helpers: Any

    def connect(self) -> Any:
        ...


def ensure_backend(backend: Any) -> BackendLike:
    """
    Check that `backend` can be handed to ConnectionFactory.

    Raises
    ------
    TypeError
        connect, dialect or helpers is missing.
    UnsupportedDialect
        The dialect tag names neither family.
    """
    if not isinstance(backend, BackendLike):
        missing = [a for a in ("connect", "dialect", "helpers") if not hasattr(backend, a)]
        raise TypeError(f"{backend!r} cannot serve as a backend; missing {missing}")

    Dialect.parse(backend.dialect)
    return backend


__all__ = [
    "DBBackend",
    "BackendLike",
    "ensure_backend",
]
