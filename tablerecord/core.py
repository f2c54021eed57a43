"""
Entry point for wiring tablerecord from configuration.

open_database() turns a TableRecordConfig into a ConnectionFactory for
the selected dialect family:

    factory = open_database()            # reads TABLERECORD_* env vars
    with factory.connection() as conn:
        rec = ReadUpdateRecord(conn, "contacts")
        rec.add_where("contact_id", 7)
        rec.read_one()

Opening and closing connections stays with the caller.
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import TableRecordConfig, load_config
from .db import ConnectionFactory, MariaDBBackend, SQLiteBackend, ensure_backend
from .dialects import Dialect

logger = logging.getLogger(__name__)


def create_backend_from_config(config: TableRecordConfig):
    """
    Instantiate the appropriate DB backend for a given configuration.

    Raises
    ------
    UnsupportedDialect
        db_backend names neither family.
    ValueError
        MariaDB selected without a database name.
    """
    dialect = Dialect.parse(config.db_backend)

    if dialect is Dialect.SQLITE:
        return SQLiteBackend(config.db_uri)

    if not config.db_name:
        raise ValueError("MariaDB backend needs a database name (TABLERECORD_DB_NAME)")
    return MariaDBBackend(
        host=config.db_host,
        database=config.db_name,
        user=config.db_user,
        password=config.db_password,
        port=config.db_port,
    )


def open_database(config: Optional[TableRecordConfig] = None) -> ConnectionFactory:
    """
    Build a ConnectionFactory from configuration (environment by default).
    """
    cfg = config or load_config()

    if cfg.enable_logging:
        logging.basicConfig(level=logging.INFO)
        logger.info("Initializing tablerecord with backend %r", cfg.db_backend)

    backend = ensure_backend(create_backend_from_config(cfg))
    return ConnectionFactory(backend, bind_parameters=cfg.bind_parameters)


__all__ = [
    "create_backend_from_config",
    "open_database",
]
