"""
Global configuration settings for tablerecord.

This module centralizes configuration for:

    - database backend selection (sqlite / mariadb)
    - connection parameters
    - statement rendering (bound parameters or escaped literals)
    - feature flags (logging)

It provides:
    TableRecordConfig  – structured config object
    load_config()      – load from environment variables or defaults
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional


@dataclass
class TableRecordConfig:
    """
    Canonical configuration for tablerecord.

    Attributes
    ----------
    db_backend:
        Name of the backend: "sqlite" or "mariadb" ("mysql" is accepted
        as an alias).

    db_uri:
        SQLite only: path to the .db file (e.g. "./records.db").

    db_host, db_port, db_user, db_password, db_name:
        MariaDB only: server address, credentials and database name.

    bind_parameters:
        Send values through driver parameter binding. When False,
        statements are rendered as literal SQL through the value escaper,
        for drivers without bind support.

    enable_logging:
        Whether to enable internal logging at INFO level.
    """

    db_backend: str = "sqlite"
    db_uri: str = "tablerecord.db"

    db_host: str = "localhost"
    db_port: int = 3306
    db_user: Optional[str] = None
    db_password: Optional[str] = None
    db_name: Optional[str] = None

    bind_parameters: bool = True
    enable_logging: bool = False


def load_config() -> TableRecordConfig:
    """
    Load TableRecordConfig from environment variables, falling back to defaults.

    Recognized variables:
        TABLERECORD_DB_BACKEND          (sqlite|mariadb)
        TABLERECORD_DB_URI              (SQLite path)
        TABLERECORD_DB_HOST             (MariaDB host)
        TABLERECORD_DB_PORT             (MariaDB port, default 3306)
        TABLERECORD_DB_USER
        TABLERECORD_DB_PASSWORD
        TABLERECORD_DB_NAME
        TABLERECORD_BIND_PARAMETERS     ("true" / "false" / "1" / "0")
        TABLERECORD_ENABLE_LOGGING      ("true" / "false" / "1" / "0")

    Returns
    -------
    TableRecordConfig
    """

    def _env_flag(name: str, default: bool) -> bool:
        val = os.getenv(name)
        if val is None:
            return default
        return val.strip().lower() in ("1", "true", "yes", "on")

    def _env_int(name: str, default: int) -> int:
        val = os.getenv(name)
        if val is None or not val.strip():
            return default
        try:
            return int(val)
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {val!r}") from None

    return TableRecordConfig(
        db_backend=os.getenv("TABLERECORD_DB_BACKEND", "sqlite"),
        db_uri=os.getenv("TABLERECORD_DB_URI", "tablerecord.db"),

        db_host=os.getenv("TABLERECORD_DB_HOST", "localhost"),
        db_port=_env_int("TABLERECORD_DB_PORT", 3306),
        db_user=os.getenv("TABLERECORD_DB_USER"),
        db_password=os.getenv("TABLERECORD_DB_PASSWORD"),
        db_name=os.getenv("TABLERECORD_DB_NAME"),

        bind_parameters=_env_flag(
            "TABLERECORD_BIND_PARAMETERS",
            default=True
        ),
        enable_logging=_env_flag(
            "TABLERECORD_ENABLE_LOGGING",
            default=False
        ),
    )
