"""Tests for configuration loading and backend wiring."""

from __future__ import annotations

import pytest

from tablerecord import open_database
from tablerecord.config import TableRecordConfig, load_config
from tablerecord.core import create_backend_from_config
from tablerecord.db import MariaDBBackend, SQLiteBackend
from tablerecord.dialects import Dialect
from tablerecord.errors import UnsupportedDialect

ENV_VARS = [
    "TABLERECORD_DB_BACKEND",
    "TABLERECORD_DB_URI",
    "TABLERECORD_DB_HOST",
    "TABLERECORD_DB_PORT",
    "TABLERECORD_DB_USER",
    "TABLERECORD_DB_PASSWORD",
    "TABLERECORD_DB_NAME",
    "TABLERECORD_BIND_PARAMETERS",
    "TABLERECORD_ENABLE_LOGGING",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    def test_defaults(self):
        cfg = load_config()
        assert cfg == TableRecordConfig()
        assert cfg.db_backend == "sqlite"
        assert cfg.db_port == 3306
        assert cfg.bind_parameters is True
        assert cfg.enable_logging is False

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("TABLERECORD_DB_BACKEND", "mariadb")
        monkeypatch.setenv("TABLERECORD_DB_HOST", "db.internal")
        monkeypatch.setenv("TABLERECORD_DB_PORT", "3307")
        monkeypatch.setenv("TABLERECORD_DB_NAME", "crm")
        monkeypatch.setenv("TABLERECORD_DB_USER", "app")
        monkeypatch.setenv("TABLERECORD_BIND_PARAMETERS", "0")
        monkeypatch.setenv("TABLERECORD_ENABLE_LOGGING", "yes")

        cfg = load_config()
        assert cfg.db_backend == "mariadb"
        assert cfg.db_host == "db.internal"
        assert cfg.db_port == 3307
        assert cfg.db_name == "crm"
        assert cfg.db_user == "app"
        assert cfg.db_password is None
        assert cfg.bind_parameters is False
        assert cfg.enable_logging is True

    def test_bad_port(self, monkeypatch):
        monkeypatch.setenv("TABLERECORD_DB_PORT", "three")
        with pytest.raises(ValueError, match="TABLERECORD_DB_PORT"):
            load_config()


class TestBackendWiring:
    def test_sqlite(self, tmp_path):
        backend = create_backend_from_config(
            TableRecordConfig(db_backend="sqlite3", db_uri=str(tmp_path / "x.db"))
        )
        assert isinstance(backend, SQLiteBackend)
        assert backend.dialect is Dialect.SQLITE

    def test_mariadb(self):
        backend = create_backend_from_config(
            TableRecordConfig(db_backend="MySQL", db_name="crm", db_port=3310)
        )
        assert isinstance(backend, MariaDBBackend)
        assert backend.port == 3310
        assert backend.dialect is Dialect.MARIADB

    def test_mariadb_needs_database_name(self):
        with pytest.raises(ValueError):
            create_backend_from_config(TableRecordConfig(db_backend="mariadb"))

    def test_unknown_backend(self):
        with pytest.raises(UnsupportedDialect):
            create_backend_from_config(TableRecordConfig(db_backend="postgres"))

    def test_open_database(self, tmp_path):
        factory = open_database(
            TableRecordConfig(db_uri=str(tmp_path / "nested" / "x.db"), bind_parameters=False)
        )
        assert factory.dialect is Dialect.SQLITE
        assert factory.bind_parameters is False

        with factory.connection() as conn:
            assert conn.bind_parameters is False
            conn.execute("CREATE TABLE t (id INTEGER PRIMARY KEY)")
        assert (tmp_path / "nested" / "x.db").exists()
