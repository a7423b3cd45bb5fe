"""Test SQLite backend connection and statement handling."""

import sqlite3
import threading
import time
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from qlmeta.features.metadata.usecases.ports import PreparedStatement
from qlmeta.platform.db.sqlite_backend import SqliteBackend
from qlmeta.shared.errors import QueryError, StoreConnectionError


def test_connect_in_memory() -> None:
    """An in-memory backend connects and answers queries."""
    backend = SqliteBackend(":memory:")
    assert backend.is_connected() is False

    backend.connect()
    try:
        assert backend.is_connected()
        assert isinstance(backend.conn, sqlite3.Connection)
        result = backend.fetch_one(backend.prepare_statement("SELECT 1"))
        assert result.is_success()
        assert result.get_value() == (1,)
    finally:
        backend.close()

    assert backend.is_connected() is False


def test_connect_creates_parent_directory(sqlite_file: Path) -> None:
    """File databases get their parent directory created on connect."""
    with SqliteBackend(sqlite_file) as backend:
        assert backend.is_connected()
    assert sqlite_file.exists()


def test_connect_failure_raises_connection_error(tmp_path: Path) -> None:
    """A path that cannot be opened as a database raises StoreConnectionError."""
    with pytest.raises(StoreConnectionError):
        SqliteBackend(tmp_path).connect()


def test_prepare_statement_checks_parameter_count(sqlite_backend: SqliteBackend) -> None:
    """Every placeholder must be bound to exactly one value."""
    stmt = sqlite_backend.prepare_statement("SELECT ? + ?", [1, 2])
    assert stmt == PreparedStatement("SELECT ? + ?", (1, 2))

    with pytest.raises(ValueError):
        _ = sqlite_backend.prepare_statement("SELECT ?", [])


def test_update_many_is_one_transaction(sqlite_backend: SqliteBackend) -> None:
    """A failing statement rolls back the statements before it."""
    _ = sqlite_backend.execute("CREATE TABLE t (v INTEGER NOT NULL)")
    ok = sqlite_backend.update(sqlite_backend.prepare_statement("INSERT INTO t (v) VALUES (?)", [1]))
    assert ok.get_value() == 1

    result = sqlite_backend.update_many(
        [
            sqlite_backend.prepare_statement("INSERT INTO t (v) VALUES (?)", [2]),
            sqlite_backend.prepare_statement("INSERT INTO t (v) VALUES (?)", [None]),
        ]
    )

    assert not result.is_success()
    assert isinstance(result.error, QueryError)
    assert result.error.sql == "INSERT INTO t (v) VALUES (?)"
    rows = sqlite_backend.fetch_all(sqlite_backend.prepare_statement("SELECT v FROM t"))
    assert rows.get_value() == [(1,)]


def test_update_many_without_statements_is_noop(sqlite_backend: SqliteBackend) -> None:
    """An empty batch succeeds without touching the connection."""
    assert sqlite_backend.update_many([]).get_value() == 0


def test_fetch_one_without_rows_is_none(sqlite_backend: SqliteBackend) -> None:
    """Missing rows are a successful None, not an error."""
    _ = sqlite_backend.execute("CREATE TABLE t (v INTEGER)")
    result = sqlite_backend.fetch_one(sqlite_backend.prepare_statement("SELECT v FROM t"))
    assert result.is_success()
    assert result.get_value() is None


def test_invalid_sql_is_query_error(sqlite_backend: SqliteBackend) -> None:
    """Driver errors are wrapped, not raised."""
    result = sqlite_backend.fetch_all(sqlite_backend.prepare_statement("SELECT * FROM missing"))
    assert not result.is_success()
    assert isinstance(result.error, QueryError)
    assert isinstance(result.error.__cause__, sqlite3.OperationalError)


def test_statements_fail_when_not_connected() -> None:
    """Calls on a closed backend report a connection error."""
    backend = SqliteBackend(":memory:")
    result = backend.execute("SELECT 1")
    assert isinstance(result.error, StoreConnectionError)


def test_concurrent_connect_opens_a_single_connection(mocker: MockerFixture) -> None:
    """Racing connect calls share one connection."""
    backend = SqliteBackend(":memory:")
    open_connection = backend._open_connection
    opened: list[sqlite3.Connection] = []

    def _slow_open() -> sqlite3.Connection:
        time.sleep(0.05)
        conn = open_connection()
        opened.append(conn)
        return conn

    _ = mocker.patch.object(backend, "_open_connection", side_effect=_slow_open)
    threads = [threading.Thread(target=backend.connect) for _ in range(4)]
    try:
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(opened) == 1
        assert backend.is_connected()
    finally:
        backend.close()
