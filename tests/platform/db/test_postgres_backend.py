"""Tests for the psycopg-backed storage backend without a live server."""

from __future__ import annotations

from unittest.mock import MagicMock

import psycopg
import pytest
from pytest_mock import MockerFixture

from qlmeta.config.database import DatabaseSettings
from qlmeta.platform.db.postgres_backend import PostgresBackend
from qlmeta.shared.errors import QueryError, StoreConnectionError

SETTINGS = DatabaseSettings(host="db.internal", port=6543, database="meta", user="ql", password="secret")


@pytest.fixture
def fake_conn(mocker: MockerFixture) -> MagicMock:
    """Patch psycopg.connect to hand out a fake open connection."""

    conn: MagicMock = mocker.MagicMock()
    conn.closed = False
    _ = mocker.patch("qlmeta.platform.db.postgres_backend.psycopg.connect", return_value=conn)
    return conn


def test_connect_passes_settings_to_psycopg(fake_conn: MagicMock) -> None:
    """Settings map onto psycopg keyword arguments with autocommit on."""

    backend = PostgresBackend(SETTINGS)
    backend.connect()

    connect = psycopg.connect
    assert isinstance(connect, MagicMock)
    kwargs = connect.call_args.kwargs
    assert kwargs["host"] == "db.internal"
    assert kwargs["port"] == 6543
    assert kwargs["dbname"] == "meta"
    assert kwargs["user"] == "ql"
    assert kwargs["password"] == "secret"
    assert kwargs["autocommit"] is True
    assert backend.is_connected()


def test_connect_failure_raises_connection_error(mocker: MockerFixture) -> None:
    """Driver connection errors become StoreConnectionError."""

    _ = mocker.patch(
        "qlmeta.platform.db.postgres_backend.psycopg.connect",
        side_effect=psycopg.OperationalError("connection refused"),
    )
    backend = PostgresBackend(SETTINGS)

    with pytest.raises(StoreConnectionError):
        backend.connect()
    assert backend.is_connected() is False


def test_closed_connection_is_not_connected(fake_conn: MagicMock) -> None:
    """A server-side close is visible through is_connected()."""

    backend = PostgresBackend(SETTINGS)
    backend.connect()
    fake_conn.closed = True

    assert backend.is_connected() is False


def test_update_runs_inside_transaction(fake_conn: MagicMock) -> None:
    """Writes execute with %s placeholders inside conn.transaction()."""

    cursor = fake_conn.cursor.return_value.__enter__.return_value
    cursor.rowcount = 1
    backend = PostgresBackend(SETTINGS)
    backend.connect()

    stmt = backend.prepare_statement("INSERT INTO rates (id, rate) VALUES (%s, %s)", ["a", 1.0])
    result = backend.update(stmt)

    assert result.get_value() == 1
    fake_conn.transaction.assert_called_once()
    cursor.execute.assert_called_once_with("INSERT INTO rates (id, rate) VALUES (%s, %s)", ("a", 1.0))


def test_read_error_is_query_error(fake_conn: MagicMock) -> None:
    """psycopg errors during reads are wrapped in QueryError."""

    fake_conn.cursor.return_value.execute.side_effect = psycopg.OperationalError("relation \"tags\" does not exist")
    backend = PostgresBackend(SETTINGS)
    backend.connect()

    result = backend.fetch_all(backend.prepare_statement("SELECT tag FROM tags WHERE id IN (%s)", ["a"]))

    assert isinstance(result.error, QueryError)


def test_describe_hides_password() -> None:
    """Log descriptions never include the password."""

    description = PostgresBackend(SETTINGS).describe()

    assert description == "postgresql://ql@db.internal:6543/meta"
    assert "secret" not in description
