"""PostgreSQL storage backend using psycopg 3."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import ClassVar, final

import psycopg

from qlmeta.config.database import DatabaseSettings
from qlmeta.platform.db.sql_backend import SqlBackend

CONNECT_TIMEOUT_SECONDS = 10


@final
class PostgresBackend(SqlBackend):
    """Storage backend over one autocommit psycopg connection.

    Single statements commit on their own; batches run inside
    ``conn.transaction()`` so they apply atomically.
    """

    placeholder: ClassVar[str] = "%s"
    driver_errors: ClassVar[tuple[type[Exception], ...]] = (psycopg.Error,)

    settings: DatabaseSettings

    def __init__(self, settings: DatabaseSettings | None = None) -> None:
        super().__init__()
        self.settings = settings or DatabaseSettings.from_env()

    def describe(self) -> str:
        return self.settings.describe()

    def _open_connection(self) -> psycopg.Connection:
        return psycopg.connect(
            host=self.settings.host,
            port=self.settings.port,
            dbname=self.settings.database,
            user=self.settings.user,
            password=self.settings.password,
            connect_timeout=CONNECT_TIMEOUT_SECONDS,
            autocommit=True,
        )

    def _is_open(self, conn: psycopg.Connection) -> bool:
        return not conn.closed

    @contextmanager
    def _transaction(self, conn: psycopg.Connection) -> Iterator[psycopg.Cursor]:
        with conn.transaction():
            with conn.cursor() as cursor:
                yield cursor


__all__ = ["PostgresBackend"]
