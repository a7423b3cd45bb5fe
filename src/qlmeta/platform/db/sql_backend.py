"""Shared DB-API plumbing for the SQLite and PostgreSQL storage backends."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import AbstractContextManager
from typing import Any, ClassVar

from qlmeta.features.metadata.usecases.ports import PreparedStatement, QueryResult, Row
from qlmeta.platform.logging import logger
from qlmeta.shared.errors import QueryError, StoreConnectionError


class SqlBackend(ABC):
    """Execute prepared statements over a single DB-API connection.

    Subclasses open the driver connection and provide the transaction scope;
    everything else, including error normalization, lives here.
    """

    placeholder: ClassVar[str] = "?"
    driver_errors: ClassVar[tuple[type[Exception], ...]] = ()

    conn: Any | None
    _lock: threading.RLock

    def __init__(self) -> None:
        self.conn = None
        self._lock = threading.RLock()

    @abstractmethod
    def _open_connection(self) -> Any:
        """Open and return a driver connection."""

    @abstractmethod
    def _transaction(self, conn: Any) -> AbstractContextManager[Any]:
        """Return a context manager yielding a cursor inside one transaction."""

    @abstractmethod
    def describe(self) -> str:
        """Return a log-safe description of the target database."""

    def _is_open(self, conn: Any) -> bool:
        return True

    def connect(self) -> None:
        """Connect to the database.

        Raises:
            StoreConnectionError: If the driver cannot open a connection.
        """
        with self._lock:
            if self.is_connected():
                return
            try:
                self.conn = self._open_connection()
            except self.driver_errors as e:
                logger.error("Failed to connect to %s: %s", self.describe(), e)
                raise StoreConnectionError(f"Unable to connect to {self.describe()}") from e
        logger.debug("Connected to %s", self.describe())

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self.conn is None:
                return
            try:
                self.conn.close()
            except self.driver_errors as e:
                logger.error("Failed to close database connection: %s", e)
            finally:
                self.conn = None

    def is_connected(self) -> bool:
        return self.conn is not None and self._is_open(self.conn)

    def __enter__(self) -> "SqlBackend":
        self.connect()
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: Any | None) -> None:
        self.close()

    def prepare_statement(self, sql: str, params: Sequence[Any] = ()) -> PreparedStatement:
        """Pair ``sql`` with the values bound to its placeholders.

        Raises:
            ValueError: If the number of values does not match the placeholders.
        """
        expected = sql.count(self.placeholder)
        if expected != len(params):
            raise ValueError(f"Statement expects {expected} parameters, got {len(params)}")
        return PreparedStatement(sql=sql, params=tuple(params))

    def execute(self, sql: str) -> QueryResult[int]:
        """Run a non-parameterized statement such as DDL."""
        return self.update_many([PreparedStatement(sql=sql)])

    def fetch_all(self, stmt: PreparedStatement) -> QueryResult[list[Row]]:
        """Return every row produced by ``stmt``."""
        return self._read(stmt, many=True)

    def fetch_one(self, stmt: PreparedStatement) -> QueryResult[Row | None]:
        """Return the first row produced by ``stmt``, or None."""
        return self._read(stmt, many=False)

    def update(self, stmt: PreparedStatement) -> QueryResult[int]:
        """Run a write statement in its own transaction."""
        return self.update_many([stmt])

    def update_many(self, stmts: Sequence[PreparedStatement]) -> QueryResult[int]:
        """Run write statements in one transaction.

        Returns:
            QueryResult[int]: Total affected rows, or the error that rolled the batch back.
        """
        if not stmts:
            return QueryResult.ok(0)
        conn = self.conn
        if conn is None or not self._is_open(conn):
            return QueryResult.fail(StoreConnectionError("Database connection is not established"))

        current: PreparedStatement | None = None
        try:
            affected = 0
            with self._lock, self._transaction(conn) as cursor:
                for current in stmts:
                    _ = cursor.execute(current.sql, current.params)
                    affected += max(cursor.rowcount, 0)
            return QueryResult.ok(affected)
        except self.driver_errors as e:
            logger.error("Failed to execute write statement: %s", e)
            return QueryResult.fail(self._query_error(e, current))

    def _read(self, stmt: PreparedStatement, *, many: bool) -> QueryResult[Any]:
        conn = self.conn
        if conn is None or not self._is_open(conn):
            return QueryResult.fail(StoreConnectionError("Database connection is not established"))
        try:
            with self._lock:
                cursor = conn.cursor()
                try:
                    _ = cursor.execute(stmt.sql, stmt.params)
                    if many:
                        return QueryResult.ok([tuple(row) for row in cursor.fetchall()])
                    row = cursor.fetchone()
                    return QueryResult.ok(tuple(row) if row is not None else None)
                finally:
                    cursor.close()
        except self.driver_errors as e:
            logger.error("Failed to execute query: %s", e)
            return QueryResult.fail(self._query_error(e, stmt))

    @staticmethod
    def _query_error(cause: Exception, stmt: PreparedStatement | None) -> QueryError:
        error = QueryError(str(cause), sql=stmt.sql if stmt is not None else None)
        error.__cause__ = cause
        return error


__all__ = ["SqlBackend"]
