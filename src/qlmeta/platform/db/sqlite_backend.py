"""SQLite storage backend for local libraries and tests."""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import ClassVar, final

from qlmeta.platform.db.sql_backend import SqlBackend


@final
class SqliteBackend(SqlBackend):
    """Storage backend over a single ``sqlite3`` connection."""

    placeholder: ClassVar[str] = "?"
    driver_errors: ClassVar[tuple[type[Exception], ...]] = (sqlite3.Error,)

    db_path: str | Path

    def __init__(self, db_path: Path | str = ":memory:") -> None:
        """Initialize the backend.

        Args:
            db_path: Path to the database file, or ":memory:" for an in-memory database.
        """
        super().__init__()
        if db_path == ":memory:":
            self.db_path = ":memory:"
        else:
            self.db_path = Path(db_path) if isinstance(db_path, str) else db_path

    def describe(self) -> str:
        return f"sqlite:{self.db_path}"

    def _open_connection(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise sqlite3.OperationalError(f"unable to open database file: {e}") from e

        conn = sqlite3.connect(
            self.db_path,
            timeout=30.0,  # Wait up to 30 seconds for locks
            check_same_thread=False,  # Shared by one store across threads
        )
        _ = conn.execute("PRAGMA busy_timeout = 30000")
        if self.db_path != ":memory:":
            _ = conn.execute("PRAGMA journal_mode = WAL")
        return conn

    @contextmanager
    def _transaction(self, conn: sqlite3.Connection) -> Iterator[sqlite3.Cursor]:
        cursor = conn.cursor()
        try:
            yield cursor
            conn.commit()
        except BaseException:
            conn.rollback()
            raise
        finally:
            cursor.close()


__all__ = ["SqliteBackend"]
