"""Ports for the metadata feature."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from qlmeta.shared.errors import MetadataStoreError

T = TypeVar("T")

Row = tuple[Any, ...]


@dataclass(slots=True, frozen=True)
class PreparedStatement:
    """SQL text with positional placeholders and the values bound to them."""

    sql: str
    params: tuple[Any, ...] = ()


@dataclass(slots=True, frozen=True)
class QueryResult(Generic[T]):
    """Outcome of a backend call: a value on success, an error otherwise."""

    value: T | None = None
    error: MetadataStoreError | None = None

    @classmethod
    def ok(cls, value: T) -> "QueryResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: MetadataStoreError) -> "QueryResult[T]":
        return cls(error=error)

    def is_success(self) -> bool:
        """Return True when the backend call completed without error."""

        return self.error is None

    def get_value(self) -> T:
        """Return the value, re-raising the stored error on failure."""

        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


class StorageBackend(Protocol):
    """Connection, statement execution and row materialization."""

    placeholder: str

    def connect(self) -> None:
        """Open the connection; raises ``StoreConnectionError`` when unreachable."""

        ...

    def close(self) -> None:
        """Release the connection."""

        ...

    def is_connected(self) -> bool:
        """Return True while a live connection is held."""

        ...

    def execute(self, sql: str) -> QueryResult[int]:
        """Run a non-parameterized statement such as DDL."""

        ...

    def prepare_statement(self, sql: str, params: Sequence[Any] = ()) -> PreparedStatement:
        """Pair ``sql`` with the values bound to its placeholders."""

        ...

    def fetch_all(self, stmt: PreparedStatement) -> QueryResult[list[Row]]:
        """Return every row produced by ``stmt``."""

        ...

    def fetch_one(self, stmt: PreparedStatement) -> QueryResult[Row | None]:
        """Return the first row produced by ``stmt``, or None."""

        ...

    def update(self, stmt: PreparedStatement) -> QueryResult[int]:
        """Run a write statement in its own transaction; returns affected rows."""

        ...

    def update_many(self, stmts: Sequence[PreparedStatement]) -> QueryResult[int]:
        """Run write statements in one transaction; returns total affected rows."""

        ...


__all__ = ["PreparedStatement", "QueryResult", "Row", "StorageBackend"]
