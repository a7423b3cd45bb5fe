# Where: qlmeta.shared.errors
# What: Exception taxonomy shared by the store, its ports and the backend adapters.
# Why: Let callers tell an unreachable backend apart from a failed statement.

"""Error types raised or reported by the metadata store."""

from __future__ import annotations


class MetadataStoreError(Exception):
    """Base class for every metadata store failure."""


class StoreConnectionError(MetadataStoreError):
    """The storage backend is unreachable or was never connected."""


class QueryError(MetadataStoreError):
    """The storage backend reported a failure while executing a statement."""

    sql: str | None

    def __init__(self, message: str, *, sql: str | None = None) -> None:
        super().__init__(message)
        self.sql = sql


__all__ = ["MetadataStoreError", "QueryError", "StoreConnectionError"]
