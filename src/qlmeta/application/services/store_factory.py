"""src/qlmeta/application/services/store_factory.py
What: Build a connected MetadataStore from environment-driven settings.
Why: Keep backend selection and connection-failure absorption out of callers.
"""

from __future__ import annotations

from collections.abc import Mapping

from qlmeta.config.database import DatabaseSettings
from qlmeta.features.metadata.usecases.attribute_store import MetadataStore
from qlmeta.platform.db.postgres_backend import PostgresBackend
from qlmeta.platform.db.sql_backend import SqlBackend
from qlmeta.platform.db.sqlite_backend import SqliteBackend
from qlmeta.platform.logging import logger
from qlmeta.shared.errors import StoreConnectionError


def create_backend(settings: DatabaseSettings) -> SqlBackend:
    """Return the backend matching ``settings`` without connecting it."""

    if settings.sqlite_path is not None:
        return SqliteBackend(settings.sqlite_path)
    return PostgresBackend(settings)


def open_store(
    settings: DatabaseSettings | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> MetadataStore:
    """Connect to the configured database and return a store.

    A connection failure is logged and absorbed: the returned store reports
    ``is_connected() == False``, reads return empty values and writes fail.

    Args:
        settings: Explicit settings; read from ``env`` when omitted.
        env: Optional environment mapping passed to ``DatabaseSettings.from_env``.
    """
    resolved = settings or DatabaseSettings.from_env(env)
    backend = create_backend(resolved)
    try:
        backend.connect()
    except StoreConnectionError as e:
        logger.error("Metadata store is unavailable: %s", e)
    return MetadataStore(backend)


__all__ = ["create_backend", "open_store"]
