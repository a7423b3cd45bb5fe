"""Idempotent creation of the metadata tables."""

from __future__ import annotations

from typing import Final

from qlmeta.features.metadata.usecases.ports import StorageBackend
from qlmeta.platform.logging import logger

# Column types are chosen to mean the same thing in SQLite and PostgreSQL.
SCHEMA_STATEMENTS: Final[tuple[str, ...]] = (
    """
    CREATE TABLE IF NOT EXISTS tags (
        id TEXT NOT NULL,
        tag TEXT NOT NULL,
        PRIMARY KEY (id, tag)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS descriptions (
        id TEXT PRIMARY KEY,
        description TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS rates (
        id TEXT PRIMARY KEY,
        rate DOUBLE PRECISION NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS custom_fields (
        id TEXT NOT NULL,
        field_name TEXT NOT NULL,
        type INTEGER NOT NULL,
        value TEXT NOT NULL,
        PRIMARY KEY (id, field_name)
    )
    """,
)

TABLE_NAMES: Final[tuple[str, ...]] = ("tags", "descriptions", "rates", "custom_fields")


def bootstrap_schema(backend: StorageBackend) -> bool:
    """Create the four attribute tables when they do not exist yet.

    Args:
        backend: Storage backend to run the DDL on.

    Returns:
        bool: True when every statement succeeded, False otherwise.
    """
    if not backend.is_connected():
        logger.warning("Skipping schema initialization: database connection is not established")
        return False

    for statement in SCHEMA_STATEMENTS:
        result = backend.execute(statement)
        if not result.is_success():
            logger.error("Failed to initialize schema: %s", result.error)
            return False

    logger.debug("Metadata schema is ready")
    return True


__all__ = ["SCHEMA_STATEMENTS", "TABLE_NAMES", "bootstrap_schema"]
