"""Where: src/qlmeta/config/database.py
What: Connection settings for the metadata database sourced from the environment.
Why: Keep environment parsing out of the store and the backend adapters.
Assumptions: - Blank variables mean "use the default", mirroring unset ones.
Trade-offs: - Invalid ports fall back to the default instead of failing startup.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from qlmeta.config.paths import env_path
from qlmeta.platform.logging import logger

ENV_HOST: Final[str] = "QL_METADATA_DATABASE_HOST"
ENV_PORT: Final[str] = "QL_METADATA_DATABASE_PORT"
ENV_DATABASE: Final[str] = "QL_METADATA_DATABASE"
ENV_USER: Final[str] = "QL_METADATA_USER"
ENV_PASSWORD: Final[str] = "QL_METADATA_PASS"
ENV_SQLITE_PATH: Final[str] = "QL_METADATA_SQLITE_PATH"

DEFAULT_HOST: Final[str] = "localhost"
DEFAULT_PORT: Final[int] = 5432
DEFAULT_DATABASE: Final[str] = "metadata"
DEFAULT_USER: Final[str] = "admin"
DEFAULT_PASSWORD: Final[str] = "pass"

_MAX_PORT: Final[int] = 65535


def _env_value(mapping: Mapping[str, str], key: str, default: str) -> str:
    value = (mapping.get(key) or "").strip()
    return value or default


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        logger.warning("Invalid %s value %r, using %d", ENV_PORT, raw, DEFAULT_PORT)
        return DEFAULT_PORT
    if not 0 < port <= _MAX_PORT:
        logger.warning("Out of range %s value %d, using %d", ENV_PORT, port, DEFAULT_PORT)
        return DEFAULT_PORT
    return port


@dataclass(slots=True, frozen=True)
class DatabaseSettings:
    """Where and how to reach the metadata database."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    database: str = DEFAULT_DATABASE
    user: str = DEFAULT_USER
    password: str = DEFAULT_PASSWORD
    # When set, a local SQLite file is used instead of PostgreSQL.
    sqlite_path: Path | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "DatabaseSettings":
        """Build settings from ``QL_METADATA_*`` variables.

        Args:
            env: Optional environment mapping; defaults to ``os.environ``.

        Returns:
            DatabaseSettings: Settings with defaults applied to missing values.
        """
        mapping = env if env is not None else os.environ

        port_raw = (mapping.get(ENV_PORT) or "").strip()

        return cls(
            host=_env_value(mapping, ENV_HOST, DEFAULT_HOST),
            port=_parse_port(port_raw) if port_raw else DEFAULT_PORT,
            database=_env_value(mapping, ENV_DATABASE, DEFAULT_DATABASE),
            user=_env_value(mapping, ENV_USER, DEFAULT_USER),
            password=_env_value(mapping, ENV_PASSWORD, DEFAULT_PASSWORD),
            sqlite_path=env_path(mapping, ENV_SQLITE_PATH),
        )

    def describe(self) -> str:
        """Return a log-safe description without the password."""

        if self.sqlite_path is not None:
            return f"sqlite:{self.sqlite_path}"
        return f"postgresql://{self.user}@{self.host}:{self.port}/{self.database}"


__all__ = [
    "DEFAULT_DATABASE",
    "DEFAULT_HOST",
    "DEFAULT_PASSWORD",
    "DEFAULT_PORT",
    "DEFAULT_USER",
    "DatabaseSettings",
    "ENV_DATABASE",
    "ENV_HOST",
    "ENV_PASSWORD",
    "ENV_PORT",
    "ENV_SQLITE_PATH",
    "ENV_USER",
]
