"""Filesystem locations used by qlmeta.

Lookup order for every overridable location is explicit argument, then the
environment variable, then a default anchored at the project root:

- Logs: ``<project_root>/logs/qlmeta.log``; ``QL_METADATA_LOG_DIR`` moves the directory.
- Local database: none by default; ``QL_METADATA_SQLITE_PATH`` selects a SQLite file.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Final


ENV_LOG_DIR: Final[str] = "QL_METADATA_LOG_DIR"
LOG_FILE_NAME: Final[str] = "qlmeta.log"
_ROOT_MARKERS: Final[tuple[str, ...]] = ("pyproject.toml", ".git")


def env_path(env: Mapping[str, str] | None, env_var: str) -> Path | None:
    """Return the user-expanded path stored in ``env_var``, or None when unset or blank."""

    mapping = env if env is not None else os.environ
    raw = (mapping.get(env_var) or "").strip()
    return Path(raw).expanduser() if raw else None


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a location honoring explicit and environment overrides.

    Args:
        explicit_path: Caller-supplied location; wins when given.
        env: Environment mapping; ``os.environ`` when None.
        env_var: Variable consulted when no explicit path is given.
        default_factory: Builds the fallback location lazily.

    Returns:
        Path: Absolute, resolved location.
    """
    if explicit_path is not None:
        chosen = Path(explicit_path).expanduser()
    else:
        chosen = (env_path(env, env_var) if env_var else None) or default_factory()
    return chosen.expanduser().resolve()


def _detect_repo_root(start: Path | None = None) -> Path:
    """Return the nearest ancestor holding a project marker, else the working directory."""

    origin = (start or Path(__file__).resolve()).parent
    return next(
        (
            candidate
            for candidate in (origin, *origin.parents)
            if any((candidate / marker).exists() for marker in _ROOT_MARKERS)
        ),
        Path.cwd(),
    )


def default_log_dir(env: Mapping[str, str] | None = None) -> Path:
    """Directory that receives the rotating log files."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=ENV_LOG_DIR,
        default_factory=lambda: _detect_repo_root() / "logs",
    )


def default_log_file(env: Mapping[str, str] | None = None) -> Path:
    return default_log_dir(env) / LOG_FILE_NAME


__all__ = [
    "ENV_LOG_DIR",
    "LOG_FILE_NAME",
    "default_log_dir",
    "default_log_file",
    "env_path",
    "resolve_overridable_path",
]
