"""Tests for configuration path resolution helpers."""

from pathlib import Path

import pytest

import qlmeta.config.paths as paths
from qlmeta.config.paths import default_log_dir, default_log_file, env_path, resolve_overridable_path


def test_default_log_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Default log locations should live under the repository logs/ folder."""

    def _fake_detect_repo_root(_start: Path | None = None) -> Path:
        return tmp_path

    monkeypatch.setattr(paths, "_detect_repo_root", _fake_detect_repo_root, raising=True)

    expected_dir = (tmp_path / "logs").resolve()
    assert default_log_dir(env={}) == expected_dir
    assert default_log_file(env={}) == expected_dir / "qlmeta.log"


def test_log_dir_environment_override(tmp_path: Path) -> None:
    """QL_METADATA_LOG_DIR wins over the repository default."""

    target = tmp_path / "custom-logs"

    assert default_log_dir(env={"QL_METADATA_LOG_DIR": str(target)}) == target.resolve()


def test_explicit_path_wins(tmp_path: Path) -> None:
    """An explicit path beats both the environment and the default."""

    resolved = resolve_overridable_path(
        explicit_path=tmp_path / "explicit",
        env={"VAR": str(tmp_path / "env")},
        env_var="VAR",
        default_factory=lambda: tmp_path / "default",
    )

    assert resolved == (tmp_path / "explicit").resolve()


def test_env_path_treats_blank_as_unset() -> None:
    """Whitespace-only values do not produce a path."""

    assert env_path({"VAR": "  "}, "VAR") is None
    assert env_path({}, "VAR") is None
    assert env_path({"VAR": "~/meta.db"}, "VAR") == Path("~/meta.db").expanduser()
