"""Tests for command line argument parsing."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from qlmeta.features.metadata.domain.custom_fields import FieldType
from qlmeta.ui.cli.args import ArgumentParser


@pytest.fixture(autouse=True)
def setup_logger_mock(mocker: MockerFixture) -> MagicMock:
    """Keep argument parsing from reconfiguring the real log files."""

    return mocker.patch("qlmeta.ui.cli.args.parser.setup_logger")


def test_tags_add_collects_target_and_values() -> None:
    """Tags and target ids are parsed from the action arguments."""

    args = ArgumentParser.process_args(
        ["tags", "add", "heavy", "live", "--artist", "ar", "--album", "al", "--song", "so"]
    )

    assert (args.kind, args.action) == ("tags", "add")
    assert args.values == ["heavy", "live"]
    assert (args.target.artist_id, args.target.album_id, args.target.song_id) == ("ar", "al", "so")
    assert args.inherit is True


def test_exact_disables_inheritance() -> None:
    """--exact maps to inherit=False."""

    args = ArgumentParser.process_args(["description", "get", "--artist", "ar", "--exact"])

    assert args.inherit is False
    assert args.values == []


def test_field_set_parses_type_and_name(tmp_path: Path) -> None:
    """Typed field values carry their declared type."""

    args = ArgumentParser.process_args(
        ["field", "set", "bpm", "180", "--type", "int", "--artist", "ar", "--sqlite", str(tmp_path / "m.db")]
    )

    assert args.field_name == "bpm"
    assert args.values == ["180"]
    assert args.field_type is FieldType.INTEGER
    assert args.sqlite_path == tmp_path / "m.db"


def test_field_set_rejects_value_not_matching_type() -> None:
    """A value that does not parse as its declared type is a usage error."""

    with pytest.raises(SystemExit) as exc_info:
        _ = ArgumentParser.process_args(["field", "set", "bpm", "fast", "--type", "int", "--artist", "ar"])

    assert exc_info.value.code == 2


def test_rating_set_rejects_non_numbers() -> None:
    """Ratings must be numeric."""

    with pytest.raises(SystemExit) as exc_info:
        _ = ArgumentParser.process_args(["rating", "set", "great", "--artist", "ar"])

    assert exc_info.value.code == 2


def test_artist_is_required() -> None:
    """Every chain needs its root artist."""

    with pytest.raises(SystemExit):
        _ = ArgumentParser.process_args(["tags", "list", "--song", "so"])


@pytest.mark.parametrize(
    ("flags", "expected_level"),
    [([], logging.WARNING), (["--verbose"], logging.DEBUG), (["--quiet"], logging.ERROR)],
)
def test_verbosity_sets_console_level(setup_logger_mock: MagicMock, flags: list[str], expected_level: int) -> None:
    """Verbosity flags choose the console log level."""

    _ = ArgumentParser.process_args(["rating", "get", "--artist", "ar", *flags])

    assert setup_logger_mock.call_args.kwargs["console_level"] == expected_level
