"""Tests for custom field type codes and text serialization."""

from __future__ import annotations

import pytest

from qlmeta.features.metadata.domain.custom_fields import (
    FieldType,
    decode_value,
    encode_value,
    field_type_of,
)
from qlmeta.features.metadata.domain.lookup import Lookup, LookupState
from qlmeta.shared.errors import QueryError


def test_type_codes_match_stored_integers() -> None:
    """Stored codes are string=0, integer=1, double=2, boolean=3."""

    assert [int(member) for member in FieldType] == [0, 1, 2, 3]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("hardcore", FieldType.STRING),
        (5, FieldType.INTEGER),
        (2.5, FieldType.DOUBLE),
        (True, FieldType.BOOLEAN),
        (False, FieldType.BOOLEAN),
    ],
)
def test_field_type_of(value: str | int | float | bool, expected: FieldType) -> None:
    """Booleans are recognized before integers."""

    assert field_type_of(value) is expected


def test_field_type_of_rejects_unsupported_values() -> None:
    """Only scalar str/int/float/bool values can be stored."""

    with pytest.raises(TypeError):
        _ = field_type_of([1, 2])  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        _ = encode_value(None)  # type: ignore[arg-type]


def test_encode_value_text_forms() -> None:
    """Each type has a stable text form."""

    assert encode_value("x") == (FieldType.STRING, "x")
    assert encode_value(-12) == (FieldType.INTEGER, "-12")
    assert encode_value(0.1) == (FieldType.DOUBLE, "0.1")
    assert encode_value(True) == (FieldType.BOOLEAN, "true")
    assert encode_value(False) == (FieldType.BOOLEAN, "false")


def test_decode_value_restores_exact_types() -> None:
    """Decoding uses the stored type code, not the look of the text."""

    assert decode_value(0, "5") == "5"
    integer = decode_value(1, "5")
    assert integer == 5 and type(integer) is int
    assert decode_value(2, "0.1") == pytest.approx(0.1)
    assert decode_value(3, "true") is True
    assert decode_value(3, "F") is False


@pytest.mark.parametrize(("type_code", "text"), [(1, "five"), (2, "nan-ish"), (3, "maybe"), (9, "x")])
def test_decode_value_rejects_bad_input(type_code: int, text: str) -> None:
    """Unparseable text or unknown codes raise ValueError."""

    with pytest.raises(ValueError):
        _ = decode_value(type_code, text)


def test_lookup_states_and_defaults() -> None:
    """Lookups keep absence and failure apart but share the default mapping."""

    found: Lookup[str] = Lookup.found("loud")
    absent: Lookup[str] = Lookup.absent()
    failed: Lookup[str] = Lookup.failed(QueryError("boom"))

    assert found.state is LookupState.FOUND and found.value_or("") == "loud"
    assert absent.state is LookupState.ABSENT and absent.value_or("") == ""
    assert failed.is_failed and failed.value_or("") == ""
    assert isinstance(failed.error, QueryError)
