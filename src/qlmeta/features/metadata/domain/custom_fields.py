"""
Summary: Encode and decode typed custom field values to their stored text form.
Why: The type code persisted next to the text lets reads rebuild the exact Python type.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final

CustomValue = str | int | float | bool

_TRUE_LITERALS: Final[frozenset[str]] = frozenset({"true", "t", "1", "yes"})
_FALSE_LITERALS: Final[frozenset[str]] = frozenset({"false", "f", "0", "no"})


class FieldType(IntEnum):
    """Type codes stored in ``custom_fields.type``."""

    STRING = 0
    INTEGER = 1
    DOUBLE = 2
    BOOLEAN = 3


def field_type_of(value: CustomValue) -> FieldType:
    """Return the type code for ``value``.

    Raises:
        TypeError: If the value is not a str, int, float or bool.
    """
    # bool is a subclass of int and must be checked first.
    if isinstance(value, bool):
        return FieldType.BOOLEAN
    if isinstance(value, int):
        return FieldType.INTEGER
    if isinstance(value, float):
        return FieldType.DOUBLE
    if isinstance(value, str):
        return FieldType.STRING
    raise TypeError(f"Unsupported custom field value type: {type(value).__name__}")


def encode_value(value: CustomValue) -> tuple[FieldType, str]:
    """Serialize ``value`` into its type code and text representation."""

    field_type = field_type_of(value)
    if field_type is FieldType.BOOLEAN:
        return field_type, "true" if value else "false"
    if field_type is FieldType.DOUBLE:
        return field_type, repr(float(value))
    return field_type, str(value)


def decode_value(type_code: int, text: str) -> CustomValue:
    """Rebuild a typed value from its stored type code and text.

    Args:
        type_code: Value of ``custom_fields.type``.
        text: Value of ``custom_fields.value``.

    Returns:
        CustomValue: The reconstructed value.

    Raises:
        ValueError: If the type code is unknown or the text does not parse.
    """
    field_type = FieldType(int(type_code))
    if field_type is FieldType.STRING:
        return text
    if field_type is FieldType.INTEGER:
        return int(text)
    if field_type is FieldType.DOUBLE:
        return float(text)

    normalized = text.strip().lower()
    if normalized in _TRUE_LITERALS:
        return True
    if normalized in _FALSE_LITERALS:
        return False
    raise ValueError(f"Invalid boolean literal: {text!r}")


__all__ = ["CustomValue", "FieldType", "decode_value", "encode_value", "field_type_of"]
