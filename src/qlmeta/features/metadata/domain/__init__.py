"""Domain rules for the metadata feature."""

from .custom_fields import CustomValue, FieldType, decode_value, encode_value, field_type_of
from .identity import MAX_CHAIN_DEPTH, id_chain, parent_of
from .lookup import Lookup, LookupState

__all__ = [
    "CustomValue",
    "FieldType",
    "Lookup",
    "LookupState",
    "MAX_CHAIN_DEPTH",
    "decode_value",
    "encode_value",
    "field_type_of",
    "id_chain",
    "parent_of",
]
