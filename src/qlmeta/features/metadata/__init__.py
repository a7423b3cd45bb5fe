"""Public surface for the metadata feature."""

from .domain import CustomValue, FieldType, Lookup, LookupState, id_chain, parent_of
from .usecases import NO_RATING, MetadataStore, QueryResult, StorageBackend

__all__ = [
    "CustomValue",
    "FieldType",
    "Lookup",
    "LookupState",
    "MetadataStore",
    "NO_RATING",
    "QueryResult",
    "StorageBackend",
    "id_chain",
    "parent_of",
]
