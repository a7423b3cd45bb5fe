"""Use cases and ports for the metadata feature."""

from .attribute_store import NO_RATING, MetadataStore
from .placeholders import QueryBuilder, in_list_placeholders, priority_placeholders
from .ports import PreparedStatement, QueryResult, Row, StorageBackend

__all__ = [
    "MetadataStore",
    "NO_RATING",
    "PreparedStatement",
    "QueryBuilder",
    "QueryResult",
    "Row",
    "StorageBackend",
    "in_list_placeholders",
    "priority_placeholders",
]
