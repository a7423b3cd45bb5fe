"""qlmeta: tags, descriptions, ratings and custom fields for songs, albums and artists."""

from qlmeta.application.services.store_factory import open_store
from qlmeta.features.metadata import CustomValue, Lookup, LookupState, MetadataStore
from qlmeta.shared import Album, Artist, MetaObject, Song

__all__ = [
    "Album",
    "Artist",
    "CustomValue",
    "Lookup",
    "LookupState",
    "MetaObject",
    "MetadataStore",
    "Song",
    "open_store",
]
