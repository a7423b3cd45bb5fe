# Where: qlmeta.shared.__init__
# What: Provide a concise import surface for shared dataclasses and errors.
# Why: Encourage consistent reuse of shared types across features.

"""Shared cross-cutting types exposed at the package level."""

from .errors import MetadataStoreError, QueryError, StoreConnectionError
from .meta_objects import Album, Artist, MetaObject, Song

__all__ = [
    "Album",
    "Artist",
    "MetaObject",
    "MetadataStoreError",
    "QueryError",
    "Song",
    "StoreConnectionError",
]
