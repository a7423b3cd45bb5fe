"""Shared pytest fixtures for metadata store tests."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import pytest

from qlmeta.features.metadata.usecases.attribute_store import MetadataStore
from qlmeta.platform.db.sqlite_backend import SqliteBackend
from qlmeta.shared.meta_objects import Album, Artist, Song


@dataclass(frozen=True)
class Library:
    """A small song → album → artist hierarchy used across tests."""

    artist: Artist
    album: Album
    song_in_album: Song
    single: Song


@pytest.fixture
def sqlite_backend() -> Iterator[SqliteBackend]:
    """Provide a connected in-memory SQLite backend.

    Yields:
        SqliteBackend: Connected backend, closed after the test.
    """
    backend = SqliteBackend(":memory:")
    backend.connect()
    yield backend
    backend.close()


@pytest.fixture
def store(sqlite_backend: SqliteBackend) -> MetadataStore:
    """Provide a store with its schema bootstrapped on the in-memory backend."""

    return MetadataStore(sqlite_backend)


@pytest.fixture
def library() -> Library:
    """Provide Knocked Loose objects: an album track and a single without album."""

    artist = Artist(id="artist:knocked-loose", name="Knocked Loose")
    album = Album(id="album:a-tear-in-the-fabric-of-life", artist=artist, title="A Tear in the Fabric of Life")
    song_in_album = Song(id="song:forget-your-name", artist=artist, album=album, title="Forget Your Name")
    single = Song(id="song:god-knows", artist=artist, title="God Knows")
    return Library(artist=artist, album=album, song_in_album=song_in_album, single=single)


@pytest.fixture
def sqlite_file(tmp_path: Path) -> Path:
    """Path of a not-yet-created SQLite database file."""

    return tmp_path / "data" / "metadata.db"
