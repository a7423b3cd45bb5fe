# Where: qlmeta.shared.meta_objects
# What: Song, Album and Artist value objects that attributes attach to.
# Why: Centralize the hierarchy shape so resolvers and the CLI agree on it.

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Artist:
    """An artist; the root of every inheritance chain."""

    id: str
    name: str | None = None


@dataclass(slots=True, frozen=True)
class Album:
    """An album released by an artist."""

    id: str
    artist: Artist
    title: str | None = None


@dataclass(slots=True, frozen=True)
class Song:
    """A song, optionally part of an album."""

    id: str
    artist: Artist
    album: Album | None = None
    title: str | None = None


MetaObject = Song | Album | Artist


__all__ = ["Album", "Artist", "MetaObject", "Song"]
