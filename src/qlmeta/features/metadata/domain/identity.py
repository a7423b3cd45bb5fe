"""
Summary: Resolve parents and inheritance id chains for songs, albums and artists.
Why: Every inherited lookup needs the same self-first, root-last id ordering.
"""

from __future__ import annotations

from typing import Final

from qlmeta.shared.meta_objects import Album, Artist, MetaObject, Song

MAX_CHAIN_DEPTH: Final[int] = 3


def parent_of(obj: MetaObject) -> MetaObject | None:
    """Return the immediate parent of ``obj`` in the song → album → artist hierarchy.

    A song without an album inherits straight from its artist.

    Args:
        obj: Song, album or artist.

    Returns:
        MetaObject | None: The parent, or None for an artist.
    """
    if isinstance(obj, Song):
        return obj.album if obj.album is not None else obj.artist
    if isinstance(obj, Album):
        return obj.artist
    if isinstance(obj, Artist):
        return None
    raise TypeError(f"Unsupported metadata object: {type(obj).__name__}")


def id_chain(obj: MetaObject, inherit: bool = True) -> list[str]:
    """Build the ordered id chain used for lookups on ``obj``.

    Args:
        obj: Object being queried.
        inherit: When False only ``obj`` itself is considered.

    Returns:
        list[str]: ``obj.id`` first, followed by each ancestor up to the root.
    """
    if not inherit:
        return [obj.id]

    chain: list[str] = []
    current: MetaObject | None = obj
    while current is not None and len(chain) < MAX_CHAIN_DEPTH:
        # Callers sometimes reuse an id across levels; keep the nearest.
        if current.id not in chain:
            chain.append(current.id)
        current = parent_of(current)
    return chain


__all__ = ["MAX_CHAIN_DEPTH", "id_chain", "parent_of"]
