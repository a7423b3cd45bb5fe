"""Command line argument options."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, final

from qlmeta.features.metadata.domain.custom_fields import FieldType

AttributeKind = Literal["tags", "description", "rating", "field"]


@final
@dataclass(slots=True)
class TargetArgs:
    """Identifiers describing the object a command applies to."""

    artist_id: str
    album_id: str | None = None
    song_id: str | None = None


@final
@dataclass(slots=True)
class AttributeArgs:
    """Command line arguments shared by every attribute subcommand."""

    kind: AttributeKind
    action: str
    target: TargetArgs
    inherit: bool = True
    values: list[str] = field(default_factory=list)
    field_name: str | None = None
    field_type: FieldType = FieldType.STRING
    sqlite_path: Path | None = None
    verbose: bool = False
    quiet: bool = False


__all__ = ["AttributeArgs", "AttributeKind", "TargetArgs"]
