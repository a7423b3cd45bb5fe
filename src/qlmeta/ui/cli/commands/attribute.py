"""src/qlmeta/ui/cli/commands/attribute.py
What: Run one attribute action against the metadata store and print the outcome.
Why: Keep store calls and exit-code policy out of argument parsing.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import final

from rich.console import Console
from rich.markup import escape

from qlmeta.application.services.store_factory import open_store
from qlmeta.config.database import DatabaseSettings
from qlmeta.features.metadata.domain.custom_fields import decode_value
from qlmeta.features.metadata.usecases.attribute_store import MetadataStore
from qlmeta.features.metadata.usecases.ports import QueryResult
from qlmeta.shared.meta_objects import Album, Artist, MetaObject, Song
from qlmeta.ui.cli.args.options import AttributeArgs, TargetArgs
from qlmeta.ui.cli.display.values import render_fields, render_lookup, render_tags

EXIT_OK = 0
EXIT_FAILURE = 1


def build_target(target: TargetArgs) -> MetaObject:
    """Assemble the queried object and its ancestors from command line ids."""

    artist = Artist(id=target.artist_id)
    album = Album(id=target.album_id, artist=artist) if target.album_id else None
    if target.song_id:
        return Song(id=target.song_id, artist=artist, album=album)
    if album is not None:
        return album
    return artist


@final
class AttributeCommand:
    """Execute a tags/description/rating/field action."""

    def __init__(
        self,
        args: AttributeArgs,
        *,
        store_factory: Callable[[AttributeArgs], MetadataStore] | None = None,
        console: Console | None = None,
    ) -> None:
        self._args = args
        self._store_factory = store_factory or self._default_store_factory
        self._console = console or Console()

    def execute(self) -> int:
        """Run the action; returns the process exit code."""

        target = build_target(self._args.target)
        with self._store_factory(self._args) as store:
            if not store.is_connected():
                self._console.print("[red]Metadata database is unavailable.[/red]")
                return EXIT_FAILURE
            handler = self._handlers()[(self._args.kind, self._args.action)]
            return handler(store, target)

    @staticmethod
    def _default_store_factory(args: AttributeArgs) -> MetadataStore:
        settings = DatabaseSettings.from_env()
        if args.sqlite_path is not None:
            settings = DatabaseSettings(sqlite_path=args.sqlite_path)
        return open_store(settings)

    def _handlers(self) -> dict[tuple[str, str], Callable[[MetadataStore, MetaObject], int]]:
        return {
            ("tags", "list"): self._tags_list,
            ("tags", "add"): self._tags_add,
            ("tags", "remove"): self._tags_remove,
            ("tags", "set"): self._tags_set,
            ("description", "get"): self._description_get,
            ("description", "set"): self._description_set,
            ("description", "remove"): self._description_remove,
            ("rating", "get"): self._rating_get,
            ("rating", "set"): self._rating_set,
            ("rating", "remove"): self._rating_remove,
            ("field", "get"): self._field_get,
            ("field", "set"): self._field_set,
            ("field", "list"): self._field_list,
            ("field", "remove"): self._field_remove,
        }

    def _report_write(self, result: QueryResult[int], done: str) -> int:
        if not result.is_success():
            self._console.print(f"[red]Write failed: {escape(str(result.error))}[/red]")
            return EXIT_FAILURE
        if not self._args.quiet:
            self._console.print(f"[green]{escape(done)}[/green]")
        return EXIT_OK

    # Tags

    def _tags_list(self, store: MetadataStore, target: MetaObject) -> int:
        lookup = store.lookup_tags(target, self._args.inherit)
        if lookup.is_failed:
            self._console.print(f"[red]Could not read tags: {escape(str(lookup.error))}[/red]")
            return EXIT_FAILURE
        render_tags(self._console, target.id, lookup.value_or([]))
        return EXIT_OK

    def _tags_add(self, store: MetadataStore, target: MetaObject) -> int:
        for tag in self._args.values:
            result = store.add_tag(target, tag)
            if not result.is_success():
                return self._report_write(result, "")
        return self._report_write(QueryResult.ok(len(self._args.values)), f"Tagged {target.id}")

    def _tags_remove(self, store: MetadataStore, target: MetaObject) -> int:
        removed = 0
        for tag in self._args.values:
            result = store.remove_tag(target, tag, self._args.inherit)
            if not result.is_success():
                return self._report_write(result, "")
            removed += result.get_value()
        return self._report_write(QueryResult.ok(removed), f"Removed {removed} tag row(s)")

    def _tags_set(self, store: MetadataStore, target: MetaObject) -> int:
        return self._report_write(store.set_tags(target, self._args.values), f"Replaced tags on {target.id}")

    # Description

    def _description_get(self, store: MetadataStore, target: MetaObject) -> int:
        lookup = store.lookup_description(target, self._args.inherit)
        render_lookup(self._console, "description", lookup)
        return EXIT_FAILURE if lookup.is_failed else EXIT_OK

    def _description_set(self, store: MetadataStore, target: MetaObject) -> int:
        result = store.set_description(target, self._args.values[0])
        return self._report_write(result, f"Description set on {target.id}")

    def _description_remove(self, store: MetadataStore, target: MetaObject) -> int:
        return self._report_write(store.remove_description(target), f"Description removed from {target.id}")

    # Rating

    def _rating_get(self, store: MetadataStore, target: MetaObject) -> int:
        lookup = store.lookup_rating(target, self._args.inherit)
        render_lookup(self._console, "rating", lookup)
        return EXIT_FAILURE if lookup.is_failed else EXIT_OK

    def _rating_set(self, store: MetadataStore, target: MetaObject) -> int:
        result = store.set_rating(target, float(self._args.values[0]))
        return self._report_write(result, f"Rating set on {target.id}")

    def _rating_remove(self, store: MetadataStore, target: MetaObject) -> int:
        return self._report_write(store.remove_rating(target), f"Rating removed from {target.id}")

    # Custom fields

    def _field_get(self, store: MetadataStore, target: MetaObject) -> int:
        name = self._require_field_name()
        lookup = store.lookup_custom_field(target, name, self._args.inherit)
        render_lookup(self._console, f"field '{name}'", lookup)
        return EXIT_FAILURE if lookup.is_failed else EXIT_OK

    def _field_set(self, store: MetadataStore, target: MetaObject) -> int:
        name = self._require_field_name()
        value = decode_value(self._args.field_type, self._args.values[0])
        result = store.set_custom_field(target, name, value)
        return self._report_write(result, f"Field '{name}' set on {target.id}")

    def _field_list(self, store: MetadataStore, target: MetaObject) -> int:
        lookup = store.lookup_all_custom_fields(target, self._args.inherit)
        if lookup.is_failed:
            self._console.print(f"[red]Could not read custom fields: {escape(str(lookup.error))}[/red]")
            return EXIT_FAILURE
        render_fields(self._console, target.id, lookup.value_or({}))
        return EXIT_OK

    def _field_remove(self, store: MetadataStore, target: MetaObject) -> int:
        name = self._require_field_name()
        return self._report_write(store.remove_custom_field(target, name), f"Field '{name}' removed from {target.id}")

    def _require_field_name(self) -> str:
        if not self._args.field_name:
            raise ValueError("A field name is required")
        return self._args.field_name


__all__ = ["AttributeCommand", "EXIT_FAILURE", "EXIT_OK", "build_target"]
