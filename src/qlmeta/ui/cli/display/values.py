"""Utilities for rendering attribute values in the terminal."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from qlmeta.features.metadata.domain.custom_fields import CustomValue, field_type_of
from qlmeta.features.metadata.domain.lookup import Lookup


def render_tags(console: Console, target_id: str, tags: Sequence[str]) -> None:
    """Print tags one per line, or a notice when there are none."""

    if not tags:
        console.print(f"[yellow]No tags for {escape(target_id)}.[/yellow]")
        return
    for tag in sorted(tags):
        console.print(tag, markup=False, highlight=False)


def render_lookup(console: Console, label: str, lookup: Lookup[CustomValue]) -> None:
    """Print a single looked-up value, distinguishing absence from failure."""

    if lookup.is_failed:
        console.print(f"[red]Could not read {escape(label)}: {escape(str(lookup.error))}[/red]")
        return
    if not lookup.is_found:
        console.print(f"[yellow]No {escape(label)} set.[/yellow]")
        return
    console.print(str(lookup.value), markup=False, highlight=False)


def render_fields(console: Console, target_id: str, fields: Mapping[str, CustomValue]) -> None:
    """Print custom fields as a table with their stored type."""

    if not fields:
        console.print(f"[yellow]No custom fields for {escape(target_id)}.[/yellow]")
        return

    table = Table(
        title="Custom Fields",
        show_header=True,
        header_style="bold magenta",
        box=box.SIMPLE_HEAD,
        highlight=True,
    )
    table.add_column("Field", style="bold")
    table.add_column("Type", style="dim")
    table.add_column("Value")
    for name in sorted(fields):
        value = fields[name]
        table.add_row(escape(name), field_type_of(value).name.lower(), escape(str(value)))
    console.print(table)


__all__ = ["render_fields", "render_lookup", "render_tags"]
