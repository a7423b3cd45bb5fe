"""Rich rendering helpers for CLI output."""

from qlmeta.ui.cli.display.values import render_fields, render_lookup, render_tags

__all__ = ["render_fields", "render_lookup", "render_tags"]
