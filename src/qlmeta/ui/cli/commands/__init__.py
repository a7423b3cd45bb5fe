"""Command execution package for CLI."""

from qlmeta.ui.cli.commands.attribute import AttributeCommand, build_target

__all__ = ["AttributeCommand", "build_target"]
