"""Command line argument parsing package."""

from qlmeta.ui.cli.args.parser import ArgumentParser

__all__ = ["ArgumentParser"]
