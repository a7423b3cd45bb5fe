"""Command line interface for qlmeta."""
