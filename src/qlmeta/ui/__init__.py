"""User interfaces for qlmeta."""
