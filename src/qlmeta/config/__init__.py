"""Configuration surface for qlmeta."""
