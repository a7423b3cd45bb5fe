"""Storage backends and schema bootstrap for the metadata database."""
