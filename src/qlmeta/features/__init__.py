"""Feature packages for qlmeta."""
