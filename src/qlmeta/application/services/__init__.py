"""Service entry points."""

from .store_factory import create_backend, open_store

__all__ = ["create_backend", "open_store"]
