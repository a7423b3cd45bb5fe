"""Typed outcome of an attribute read."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

from qlmeta.shared.errors import MetadataStoreError

T = TypeVar("T")


class LookupState(StrEnum):
    """Whether a read found a value, found nothing, or failed."""

    FOUND = "found"
    ABSENT = "absent"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class Lookup(Generic[T]):
    """Result of a read that keeps absence and failure apart."""

    state: LookupState
    value: T | None = None
    error: MetadataStoreError | None = None

    @classmethod
    def found(cls, value: T) -> "Lookup[T]":
        return cls(LookupState.FOUND, value=value)

    @classmethod
    def absent(cls) -> "Lookup[T]":
        return cls(LookupState.ABSENT)

    @classmethod
    def failed(cls, error: MetadataStoreError) -> "Lookup[T]":
        return cls(LookupState.FAILED, error=error)

    @property
    def is_found(self) -> bool:
        return self.state is LookupState.FOUND

    @property
    def is_failed(self) -> bool:
        return self.state is LookupState.FAILED

    def value_or(self, default: T) -> T:
        """Return the found value, or ``default`` when absent or failed."""

        if self.state is LookupState.FOUND and self.value is not None:
            return self.value
        return default


__all__ = ["Lookup", "LookupState"]
