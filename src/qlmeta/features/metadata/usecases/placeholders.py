"""
Summary: Build placeholder fragments sized to the length of an id chain.
Why: Chain depth varies per call, so IN-lists and COALESCE lookups cannot be static SQL.
"""

from __future__ import annotations

from typing import final

PLACEHOLDER_TOKEN = "{p}"


def _require_positive(n: int) -> None:
    if n < 1:
        raise ValueError(f"Placeholder count must be at least 1, got {n}")


def in_list_placeholders(n: int, marker: str = "?") -> str:
    """Return ``n`` comma-joined positional placeholders for an IN clause.

    Args:
        n: Number of values in the IN list.
        marker: Backend placeholder, ``?`` for SQLite or ``%s`` for psycopg.

    Returns:
        str: For example ``"?, ?, ?"``.
    """
    _require_positive(n)
    return ", ".join([marker] * n)


def priority_placeholders(n: int, template: str) -> str:
    """Return ``n`` comma-joined copies of a per-id sub-lookup.

    The result is meant to be wrapped in ``COALESCE(...)`` so the first
    non-null sub-lookup, in chain order, wins.

    Args:
        n: Number of ids in the chain.
        template: Sub-lookup with its placeholders already rendered, e.g.
            ``"(SELECT description FROM descriptions WHERE id = ?)"``.
    """
    _require_positive(n)
    return ", ".join([template] * n)


@final
class QueryBuilder:
    """Render SQL templates for a single backend placeholder style."""

    marker: str

    def __init__(self, marker: str = "?") -> None:
        self.marker = marker

    def render(self, template: str, **fragments: str) -> str:
        """Replace ``{p}`` markers with the backend placeholder and fill fragments.

        Fragments are inserted verbatim; they must only contain placeholders
        produced by this builder, never values.
        """
        sql = template.replace(PLACEHOLDER_TOKEN, self.marker)
        for name, fragment in fragments.items():
            sql = sql.replace("{" + name + "}", fragment)
        return sql

    def in_list(self, n: int) -> str:
        return in_list_placeholders(n, self.marker)

    def priority(self, n: int, template: str) -> str:
        return priority_placeholders(n, self.render(template))


__all__ = ["PLACEHOLDER_TOKEN", "QueryBuilder", "in_list_placeholders", "priority_placeholders"]
