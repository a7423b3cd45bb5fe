"""
Summary: Read and write tags, descriptions, ratings and custom fields with inheritance.
Why: One facade keeps the per-kind merge policies and the inherit/exact contract consistent.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Final, final

from qlmeta.features.metadata.domain.custom_fields import CustomValue, decode_value, encode_value
from qlmeta.features.metadata.domain.identity import id_chain
from qlmeta.features.metadata.domain.lookup import Lookup
from qlmeta.features.metadata.usecases.placeholders import QueryBuilder
from qlmeta.features.metadata.usecases.ports import PreparedStatement, QueryResult, StorageBackend
from qlmeta.platform.db.schema import bootstrap_schema
from qlmeta.platform.logging import logger
from qlmeta.shared.errors import QueryError
from qlmeta.shared.meta_objects import MetaObject

NO_RATING: Final[float] = -1.0

_SELECT_TAGS: Final[str] = "SELECT tag FROM tags WHERE id IN ({ids})"
_INSERT_TAG: Final[str] = "INSERT INTO tags (id, tag) VALUES ({p}, {p}) ON CONFLICT (id, tag) DO NOTHING"
_DELETE_TAG: Final[str] = "DELETE FROM tags WHERE tag = {p} AND id IN ({ids})"
_CLEAR_TAGS: Final[str] = "DELETE FROM tags WHERE id = {p}"

# COALESCE needs two arguments on SQLite, hence the trailing NULL.
_SELECT_FIRST: Final[str] = "SELECT COALESCE({lookups}, NULL)"
_DESCRIPTION_LOOKUP: Final[str] = "(SELECT NULLIF(description, '') FROM descriptions WHERE id = {p})"
_UPSERT_DESCRIPTION: Final[str] = (
    "INSERT INTO descriptions (id, description) VALUES ({p}, {p}) "
    "ON CONFLICT (id) DO UPDATE SET description = excluded.description"
)
_DELETE_DESCRIPTION: Final[str] = "DELETE FROM descriptions WHERE id = {p}"

_RATING_LOOKUP: Final[str] = "(SELECT rate FROM rates WHERE id = {p})"
_UPSERT_RATING: Final[str] = (
    "INSERT INTO rates (id, rate) VALUES ({p}, {p}) "
    "ON CONFLICT (id) DO UPDATE SET rate = excluded.rate"
)
_DELETE_RATING: Final[str] = "DELETE FROM rates WHERE id = {p}"

_SELECT_FIRST_FIELD: Final[str] = "SELECT COALESCE({types}, NULL), COALESCE({values}, NULL)"
_FIELD_TYPE_LOOKUP: Final[str] = "(SELECT type FROM custom_fields WHERE id = {p} AND field_name = {p})"
_FIELD_VALUE_LOOKUP: Final[str] = "(SELECT value FROM custom_fields WHERE id = {p} AND field_name = {p})"
_SELECT_FIELDS: Final[str] = "SELECT id, field_name, type, value FROM custom_fields WHERE id IN ({ids})"
_UPSERT_FIELD: Final[str] = (
    "INSERT INTO custom_fields (id, field_name, type, value) VALUES ({p}, {p}, {p}, {p}) "
    "ON CONFLICT (id, field_name) DO UPDATE SET type = excluded.type, value = excluded.value"
)
_DELETE_FIELD: Final[str] = "DELETE FROM custom_fields WHERE id = {p} AND field_name = {p}"


@final
class MetadataStore:
    """Attach attributes to songs, albums and artists and resolve them through the hierarchy.

    Only one store should be created per application context; it owns the
    injected backend for its whole lifetime. Reads never cache: every call
    queries the backend again.

    Merge policies per attribute kind:

    - tags: union of every level in the chain.
    - description, rating, custom fields: the nearest level with a value wins.
    - removing a tag with ``inherit=True`` deletes it from every level.
    """

    _backend: StorageBackend
    _sql: QueryBuilder
    schema_ready: bool

    def __init__(self, backend: StorageBackend) -> None:
        """Initialize the store and create missing tables.

        Args:
            backend: Storage backend; may be disconnected, in which case reads
                return empty values and writes report a connection error.
        """
        self._backend = backend
        self._sql = QueryBuilder(backend.placeholder)
        self.schema_ready = bootstrap_schema(backend)

    def is_connected(self) -> bool:
        """Return True while the backend holds a live connection."""
        return self._backend.is_connected()

    def close(self) -> None:
        """Close the underlying backend."""
        self._backend.close()

    def __enter__(self) -> "MetadataStore":
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: Any | None) -> None:
        self.close()

    # Tags ---------------------------------------------------------------------

    def lookup_tags(self, obj: MetaObject, inherit: bool = True) -> Lookup[list[str]]:
        """Return the union of tags across the id chain."""

        chain = id_chain(obj, inherit)
        sql = self._sql.render(_SELECT_TAGS, ids=self._sql.in_list(len(chain)))
        result = self._backend.fetch_all(self._backend.prepare_statement(sql, chain))
        if not result.is_success():
            return self._failed_read(result, "tags", obj)

        tags = [str(row[0]) for row in result.value or []]
        return Lookup.found(tags) if tags else Lookup.absent()

    def get_tags(self, obj: MetaObject, inherit: bool = True) -> list[str]:
        """Return tags on ``obj`` and, when inheriting, on every ancestor.

        Tags are not de-duplicated across levels. Backend failures yield an
        empty list.
        """
        return self.lookup_tags(obj, inherit).value_or([])

    def add_tag(self, obj: MetaObject, tag: str) -> QueryResult[int]:
        """Tag ``obj``; adding an existing tag is a no-op."""

        sql = self._sql.render(_INSERT_TAG)
        return self._write([self._backend.prepare_statement(sql, (obj.id, tag))], "tags", obj)

    def remove_tag(self, obj: MetaObject, tag: str, inherit: bool = True) -> QueryResult[int]:
        """Remove ``tag`` from ``obj`` and, when inheriting, from every ancestor that has it."""

        chain = id_chain(obj, inherit)
        sql = self._sql.render(_DELETE_TAG, ids=self._sql.in_list(len(chain)))
        return self._write([self._backend.prepare_statement(sql, [tag, *chain])], "tags", obj)

    def set_tags(self, obj: MetaObject, tags: Iterable[str]) -> QueryResult[int]:
        """Replace every tag on ``obj`` with ``tags`` in one transaction.

        Ancestors are left untouched. Duplicate entries in ``tags`` are stored once.

        Raises:
            TypeError: If ``tags`` is a single string rather than a collection.
        """
        if isinstance(tags, str):
            raise TypeError("set_tags expects a collection of tags, not a single string")
        unique_tags = list(dict.fromkeys(tags))
        statements = [self._backend.prepare_statement(self._sql.render(_CLEAR_TAGS), (obj.id,))]
        insert_sql = self._sql.render(_INSERT_TAG)
        statements.extend(self._backend.prepare_statement(insert_sql, (obj.id, tag)) for tag in unique_tags)
        return self._write(statements, "tags", obj)

    # Description ----------------------------------------------------------------

    def lookup_description(self, obj: MetaObject, inherit: bool = True) -> Lookup[str]:
        """Return the nearest non-empty description along the id chain."""

        lookup = self._first_match(obj, inherit, _DESCRIPTION_LOOKUP, "description")
        if not lookup.is_found:
            return lookup
        return Lookup.found(str(lookup.value))

    def get_description(self, obj: MetaObject, inherit: bool = True) -> str:
        """Return the nearest description, or ``""`` when none is set."""

        return self.lookup_description(obj, inherit).value_or("")

    def set_description(self, obj: MetaObject, description: str) -> QueryResult[int]:
        """Set the description of ``obj`` itself."""

        sql = self._sql.render(_UPSERT_DESCRIPTION)
        return self._write([self._backend.prepare_statement(sql, (obj.id, description))], "description", obj)

    def remove_description(self, obj: MetaObject) -> QueryResult[int]:
        """Delete the description of ``obj`` itself."""

        sql = self._sql.render(_DELETE_DESCRIPTION)
        return self._write([self._backend.prepare_statement(sql, (obj.id,))], "description", obj)

    # Rating ---------------------------------------------------------------------

    def lookup_rating(self, obj: MetaObject, inherit: bool = True) -> Lookup[float]:
        """Return the nearest rating along the id chain."""

        lookup = self._first_match(obj, inherit, _RATING_LOOKUP, "rating")
        if not lookup.is_found:
            return lookup
        return Lookup.found(float(lookup.value))

    def get_rating(self, obj: MetaObject, inherit: bool = True) -> float:
        """Return the nearest rating, or ``-1.0`` when none is set."""

        return self.lookup_rating(obj, inherit).value_or(NO_RATING)

    def set_rating(self, obj: MetaObject, rating: float) -> QueryResult[int]:
        """Set the rating of ``obj`` itself."""

        sql = self._sql.render(_UPSERT_RATING)
        return self._write([self._backend.prepare_statement(sql, (obj.id, float(rating)))], "rating", obj)

    def remove_rating(self, obj: MetaObject) -> QueryResult[int]:
        """Delete the rating of ``obj`` itself."""

        sql = self._sql.render(_DELETE_RATING)
        return self._write([self._backend.prepare_statement(sql, (obj.id,))], "rating", obj)

    # Custom fields --------------------------------------------------------------

    def lookup_custom_field(self, obj: MetaObject, field: str, inherit: bool = True) -> Lookup[CustomValue]:
        """Return the nearest value of ``field`` along the id chain."""

        chain = id_chain(obj, inherit)
        sql = self._sql.render(
            _SELECT_FIRST_FIELD,
            types=self._sql.priority(len(chain), _FIELD_TYPE_LOOKUP),
            values=self._sql.priority(len(chain), _FIELD_VALUE_LOOKUP),
        )
        per_id = [param for object_id in chain for param in (object_id, field)]
        result = self._backend.fetch_one(self._backend.prepare_statement(sql, per_id + per_id))
        if not result.is_success():
            return self._failed_read(result, "custom_field", obj)

        row = result.value
        if row is None or row[0] is None or row[1] is None:
            return Lookup.absent()
        try:
            return Lookup.found(decode_value(row[0], str(row[1])))
        except ValueError as e:
            logger.error(
                "Failed to decode custom field '%s': %s",
                field,
                e,
                extra={"attribute": "custom_field", "object_id": obj.id},
            )
            return Lookup.failed(QueryError(f"Undecodable value for custom field '{field}': {e}"))

    def get_custom_field(self, obj: MetaObject, field: str, inherit: bool = True) -> CustomValue | None:
        """Return the nearest value of ``field``, or None when it is not set."""

        lookup = self.lookup_custom_field(obj, field, inherit)
        return lookup.value if lookup.is_found else None

    def lookup_all_custom_fields(
        self, obj: MetaObject, inherit: bool = True
    ) -> Lookup[dict[str, CustomValue]]:
        """Merge custom fields along the id chain, nearest level winning per field."""

        chain = id_chain(obj, inherit)
        sql = self._sql.render(_SELECT_FIELDS, ids=self._sql.in_list(len(chain)))
        result = self._backend.fetch_all(self._backend.prepare_statement(sql, chain))
        if not result.is_success():
            return self._failed_read(result, "custom_field", obj)

        depth = {object_id: index for index, object_id in enumerate(chain)}
        # Apply the root first so nearer levels overwrite it.
        rows = sorted(result.value or [], key=lambda row: depth.get(row[0], len(chain)), reverse=True)

        fields: dict[str, CustomValue] = {}
        for _object_id, field_name, type_code, text in rows:
            try:
                fields[str(field_name)] = decode_value(type_code, str(text))
            except ValueError as e:
                _ = fields.pop(str(field_name), None)
                logger.warning(
                    "Skipping undecodable custom field '%s': %s",
                    field_name,
                    e,
                    extra={"attribute": "custom_field", "object_id": obj.id},
                )
        return Lookup.found(fields) if fields else Lookup.absent()

    def get_all_custom_fields(self, obj: MetaObject, inherit: bool = True) -> dict[str, CustomValue]:
        """Return every custom field visible from ``obj``."""

        return self.lookup_all_custom_fields(obj, inherit).value_or({})

    def set_custom_field(self, obj: MetaObject, field: str, value: CustomValue) -> QueryResult[int]:
        """Set ``field`` on ``obj`` itself.

        Raises:
            TypeError: If ``value`` is not a str, int, float or bool.
        """
        return self._write([self._custom_field_statement(obj, field, value)], "custom_field", obj)

    def set_all_custom_fields(self, obj: MetaObject, fields: Mapping[str, CustomValue]) -> QueryResult[int]:
        """Set several fields on ``obj`` itself in one transaction.

        Raises:
            TypeError: If any value is not a str, int, float or bool; nothing is written.
        """
        statements = [self._custom_field_statement(obj, name, value) for name, value in fields.items()]
        return self._write(statements, "custom_field", obj)

    def remove_custom_field(self, obj: MetaObject, field: str) -> QueryResult[int]:
        """Delete ``field`` from ``obj`` itself."""

        sql = self._sql.render(_DELETE_FIELD)
        return self._write([self._backend.prepare_statement(sql, (obj.id, field))], "custom_field", obj)

    # Helpers ------------------------------------------------------------------------

    def _custom_field_statement(self, obj: MetaObject, field: str, value: CustomValue) -> PreparedStatement:
        field_type, text = encode_value(value)
        sql = self._sql.render(_UPSERT_FIELD)
        return self._backend.prepare_statement(sql, (obj.id, field, int(field_type), text))

    def _first_match(self, obj: MetaObject, inherit: bool, lookup_template: str, attribute: str) -> Lookup[Any]:
        chain = id_chain(obj, inherit)
        sql = self._sql.render(_SELECT_FIRST, lookups=self._sql.priority(len(chain), lookup_template))
        result = self._backend.fetch_one(self._backend.prepare_statement(sql, chain))
        if not result.is_success():
            return self._failed_read(result, attribute, obj)

        row = result.value
        if row is None or row[0] is None:
            return Lookup.absent()
        return Lookup.found(row[0])

    @staticmethod
    def _failed_read(result: QueryResult[Any], attribute: str, obj: MetaObject) -> Lookup[Any]:
        assert result.error is not None
        logger.warning(
            "Read failed, treating as absent: %s",
            result.error,
            extra={"attribute": attribute, "object_id": obj.id},
        )
        return Lookup.failed(result.error)

    def _write(self, statements: list[PreparedStatement], attribute: str, obj: MetaObject) -> QueryResult[int]:
        result = self._backend.update_many(statements)
        if not result.is_success():
            logger.error(
                "Write failed: %s",
                result.error,
                extra={"attribute": attribute, "object_id": obj.id},
            )
        return result


__all__ = ["MetadataStore", "NO_RATING"]
