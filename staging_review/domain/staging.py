"""
Staging records and nested-search descriptors.

A `Staging` is an unreviewed candidate row: a target table, the scalar
predicates used to locate an existing row (`search_by`), and the staged values
(`fields`). Models accept loosely typed input (e.g. a decoded JSON request body)
and defer kind checks to `SchemaValidator`; the only conversion applied on
construction is int -> float.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from staging_review.domain.errors import MissingPrimaryKeyError
from staging_review.domain.fields import FieldMap, format_value, normalize_numbers
from staging_review.domain.schema import TableRegistry


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_field_map(value: Dict[str, Any]) -> FieldMap:
    return FieldMap(normalize_numbers(value))


class NestedSearch(BaseModel):
    """
    Sub-query embedded as a `fields` value: `{"table": ..., "searchBy": {...}}`.
    """

    table: str
    search_by: Dict[str, Any] = Field(default_factory=dict, alias="searchBy")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("search_by", mode="after")
    @classmethod
    def _normalize_search_by(cls, value: Dict[str, Any]) -> FieldMap:
        return _to_field_map(value)

    @classmethod
    def from_mapping(cls, value: Mapping[str, Any]) -> Optional["NestedSearch"]:
        """
        Interpret a map-shaped field value as a nested search.

        Returns None unless the map has a string `table` and a map `searchBy`.
        Other keys are ignored.
        """
        table = value.get("table")
        search_by = value.get("searchBy")
        if not isinstance(table, str) or not isinstance(search_by, Mapping):
            return None
        try:
            return cls(table=table, search_by=dict(search_by))
        except ValidationError:
            return None


class Staging(BaseModel):
    """
    A staged record awaiting reconciliation.

    Attributes are frozen once set, so `created_at` cannot be reassigned. The
    `search_by` and `fields` maps themselves are plain dicts and stay mutable,
    so hashing a staging raises TypeError.
    """

    table: str
    search_by: Dict[str, Any] = Field(default_factory=dict, alias="searchBy")
    fields: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("search_by", "fields", mode="after")
    @classmethod
    def _normalize_maps(cls, value: Dict[str, Any]) -> FieldMap:
        return _to_field_map(value)

    def key_string(self, registry: TableRegistry) -> str:
        """
        Join the table's primary-key values from `fields` with "-".

        Must only be called on a validated staging record.

        Raises
        ------
        MissingPrimaryKeyError
            If a primary-key field is absent from `fields`.
        """
        parts = []
        for pk in registry.get_schema(self.table).pk_names():
            if pk not in self.fields:
                raise MissingPrimaryKeyError(
                    f"Staging.key_string: missing pk '{pk}' for table '{self.table}'"
                )
            parts.append(format_value(self.fields[pk]))
        return "-".join(parts)


__all__ = ["NestedSearch", "Staging"]
