"""
Table schema registry.

Declares, per logical table, the valid field names and the ordered primary-key
fields. A `TableRegistry` is built once (from code or a JSON file) and handed to
the validator and the query compiler; nothing in this module is global or
mutable after construction.

Registry file format:

    {
        "tables": [
            {"name": "voters", "fields": ["id", "name", "district"], "primaryKeyFields": ["id"]}
        ]
    }
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from staging_review.domain.errors import SchemaError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_identifier(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"'{name}' is not a valid SQL identifier")
    return name


@dataclass
class FieldVar:
    """Positional binding slot for one primary-key column of a query result."""

    name: str
    value: Any = None


class TableSchema(BaseModel):
    """
    Static declaration of one table.

    Names are restricted to plain SQL identifiers so they can be interpolated
    into query text as-is.
    """

    name: str = Field(..., description="Table name, unique within a registry.")
    fields: Tuple[str, ...] = Field(..., description="Declared field names.")
    primary_key_fields: Tuple[str, ...] = Field(
        (),
        alias="primaryKeyFields",
        description="Ordered primary-key fields, a subset of `fields`.",
    )

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("name")
    @classmethod
    def _valid_name(cls, value: str) -> str:
        return _check_identifier(value)

    @field_validator("fields", "primary_key_fields")
    @classmethod
    def _valid_field_names(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        for name in value:
            _check_identifier(name)
        if len(set(value)) != len(value):
            raise ValueError("field names must be unique")
        return value

    @model_validator(mode="after")
    def _pk_subset_of_fields(self) -> "TableSchema":
        missing = [pk for pk in self.primary_key_fields if pk not in self.fields]
        if missing:
            raise ValueError(
                f"primary key fields {missing} are not declared fields of '{self.name}'"
            )
        return self

    def is_field(self, name: str) -> bool:
        return name in self.fields

    def pk_names(self) -> List[str]:
        """
        Primary-key field names in declared order.

        Raises
        ------
        SchemaError
            If the table declares no primary key.
        """
        if not self.primary_key_fields:
            raise SchemaError(f"table '{self.name}' has no primary key fields", table=self.name)
        return list(self.primary_key_fields)

    def pk_vars(self) -> List[FieldVar]:
        """Fresh binding slots, one per primary-key field, parallel to `pk_names()`."""
        return [FieldVar(name=name) for name in self.pk_names()]


class RegistryConfig(BaseModel):
    """File representation of a registry."""

    tables: List[TableSchema] = Field(default_factory=list)


class TableRegistry(Mapping[str, TableSchema]):
    """
    Immutable name -> TableSchema mapping.

    Safe to share between threads: the underlying mapping is a read-only proxy and
    schemas are frozen models.
    """

    def __init__(self, tables: Iterable[TableSchema] = ()) -> None:
        index: dict[str, TableSchema] = {}
        for table in tables:
            if table.name in index:
                raise ValueError(f"duplicate table '{table.name}' in registry")
            index[table.name] = table
        self._tables: Mapping[str, TableSchema] = MappingProxyType(index)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "TableRegistry":
        return cls(RegistryConfig.model_validate(config).tables)

    def __getitem__(self, name: str) -> TableSchema:
        return self._tables[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        return f"TableRegistry({sorted(self._tables)})"

    def is_valid(self, table: str) -> bool:
        return table in self._tables

    def get_schema(self, table: str) -> TableSchema:
        """
        Resolve a table by name.

        Raises
        ------
        SchemaError
            If the table is not registered.
        """
        schema = self._tables.get(table)
        if schema is None:
            raise SchemaError(f"invalid table name: {table}", table=table)
        return schema

    def is_field(self, table: str, name: str) -> bool:
        schema = self._tables.get(table)
        return schema is not None and schema.is_field(name)


def load_registry(path: Optional[Path | str]) -> TableRegistry:
    """
    Load a registry from a JSON file. A missing path yields an empty registry.
    """
    if path is None:
        return TableRegistry()
    with Path(path).open("r", encoding="utf-8") as f:
        return TableRegistry.from_config(json.load(f))


__all__ = [
    "FieldVar",
    "TableSchema",
    "RegistryConfig",
    "TableRegistry",
    "load_registry",
]
