"""
Schema validator for staging records and nested searches.

Checks run in a fixed order and stop at the first failure:

1. the table is registered;
2. every `search_by` key is a declared field with a float/bool/str value;
3. `fields` is not empty;
4. every `fields` key is declared; map values must be nested-search descriptors,
   scalar values must be float/bool/str.

The first nested search met in step 4 decides the overall outcome: its result
is returned and the remaining fields are not checked. Keys are visited in sorted
order so which nested search counts as "first" does not depend on insertion
order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from staging_review.domain.errors import (
    EmptyFieldsError,
    ErrorKind,
    FieldError,
    FieldTypeError,
    SchemaError,
    ShapeError,
    StagingValidationError,
)
from staging_review.domain.fields import is_scalar
from staging_review.domain.schema import TableRegistry
from staging_review.domain.staging import NestedSearch, Staging
from staging_review.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation; truthy iff the input was accepted."""

    ok: bool
    error: Optional[StagingValidationError] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def accept(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def reject(cls, error: StagingValidationError) -> "ValidationResult":
        return cls(ok=False, error=error)

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


class SchemaValidator:
    """
    Validates requests against an injected `TableRegistry`.

    Stateless apart from the registry reference; one instance can serve any
    number of concurrent callers.
    """

    def __init__(self, registry: TableRegistry) -> None:
        self.registry = registry

    def validate(self, staging: Staging) -> ValidationResult:
        try:
            self._check_table(staging.table)
            self._check_search_by(staging.table, staging.search_by)
            if not staging.fields:
                raise EmptyFieldsError("fields is empty", table=staging.table)
            nested = self._check_fields(staging.table, staging.fields)
        except StagingValidationError as exc:
            return self._rejected(exc)

        if nested is not None:
            return self.validate_nested(nested)
        return ValidationResult.accept()

    def validate_nested(self, nested: NestedSearch) -> ValidationResult:
        try:
            self._check_table(nested.table, prefix="invalid nested search table name")
            self._check_search_by(nested.table, nested.search_by, prefix="invalid nested search ")
        except StagingValidationError as exc:
            return self._rejected(exc)
        return ValidationResult.accept()

    def _check_table(self, table: str, prefix: str = "invalid table name") -> None:
        if not self.registry.is_valid(table):
            raise SchemaError(f"{prefix}: {table}", table=table)

    def _check_search_by(
        self, table: str, search_by: Mapping[str, Any], prefix: str = "invalid "
    ) -> None:
        for key in sorted(search_by):
            value = search_by[key]
            if not self.registry.is_field(table, key):
                raise FieldError(
                    f"{prefix}searchBy key: {key}",
                    kind=ErrorKind.INVALID_SEARCH_KEY,
                    table=table,
                    key=key,
                )
            if not is_scalar(value):
                raise FieldTypeError(
                    f"{prefix}searchBy value: {value!r}",
                    kind=ErrorKind.INVALID_SEARCH_VALUE_TYPE,
                    table=table,
                    key=key,
                    value=value,
                )

    def _check_fields(self, table: str, fields: Mapping[str, Any]) -> Optional[NestedSearch]:
        """Check `fields`; stop at and return the first nested search, if any."""
        for key in sorted(fields):
            value = fields[key]
            if not self.registry.is_field(table, key):
                raise FieldError(f"invalid fields key: {key}", table=table, key=key)

            if isinstance(value, NestedSearch):
                return value
            if isinstance(value, Mapping):
                nested = NestedSearch.from_mapping(value)
                if nested is None:
                    raise ShapeError(
                        f"invalid nested searchBy: {dict(value)!r}",
                        table=table,
                        key=key,
                        value=value,
                    )
                return nested
            if not is_scalar(value):
                raise FieldTypeError(
                    f"invalid fields value: {value!r}", table=table, key=key, value=value
                )
        return None

    def _rejected(self, exc: StagingValidationError) -> ValidationResult:
        log.debug(
            f"Staging rejected: {exc}",
            extra={"table": exc.table, "kind": exc.kind.value, "key": exc.key},
        )
        return ValidationResult.reject(exc)


__all__ = ["ValidationResult", "SchemaValidator"]
