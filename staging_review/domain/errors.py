"""
Error taxonomy for staging validation and query compilation.

Validation failures are ordinary values: the validator returns them inside a
`ValidationResult` so a calling service can turn them into a client-facing
rejection. The compiler and registry raise the same classes when handed input
that skipped validation.

`MissingPrimaryKeyError` is the one fatal case and deliberately does not derive
from `StagingValidationError`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    INVALID_TABLE = "invalid-table"
    INVALID_SEARCH_KEY = "invalid-search-key"
    INVALID_SEARCH_VALUE_TYPE = "invalid-search-value-type"
    EMPTY_FIELDS = "empty-fields"
    INVALID_FIELD_KEY = "invalid-field-key"
    INVALID_NESTED_SEARCH_SHAPE = "invalid-nested-search-shape"
    INVALID_FIELD_VALUE_TYPE = "invalid-field-value-type"


class StagingValidationError(ValueError):
    """
    Base class for rejections of a staging or nested-search request.

    Attributes
    ----------
    kind : ErrorKind
        Machine-readable rejection reason.
    table : str | None
        Table the offending key was checked against.
    key : str | None
        Offending field name, when the error concerns a single field.
    value : Any
        Offending value, when the error concerns a value.
    """

    default_kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        kind: Optional[ErrorKind] = None,
        table: Optional[str] = None,
        key: Optional[str] = None,
        value: Any = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind or self.default_kind
        self.table = table
        self.key = key
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": str(self),
            "table": self.table,
            "key": self.key,
            "value": self.value,
        }


class SchemaError(StagingValidationError):
    """Unknown table, or a table whose schema cannot support the operation."""

    default_kind = ErrorKind.INVALID_TABLE


class FieldError(StagingValidationError):
    """Key not declared on the table (searchBy or fields)."""

    default_kind = ErrorKind.INVALID_FIELD_KEY


class FieldTypeError(StagingValidationError):
    """Value kind not allowed for its role."""

    default_kind = ErrorKind.INVALID_FIELD_VALUE_TYPE


class ShapeError(StagingValidationError):
    """Map-shaped field value that is not a `{table, searchBy}` descriptor."""

    default_kind = ErrorKind.INVALID_NESTED_SEARCH_SHAPE


class EmptyFieldsError(StagingValidationError):
    default_kind = ErrorKind.EMPTY_FIELDS


class MissingPrimaryKeyError(RuntimeError):
    """
    Raised when a key string is derived from a staging record that lacks one of
    its table's primary-key fields. Only reachable if validation was skipped.
    """


__all__ = [
    "ErrorKind",
    "StagingValidationError",
    "SchemaError",
    "FieldError",
    "FieldTypeError",
    "ShapeError",
    "EmptyFieldsError",
    "MissingPrimaryKeyError",
]
