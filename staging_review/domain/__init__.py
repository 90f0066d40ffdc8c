"""
Domain package for staging-review.

Exports the schema registry, staging models, validator, query compiler and the
reconciliation result contract. Everything here is pure and side-effect free.
"""

from staging_review.domain.errors import (
    EmptyFieldsError,
    ErrorKind,
    FieldError,
    FieldTypeError,
    MissingPrimaryKeyError,
    SchemaError,
    ShapeError,
    StagingValidationError,
)
from staging_review.domain.fields import FieldMap
from staging_review.domain.query import CompiledQuery, QueryCompiler, bind_row
from staging_review.domain.results import (
    StagingFieldCompare,
    StagingResult,
    StagingResultField,
    StagingResultFieldType,
    StagingResultStatus,
)
from staging_review.domain.schema import FieldVar, TableRegistry, TableSchema, load_registry
from staging_review.domain.staging import NestedSearch, Staging
from staging_review.domain.validator import SchemaValidator, ValidationResult

__all__ = [
    # Schema
    "FieldVar",
    "TableRegistry",
    "TableSchema",
    "load_registry",
    # Records
    "FieldMap",
    "NestedSearch",
    "Staging",
    # Validation
    "SchemaValidator",
    "ValidationResult",
    # Query
    "CompiledQuery",
    "QueryCompiler",
    "bind_row",
    # Results
    "StagingFieldCompare",
    "StagingResult",
    "StagingResultField",
    "StagingResultFieldType",
    "StagingResultStatus",
    # Errors
    "ErrorKind",
    "StagingValidationError",
    "SchemaError",
    "FieldError",
    "FieldTypeError",
    "ShapeError",
    "EmptyFieldsError",
    "MissingPrimaryKeyError",
]
