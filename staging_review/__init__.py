"""
Staging review - validation and query-compilation core for staged records.

Staged records are untyped key/value maps aimed at a declared table. This
package provides:

- A static table schema registry (fields and primary keys per table)
- Strict field maps with type-sensitive equality and containment
- A schema validator for staging records and nested searches
- A compiler from search predicates to `$N`-parameterized queries
- The result contract consumed by reconciliation (create/update/conflict)

Persistence and reconciliation are provided by the surrounding service.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from staging_review.config import Settings, get_settings
from staging_review.domain import (
    CompiledQuery,
    FieldMap,
    NestedSearch,
    QueryCompiler,
    SchemaValidator,
    Staging,
    StagingResult,
    StagingResultStatus,
    StagingValidationError,
    TableRegistry,
    TableSchema,
    ValidationResult,
    load_registry,
)
from staging_review.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Schema
    "TableRegistry",
    "TableSchema",
    "load_registry",
    # Records and validation
    "FieldMap",
    "NestedSearch",
    "Staging",
    "SchemaValidator",
    "ValidationResult",
    "StagingValidationError",
    # Query compilation
    "CompiledQuery",
    "QueryCompiler",
    # Results
    "StagingResult",
    "StagingResultStatus",
    # Logging
    "configure_logging",
    "get_logger",
]
