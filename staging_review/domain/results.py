"""
Result contract for reconciliation.

Reconciliation compares a validated staging record with what the compiled search
finds in persistence and reports, per field, either a plain value or an
old/new comparison. The classification logic lives outside this package; these
models only fix the shape it produces.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List

from pydantic import BaseModel, Field

from staging_review.domain.fields import values_equal


class StagingResultStatus(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    CONFLICT = "conflict"


class StagingResultFieldType(str, Enum):
    COMPARE = "compare"
    VALUE = "value"


class StagingFieldCompare(BaseModel):
    changed: bool
    old: Any = None
    new: Any = None

    model_config = {"frozen": True}


class StagingResultField(BaseModel):
    type: StagingResultFieldType
    field: str
    value: Any = None

    model_config = {"frozen": True}

    @classmethod
    def compare(cls, field: str, old: Any, new: Any) -> "StagingResultField":
        """Comparison entry; `changed` uses strict (type-sensitive) equality."""
        return cls(
            type=StagingResultFieldType.COMPARE,
            field=field,
            value=StagingFieldCompare(changed=not values_equal(old, new), old=old, new=new),
        )

    @classmethod
    def plain(cls, field: str, value: Any) -> "StagingResultField":
        return cls(type=StagingResultFieldType.VALUE, field=field, value=value)


class StagingResult(BaseModel):
    """Per-record outcome: status plus ordered field entries."""

    status: StagingResultStatus
    fields: List[StagingResultField] = Field(default_factory=list)

    model_config = {"frozen": True}

    def changed_fields(self) -> List[str]:
        return [
            entry.field
            for entry in self.fields
            if isinstance(entry.value, StagingFieldCompare) and entry.value.changed
        ]


__all__ = [
    "StagingResultStatus",
    "StagingResultFieldType",
    "StagingFieldCompare",
    "StagingResultField",
    "StagingResult",
]
