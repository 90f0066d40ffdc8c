"""
Persistence collaborator contract for staged records.

Stores are provided by the surrounding service (connection handling, row
scanning and transactions are theirs). Implementations should satisfy the
`StagingStore` protocol; `AbstractStagingStore` is an optional ABC helper for
class-based implementations.
"""

from __future__ import annotations

import abc
from datetime import datetime
from typing import Any, Dict, List, Protocol, runtime_checkable

from pydantic import BaseModel, Field


class StagingData(BaseModel):
    """
    One persisted batch of staged records (a row of `staging_data`).
    """

    id: int = Field(..., description="Primary key.")
    records: Dict[str, Any] = Field(..., description="Opaque JSON payload of staged records.")
    created_at: datetime = Field(..., description="Row creation timestamp.")
    updated_at: datetime = Field(..., description="Row update timestamp.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


@runtime_checkable
class StagingStore(Protocol):
    def list(self, offset: int, limit: int) -> List[StagingData]:
        """
        Return staged rows ordered by id, newest first.

        Parameters
        ----------
        offset : int
            Number of rows to skip.
        limit : int
            Maximum number of rows to return.
        """
        ...

    def submit(self, id: int) -> None:
        """Remove the staged row `id` and reconcile its records."""
        ...


class AbstractStagingStore(abc.ABC):
    @abc.abstractmethod
    def list(self, offset: int, limit: int) -> List[StagingData]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def submit(self, id: int) -> None:  # pragma: no cover - interface only
        raise NotImplementedError


__all__ = ["StagingData", "StagingStore", "AbstractStagingStore"]
