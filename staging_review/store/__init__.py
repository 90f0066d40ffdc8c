"""
Store package for staging-review.

Holds the persistence collaborator contract only. Concrete stores live with the
service that owns the database.
"""

from staging_review.store.abstract import AbstractStagingStore, StagingData, StagingStore

__all__ = [
    "AbstractStagingStore",
    "StagingData",
    "StagingStore",
]
