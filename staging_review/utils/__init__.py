"""
Utilities package for staging-review.

Exports shared helpers for logging. Keep this package free of domain logic.
"""

from staging_review.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
