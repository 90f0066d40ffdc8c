"""
Pytest configuration for staging-review.

Provides fixtures for:
- A small table schema registry (voters, reps, districts, and a table without a primary key)
- Validator and compiler instances bound to that registry
- A registry JSON file for CLI tests
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from staging_review.config import get_settings
from staging_review.domain.query import QueryCompiler
from staging_review.domain.schema import TableRegistry
from staging_review.domain.validator import SchemaValidator

REGISTRY_CONFIG: Dict[str, Any] = {
    "tables": [
        {
            "name": "voters",
            "fields": ["id", "name", "district", "rep", "active"],
            "primaryKeyFields": ["id"],
        },
        {
            "name": "reps",
            "fields": ["id", "name", "party", "term"],
            "primaryKeyFields": ["id"],
        },
        {
            "name": "districts",
            "fields": ["city", "code", "name", "seats"],
            "primaryKeyFields": ["city", "code"],
        },
        {
            "name": "audit_log",
            "fields": ["message", "level"],
            "primaryKeyFields": [],
        },
    ]
}


@pytest.fixture(scope="session")
def registry() -> TableRegistry:
    return TableRegistry.from_config(REGISTRY_CONFIG)


@pytest.fixture(scope="session")
def validator(registry: TableRegistry) -> SchemaValidator:
    return SchemaValidator(registry)


@pytest.fixture(scope="session")
def compiler(registry: TableRegistry) -> QueryCompiler:
    return QueryCompiler(registry)


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    """
    Registry JSON file matching the `registry` fixture.
    """
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(REGISTRY_CONFIG), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """
    Settings are cached per process; reset around each test so env overrides apply.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
