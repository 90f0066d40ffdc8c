"""
End-to-end tests for the staging-review CLI.

These run the typer app in-process against a registry JSON file and staging
documents written to a temporary directory.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest
from typer.testing import CliRunner

from staging_review.main import app

runner = CliRunner()

EXIT_REJECTED = 1
EXIT_USAGE = 2


def _write(tmp_path: Path, document: Dict[str, Any], name: str = "staging.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


class TestCheck:
    def test_valid_document_json_output(self, tmp_path: Path, schema_file: Path):
        doc = _write(
            tmp_path,
            {"table": "voters", "searchBy": {"district": "A"}, "fields": {"name": "X", "id": 1}},
        )
        result = runner.invoke(app, ["check", str(doc), "--schema", str(schema_file), "--json"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload == {
            "valid": True,
            "error": None,
            "query": "SELECT id FROM voters WHERE district = $1",
            "args": ["A"],
            "key": "1",
        }

    def test_valid_document_without_pk_has_no_key(self, tmp_path: Path, schema_file: Path):
        doc = _write(tmp_path, {"table": "voters", "searchBy": {"id": 4}, "fields": {"name": "X"}})
        result = runner.invoke(app, ["check", str(doc), "--schema", str(schema_file), "--json"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["key"] is None
        assert payload["args"] == [4.0]

    def test_rejected_document(self, tmp_path: Path, schema_file: Path):
        doc = _write(
            tmp_path, {"table": "voters", "fields": {"rep": {"table": "reps"}}}
        )
        result = runner.invoke(app, ["check", str(doc), "--schema", str(schema_file), "--json"])

        assert result.exit_code == EXIT_REJECTED
        payload = json.loads(result.stdout)
        assert payload["valid"] is False
        assert payload["error"]["kind"] == "invalid-nested-search-shape"
        assert payload["error"]["key"] == "rep"

    def test_rich_output(self, tmp_path: Path, schema_file: Path):
        doc = _write(tmp_path, {"table": "reps", "searchBy": {"party": "green"}, "fields": {"id": 2}})
        result = runner.invoke(app, ["check", str(doc), "--schema", str(schema_file)])

        assert result.exit_code == 0, result.output
        assert "Staging accepted" in result.stdout
        assert "SELECT id FROM reps WHERE party = $1" in result.stdout

    def test_malformed_document(self, tmp_path: Path, schema_file: Path):
        doc = _write(tmp_path, {"searchBy": {}, "fields": {"id": 1}})
        result = runner.invoke(app, ["check", str(doc), "--schema", str(schema_file)])

        assert result.exit_code == EXIT_USAGE

    def test_invalid_json_document(self, tmp_path: Path, schema_file: Path):
        doc = tmp_path / "staging.json"
        doc.write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["check", str(doc), "--schema", str(schema_file)])

        assert result.exit_code == EXIT_USAGE
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_nan_literal_is_rejected(self, tmp_path: Path, schema_file: Path):
        doc = tmp_path / "staging.json"
        doc.write_text('{"table": "voters", "fields": {"id": NaN}}', encoding="utf-8")
        result = runner.invoke(app, ["check", str(doc), "--schema", str(schema_file)])

        assert result.exit_code == EXIT_USAGE

    def test_invalid_registry_file(self, tmp_path: Path):
        bad_schema = _write(
            tmp_path,
            {"tables": [{"name": "t", "fields": ["a"], "primaryKeyFields": ["id"]}]},
            name="schema.json",
        )
        doc = _write(tmp_path, {"table": "t", "fields": {"a": 1}})
        result = runner.invoke(app, ["check", str(doc), "--schema", str(bad_schema)])

        assert result.exit_code == EXIT_USAGE
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_schema_from_environment(
        self, tmp_path: Path, schema_file: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("STAGING_SCHEMA_PATH", str(schema_file))
        doc = _write(tmp_path, {"table": "voters", "fields": {"id": 1}})
        result = runner.invoke(app, ["check", str(doc), "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["query"] == "SELECT id FROM voters"

    def test_missing_schema(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("STAGING_SCHEMA_PATH", raising=False)
        monkeypatch.chdir(tmp_path)
        doc = _write(tmp_path, {"table": "voters", "fields": {"id": 1}})
        result = runner.invoke(app, ["check", str(doc)])

        assert result.exit_code == EXIT_USAGE


def test_tables_lists_registry(schema_file: Path):
    result = runner.invoke(app, ["tables", "--schema", str(schema_file)])

    assert result.exit_code == 0, result.output
    for name in ("voters", "reps", "districts", "audit_log"):
        assert name in result.stdout


def test_info(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("APP_ENV", "test")
    result = runner.invoke(app, ["info"])

    assert result.exit_code == 0
    assert "env=test" in result.stdout


def test_tables_with_unparseable_registry(tmp_path: Path):
    bad_schema = tmp_path / "schema.json"
    bad_schema.write_text("{", encoding="utf-8")
    result = runner.invoke(app, ["tables", "--schema", str(bad_schema)])

    assert result.exit_code == EXIT_USAGE
    assert result.exception is None or isinstance(result.exception, SystemExit)
