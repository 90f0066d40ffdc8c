from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError

from staging_review.config import get_settings
from staging_review.domain.errors import StagingValidationError
from staging_review.domain.query import QueryCompiler
from staging_review.domain.schema import TableRegistry, load_registry
from staging_review.domain.staging import Staging
from staging_review.domain.validator import SchemaValidator
from staging_review.reporter import print_check, print_registry
from staging_review.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Staging review: validate staged records and compile their searches.")
log = get_logger(__name__)

SCHEMA_OPTION = typer.Option(
    None,
    "--schema",
    help="Registry JSON file (default: STAGING_SCHEMA_PATH).",
)


def _registry(schema: Optional[Path]) -> TableRegistry:
    path = schema or get_settings().schema_path
    if path is None:
        typer.echo("No schema registry configured (use --schema or STAGING_SCHEMA_PATH).", err=True)
        raise typer.Exit(code=2)
    try:
        return load_registry(path)
    except (ValueError, ValidationError) as exc:
        typer.echo(f"Malformed schema registry {path}: {exc}", err=True)
        raise typer.Exit(code=2)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite number {name} is not allowed")


def _has_primary_key(registry: TableRegistry, staging: Staging) -> bool:
    schema = registry.get_schema(staging.table)
    return bool(schema.primary_key_fields) and all(
        pk in staging.fields for pk in schema.primary_key_fields
    )


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"env={settings.app_env} | log_level={settings.log_level} json={settings.log_json} | "
        f"schema={settings.schema_path or '-'}"
    )


@app.command()
def tables(schema: Optional[Path] = SCHEMA_OPTION) -> None:
    """
    List the declared tables.
    """
    print_registry(_registry(schema))


@app.command()
def check(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Staging JSON document."),
    schema: Optional[Path] = SCHEMA_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Print the outcome as JSON."),
) -> None:
    """
    Validate a staging document and show its compiled search.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    registry = _registry(schema)

    try:
        with file.open("r", encoding="utf-8") as f:
            raw = json.load(f, parse_constant=_reject_constant)
        staging = Staging.model_validate(raw)
    except (ValueError, ValidationError) as exc:
        typer.echo(f"Malformed staging document: {exc}", err=True)
        raise typer.Exit(code=2)

    result = SchemaValidator(registry).validate(staging)
    compiled = None
    key = None
    if result:
        try:
            compiled = QueryCompiler(registry).compile_staging(staging)
        except StagingValidationError as exc:
            log.warning("Search compilation failed", extra={"table": staging.table, "error": str(exc)})
            typer.echo(f"Cannot compile search: {exc}", err=True)
            raise typer.Exit(code=1)
        if _has_primary_key(registry, staging):
            key = staging.key_string(registry)

    if as_json:
        payload = {"valid": result.ok, "error": result.error.to_dict() if result.error else None}
        if compiled is not None:
            payload.update({"query": compiled.text, "args": compiled.args, "key": key})
        typer.echo(json.dumps(payload, indent=2, default=str))
    else:
        print_check(result, compiled=compiled, key=key)

    if not result:
        raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
