from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from staging_review.domain.query import CompiledQuery
from staging_review.domain.schema import TableRegistry
from staging_review.domain.validator import ValidationResult


def print_registry(registry: TableRegistry, console: Optional[Console] = None) -> None:
    """
    Render the declared tables as a rich table, sorted by name.
    """
    console = console or Console()

    if not len(registry):
        console.print("[yellow]No tables declared.[/yellow]")
        return

    table = Table(title="Staging Table Schemas", box=box.ROUNDED)
    table.add_column("Table", style="cyan", no_wrap=True)
    table.add_column("Primary Key", style="magenta")
    table.add_column("Fields", style="green")

    for name in sorted(registry):
        schema = registry[name]
        pk = ", ".join(schema.primary_key_fields) or "[red]none[/red]"
        table.add_row(name, pk, ", ".join(schema.fields))

    console.print(table)


def print_check(
    result: ValidationResult,
    compiled: Optional[CompiledQuery] = None,
    key: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Render a validation outcome and, for accepted records, the compiled search.
    """
    console = console or Console()

    if not result:
        error = result.error
        table = Table(title="[red]Staging rejected[/red]", box=box.ROUNDED, show_header=False)
        table.add_column("Attribute", style="bold")
        table.add_column("Value")
        if error is not None:
            table.add_row("Kind", error.kind.value)
            table.add_row("Message", str(error))
            table.add_row("Table", error.table or "-")
            table.add_row("Key", error.key or "-")
        console.print(table)
        return

    table = Table(title="[green]Staging accepted[/green]", box=box.ROUNDED, show_header=False)
    table.add_column("Attribute", style="bold")
    table.add_column("Value", overflow="fold")
    if key is not None:
        table.add_row("Key", key)
    if compiled is not None:
        table.add_row("Query", compiled.text)
        table.add_row(
            "Args",
            ", ".join(f"${i}={arg!r}" for i, arg in enumerate(compiled.args, start=1)) or "-",
        )
    console.print(table)


__all__ = ["print_registry", "print_check"]
