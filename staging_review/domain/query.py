"""
Search-query compiler.

Turns a table name and a map of equality predicates into a parameterized query:

    SELECT <pk1, pk2, ...> FROM <table> WHERE a = $1 AND b = $2

Predicates are emitted in sorted key order and `args[i - 1]` always binds `$i`,
so the text and argument vector are reproducible regardless of how the input
map was built. Table and column names come from the registry (plain
identifiers only); values never reach the query text.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, NamedTuple, Sequence

from staging_review.domain.errors import ErrorKind, FieldError
from staging_review.domain.schema import FieldVar, TableRegistry
from staging_review.domain.staging import NestedSearch, Staging


class CompiledQuery(NamedTuple):
    pk_names: List[str]
    pk_vars: List[FieldVar]
    text: str
    args: List[Any]


def bind_row(pk_vars: Sequence[FieldVar], row: Sequence[Any]) -> Dict[str, Any]:
    """
    Assign a result row to its binding slots by position.

    Returns the bound values keyed by column name.
    """
    if len(pk_vars) != len(row):
        raise ValueError(f"row has {len(row)} columns, expected {len(pk_vars)}")
    for var, value in zip(pk_vars, row):
        var.value = value
    return {var.name: var.value for var in pk_vars}


class QueryCompiler:
    def __init__(self, registry: TableRegistry) -> None:
        self.registry = registry

    def compile(self, table: str, search_by: Mapping[str, Any]) -> CompiledQuery:
        """
        Compile equality predicates on `table` into a `$N`-style query.

        An empty `search_by` produces a query without a WHERE clause.

        Raises
        ------
        SchemaError
            Unknown table, or a table without primary key fields.
        FieldError
            A predicate key that is not a declared field of `table`.
        """
        schema = self.registry.get_schema(table)

        where: List[str] = []
        args: List[Any] = []
        for i, key in enumerate(sorted(search_by), start=1):
            if not schema.is_field(key):
                raise FieldError(
                    f"invalid searchBy key: {key}",
                    kind=ErrorKind.INVALID_SEARCH_KEY,
                    table=table,
                    key=key,
                )
            where.append(f"{key} = ${i}")
            args.append(search_by[key])

        pks = schema.pk_names()
        text = f"SELECT {', '.join(pks)} FROM {schema.name}"
        if where:
            text += " WHERE " + " AND ".join(where)
        return CompiledQuery(pk_names=pks, pk_vars=schema.pk_vars(), text=text, args=args)

    def compile_staging(self, staging: Staging) -> CompiledQuery:
        return self.compile(staging.table, staging.search_by)

    def compile_nested(self, nested: NestedSearch) -> CompiledQuery:
        return self.compile(nested.table, nested.search_by)


__all__ = ["CompiledQuery", "QueryCompiler", "bind_row"]
