"""Assemble schema models from introspection result rows.

Introspection queries return one row per (object, column) pair, ordered by
object name then column position.  These helpers fold those rows into
model objects, preserving row order.  Pure functions, shared by all
dialect readers.
"""

from collections.abc import Iterable, Sequence
from typing import Any

from schema_sync.schema.models import (
    ForeignKey,
    Index,
    PrimaryKey,
    UniqueConstraint,
)

Row = Sequence[Any]


def build_primary_key(rows: Iterable[Row]) -> PrimaryKey | None:
    """Fold ``(constraint_name, column_name)`` rows into a primary key.

    Returns:
        ``None`` when there are no rows (table has no primary key).
    """
    name: str | None = None
    columns: list[str] = []
    for constraint_name, column_name in rows:
        if name is None:
            name = constraint_name
        columns.append(column_name)

    if not columns:
        return None
    return PrimaryKey(name=name, columns=columns)


def build_indexes(rows: Iterable[Row]) -> list[Index]:
    """Fold ``(index_name, is_unique, column_name, index_type)`` rows into indexes."""
    entries: dict[str, dict[str, Any]] = {}
    for name, is_unique, column_name, index_type in rows:
        entry = entries.setdefault(
            name,
            {"unique": bool(is_unique), "index_type": index_type, "columns": []},
        )
        entry["columns"].append(column_name)

    return [
        Index(
            name=name,
            columns=entry["columns"],
            unique=entry["unique"],
            index_type=entry["index_type"],
        )
        for name, entry in entries.items()
    ]


def build_foreign_keys(rows: Iterable[Row]) -> list[ForeignKey]:
    """Fold ``(name, column, ref_table, ref_column, on_delete, on_update)`` rows."""
    entries: dict[str, dict[str, Any]] = {}
    for name, column, ref_table, ref_column, on_delete, on_update in rows:
        entry = entries.setdefault(
            name,
            {
                "ref_table": ref_table,
                "columns": [],
                "ref_columns": [],
                "on_delete": on_delete,
                "on_update": on_update,
            },
        )
        entry["columns"].append(column)
        entry["ref_columns"].append(ref_column)

    return [ForeignKey(name=name, **entry) for name, entry in entries.items()]


def build_unique_constraints(rows: Iterable[Row]) -> list[UniqueConstraint]:
    """Fold ``(constraint_name, column_name)`` rows into unique constraints."""
    entries: dict[str, list[str]] = {}
    for name, column_name in rows:
        entries.setdefault(name, []).append(column_name)

    return [UniqueConstraint(name=name, columns=cols) for name, cols in entries.items()]
