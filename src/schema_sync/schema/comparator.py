"""Schema comparison using name-keyed lookups.

Compares a source snapshot against a target snapshot and classifies every
discrepancy as a ``DiffItem`` carrying SQL that moves the target toward the
source.  Pure logic -- no I/O, no database connections.

Usage:
    from schema_sync.dialects import get_generator
    from schema_sync.schema.comparator import diff_schemas

    result = diff_schemas(source_tables, target_tables, get_generator("mysql"))
    for item in result.items:
        print(item.id, item.diff_type.value, item.sql)
"""

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, TypeVar

from schema_sync.schema.models import (
    Column,
    DiffItem,
    DiffResult,
    DiffType,
    ForeignKey,
    Index,
    TableSchema,
    UniqueConstraint,
)

if TYPE_CHECKING:
    from schema_sync.dialects.base import SqlGenerator

logger = logging.getLogger(__name__)

T = TypeVar("T", TableSchema, Column, Index, ForeignKey, UniqueConstraint)


class _DiffCollector:
    """Accumulates diff items and assigns sequential ids.

    One collector lives for exactly one comparison call.
    """

    def __init__(self) -> None:
        self.items: list[DiffItem] = []
        self._counter = 0

    def emit(
        self,
        diff_type: DiffType,
        table_name: str,
        statements: list[str],
        object_name: str | None = None,
        source_def: str | None = None,
        target_def: str | None = None,
    ) -> None:
        self._counter += 1
        self.items.append(
            DiffItem(
                id=str(self._counter),
                diff_type=diff_type,
                table_name=table_name,
                object_name=object_name,
                source_def=source_def,
                target_def=target_def,
                sql="\n".join(statements),
                statements=statements,
                selected=True,
            )
        )


def _by_name(objects: Iterable[T], where: str, kind: str) -> dict[str, T]:
    """Build a name -> object lookup; later duplicates overwrite earlier ones."""
    lookup: dict[str, T] = {}
    for obj in objects:
        if obj.name in lookup:
            logger.warning(
                f"Duplicate {kind} name '{obj.name}' in {where}; "
                f"only the last definition is compared"
            )
        lookup[obj.name] = obj
    return lookup


def _join(columns: list[str]) -> str:
    return ", ".join(columns)


def _fk_def(fk: ForeignKey) -> str:
    return f"-> {fk.ref_table}"


def _reconcile(
    collector: _DiffCollector,
    table_name: str,
    kind: str,
    source_objects: list[T],
    target_objects: list[T],
    types: tuple[DiffType, DiffType, DiffType],
    describe: Callable[[T], str],
    add_sql: Callable[[T], list[str]],
    modify_sql: Callable[[T], list[str]],
    drop_sql: Callable[[str], list[str]],
) -> None:
    """Three-way reconciliation of one child-object kind of a table.

    Source objects are walked in order, emitting Added (name absent from
    target) or Modified (name present, objects unequal).  Target objects
    are then walked in order, emitting Removed for names absent from source.
    """
    added, removed, modified = types
    source_lookup = _by_name(source_objects, f"source table '{table_name}'", kind)
    target_lookup = _by_name(target_objects, f"target table '{table_name}'", kind)

    for obj in source_objects:
        target_obj = target_lookup.get(obj.name)
        if target_obj is None:
            collector.emit(
                added,
                table_name,
                add_sql(obj),
                object_name=obj.name,
                source_def=describe(obj),
            )
        elif obj != target_obj:
            collector.emit(
                modified,
                table_name,
                modify_sql(obj),
                object_name=obj.name,
                source_def=describe(obj),
                target_def=describe(target_obj),
            )

    for obj in target_objects:
        if obj.name not in source_lookup:
            collector.emit(
                removed,
                table_name,
                drop_sql(obj.name),
                object_name=obj.name,
                target_def=describe(obj),
            )


def _compare_tables(
    source: TableSchema,
    target: TableSchema,
    generator: "SqlGenerator",
    collector: _DiffCollector,
) -> None:
    """Emit column, index, foreign key and unique constraint diffs for one table."""
    name = source.name

    _reconcile(
        collector,
        name,
        "column",
        source.columns,
        target.columns,
        (DiffType.COLUMN_ADDED, DiffType.COLUMN_REMOVED, DiffType.COLUMN_MODIFIED),
        describe=lambda col: col.data_type,
        add_sql=lambda col: [generator.generate_add_column(name, col)],
        modify_sql=lambda col: [generator.generate_modify_column(name, col)],
        drop_sql=lambda col_name: [generator.generate_drop_column(name, col_name)],
    )

    _reconcile(
        collector,
        name,
        "index",
        source.indexes,
        target.indexes,
        (DiffType.INDEX_ADDED, DiffType.INDEX_REMOVED, DiffType.INDEX_MODIFIED),
        describe=lambda idx: _join(idx.columns),
        add_sql=lambda idx: [generator.generate_add_index(name, idx)],
        modify_sql=lambda idx: [
            generator.generate_drop_index(name, idx.name),
            generator.generate_add_index(name, idx),
        ],
        drop_sql=lambda idx_name: [generator.generate_drop_index(name, idx_name)],
    )

    _reconcile(
        collector,
        name,
        "foreign key",
        source.foreign_keys,
        target.foreign_keys,
        (
            DiffType.FOREIGN_KEY_ADDED,
            DiffType.FOREIGN_KEY_REMOVED,
            DiffType.FOREIGN_KEY_MODIFIED,
        ),
        describe=_fk_def,
        add_sql=lambda fk: [generator.generate_add_foreign_key(name, fk)],
        modify_sql=lambda fk: [
            generator.generate_drop_foreign_key(name, fk.name),
            generator.generate_add_foreign_key(name, fk),
        ],
        drop_sql=lambda fk_name: [generator.generate_drop_foreign_key(name, fk_name)],
    )

    _reconcile(
        collector,
        name,
        "unique constraint",
        source.unique_constraints,
        target.unique_constraints,
        (
            DiffType.UNIQUE_CONSTRAINT_ADDED,
            DiffType.UNIQUE_CONSTRAINT_REMOVED,
            DiffType.UNIQUE_CONSTRAINT_MODIFIED,
        ),
        describe=lambda uc: _join(uc.columns),
        add_sql=lambda uc: [generator.generate_add_unique(name, uc)],
        modify_sql=lambda uc: [
            generator.generate_drop_unique(name, uc.name),
            generator.generate_add_unique(name, uc),
        ],
        drop_sql=lambda uc_name: [generator.generate_drop_unique(name, uc_name)],
    )


def compare_schemas(
    source: list[TableSchema],
    target: list[TableSchema],
    generator: "SqlGenerator",
) -> list[DiffItem]:
    """Compare two schema snapshots and return the ordered diff items.

    Emission order:

    1. ``TABLE_ADDED`` for source tables missing from target (source order)
    2. ``TABLE_REMOVED`` for target tables missing from source (target order)
    3. For each table present in both (source order): column, index,
       foreign key, then unique constraint diffs.  Within a kind, Added and
       Modified follow source order; Removed follows target order.

    Ids are ``"1"``, ``"2"``, ... in emission order, every item starts
    ``selected``.  Never raises on well-typed input; duplicate names are
    logged and the last definition wins.

    Args:
        source: Desired schema snapshot.
        target: Current schema snapshot of the database to be changed.
        generator: SQL generator bound to the target's dialect.

    Returns:
        List of ``DiffItem``; empty when the snapshots are identical.

    Examples:
        >>> from schema_sync.dialects import get_generator
        >>> from schema_sync.schema.models import Column, TableSchema
        >>> users = TableSchema(name="users", columns=[Column(name="id", data_type="INT")])
        >>> compare_schemas([users], [users], get_generator("mysql"))
        []
        >>> items = compare_schemas([users], [], get_generator("mysql"))
        >>> items[0].diff_type.value, items[0].id
        ('table_added', '1')
    """
    collector = _DiffCollector()

    source_map = _by_name(source, "source snapshot", "table")
    target_map = _by_name(target, "target snapshot", "table")

    for table in source:
        if table.name not in target_map:
            collector.emit(
                DiffType.TABLE_ADDED,
                table.name,
                generator.generate_create_table_statements(table),
                source_def=f"{len(table.columns)} columns",
            )

    for table in target:
        if table.name not in source_map:
            collector.emit(
                DiffType.TABLE_REMOVED,
                table.name,
                [generator.generate_drop_table(table.name)],
                target_def=f"{len(table.columns)} columns",
            )

    for source_table in source:
        target_table = target_map.get(source_table.name)
        if target_table is not None:
            _compare_tables(source_table, target_table, generator, collector)

    return collector.items


def diff_schemas(
    source: list[TableSchema],
    target: list[TableSchema],
    generator: "SqlGenerator",
) -> DiffResult:
    """Compare two snapshots and wrap the items with table counts.

    Args:
        source: Desired schema snapshot.
        target: Current schema snapshot of the database to be changed.
        generator: SQL generator bound to the target's dialect.

    Returns:
        ``DiffResult`` with ``items``, ``source_table_count`` and
        ``target_table_count``.
    """
    return DiffResult(
        items=compare_schemas(source, target, generator),
        source_table_count=len(source),
        target_table_count=len(target),
    )


def find_duplicate_names(tables: list[TableSchema]) -> dict[str, list[str]]:
    """Report identity keys that occur more than once.

    The comparator tolerates duplicates (last definition wins); callers that
    prefer to reject malformed snapshots can check this first.

    Args:
        tables: A schema snapshot.

    Returns:
        Dict mapping a location (``"<schema>"`` for duplicate table names,
        otherwise the table name) to the sorted duplicated names found
        there.  Empty when the snapshot is well formed.

    Example:
        >>> from schema_sync.schema.models import Column, TableSchema
        >>> t = TableSchema(name="t", columns=[
        ...     Column(name="a", data_type="INT"),
        ...     Column(name="a", data_type="TEXT"),
        ... ])
        >>> find_duplicate_names([t])
        {'t': ['a']}
    """

    def duplicates(names: Iterable[str]) -> set[str]:
        seen: set[str] = set()
        dupes: set[str] = set()
        for n in names:
            if n in seen:
                dupes.add(n)
            seen.add(n)
        return dupes

    result: dict[str, list[str]] = {}

    table_dupes = duplicates(t.name for t in tables)
    if table_dupes:
        result["<schema>"] = sorted(table_dupes)

    for table in tables:
        dupes: set[str] = set()
        for group in (
            table.columns,
            table.indexes,
            table.foreign_keys,
            table.unique_constraints,
        ):
            dupes |= duplicates(obj.name for obj in group)
        if dupes:
            # A duplicated table name merges into one entry
            result[table.name] = sorted(dupes.union(result.get(table.name, [])))

    return result
