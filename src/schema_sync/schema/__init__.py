"""Schema snapshot models, comparison, and cross-profile sync.

Provides the snapshot and diff models, schema comparison
(``compare_schemas``, ``diff_schemas``), and profile-level orchestration
(``compare_profiles``, ``execute_sync``).

Usage:
    from schema_sync.schema import diff_schemas, TableSchema, Column
    from schema_sync.schema import compare_profiles, execute_sync
"""

from schema_sync.schema.comparator import (
    compare_schemas,
    diff_schemas,
    find_duplicate_names,
)
from schema_sync.schema.models import (
    Column,
    DiffItem,
    DiffResult,
    DiffType,
    ForeignKey,
    Index,
    PrimaryKey,
    TableSchema,
    UniqueConstraint,
)
from schema_sync.schema.sync import (
    SyncResult,
    compare_profiles,
    execute_statements,
    execute_sync,
    save_sql_file,
)

__all__ = [
    "compare_schemas",
    "diff_schemas",
    "find_duplicate_names",
    "Column",
    "PrimaryKey",
    "Index",
    "ForeignKey",
    "UniqueConstraint",
    "TableSchema",
    "DiffType",
    "DiffItem",
    "DiffResult",
    "SyncResult",
    "compare_profiles",
    "execute_statements",
    "execute_sync",
    "save_sql_file",
]
