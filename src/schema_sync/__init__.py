"""schema-sync: Compare database schemas and generate dialect-aware sync SQL.

Compares a source schema snapshot against a target, classifies every
difference, and pairs each with the MySQL or PostgreSQL statement that
moves the target toward the source.  Includes async readers, multi-profile
configuration, and a CLI.

Usage:
    from schema_sync import diff_schemas, get_generator, TableSchema, Column
    from schema_sync import compare_profiles, execute_sync, load_db_config
"""

__version__ = "0.1.0"

# Schema models and comparison
from schema_sync.schema.comparator import compare_schemas, diff_schemas, find_duplicate_names
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

# Dialects
from schema_sync.dialects import Dialect, SqlGenerator, get_generator

# Adapters
from schema_sync.adapters import (
    AsyncMySqlReader,
    AsyncPostgresReader,
    SchemaReader,
    StatementExecutor,
)

# Config
from schema_sync.config.loader import load_db_config
from schema_sync.config.models import DatabaseConfig, DatabaseProfile

# Factory
from schema_sync.factory import ProfileNotFoundError, get_reader, resolve_url

# Sync
from schema_sync.schema.sync import (
    SyncResult,
    compare_profiles,
    execute_statements,
    execute_sync,
    save_sql_file,
)

# Errors
from schema_sync.errors import (
    DatabaseConnectionError,
    DatabaseError,
    InternalError,
    NotFoundError,
    SchemaSyncError,
    StatementExecutionError,
    ValidationError,
)

__all__ = [
    # Schema
    "Column",
    "PrimaryKey",
    "Index",
    "ForeignKey",
    "UniqueConstraint",
    "TableSchema",
    "DiffType",
    "DiffItem",
    "DiffResult",
    "compare_schemas",
    "diff_schemas",
    "find_duplicate_names",
    # Dialects
    "Dialect",
    "SqlGenerator",
    "get_generator",
    # Adapters
    "SchemaReader",
    "StatementExecutor",
    "AsyncMySqlReader",
    "AsyncPostgresReader",
    # Config
    "load_db_config",
    "DatabaseProfile",
    "DatabaseConfig",
    # Factory
    "get_reader",
    "resolve_url",
    "ProfileNotFoundError",
    # Sync
    "SyncResult",
    "compare_profiles",
    "execute_statements",
    "execute_sync",
    "save_sql_file",
    # Errors
    "SchemaSyncError",
    "DatabaseConnectionError",
    "DatabaseError",
    "ValidationError",
    "NotFoundError",
    "InternalError",
    "StatementExecutionError",
]
