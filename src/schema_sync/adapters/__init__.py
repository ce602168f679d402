"""Database adapters package.

Provides the ``SchemaReader`` and ``StatementExecutor`` Protocols and the
concrete async readers for PostgreSQL (``asyncpg``) and MySQL/MariaDB
(``aiomysql``).

Usage:
    from schema_sync.adapters import SchemaReader, AsyncPostgresReader
"""

from schema_sync.adapters.base import SchemaReader, StatementExecutor
from schema_sync.adapters.engine import AsyncSchemaReader
from schema_sync.adapters.mysql import AsyncMySqlReader
from schema_sync.adapters.postgres import AsyncPostgresReader

__all__ = [
    "SchemaReader",
    "StatementExecutor",
    "AsyncSchemaReader",
    "AsyncMySqlReader",
    "AsyncPostgresReader",
]
