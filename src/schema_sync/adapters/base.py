"""Protocols for schema snapshot providers and SQL execution sinks.

Defines ``SchemaReader`` (read-only introspection of one connection) and
``StatementExecutor`` (applies SQL to one connection).  All methods are
``async def``.  The concrete readers in this package implement both.

Usage:
    from schema_sync.adapters.base import SchemaReader, StatementExecutor

    async def snapshot(reader: SchemaReader) -> list[TableSchema]:
        await reader.test_connection()
        return await reader.get_tables()
"""

from typing import Protocol

from schema_sync.schema.models import TableSchema


class SchemaReader(Protocol):
    """Read-only schema snapshot provider for one connection."""

    async def test_connection(self) -> None:
        """Verify the connection is usable.

        Raises:
            DatabaseConnectionError: If the database cannot be reached.
        """
        ...

    async def list_databases(self) -> list[str]:
        """Names of user databases on the server, sorted, system schemas excluded."""
        ...

    async def get_tables(self) -> list[TableSchema]:
        """Fully populated snapshot of every base table in the connected database.

        Columns, primary key, indexes, foreign keys, and unique constraints
        are all resolved before returning.

        Raises:
            DatabaseError: If an introspection query fails.
        """
        ...


class StatementExecutor(Protocol):
    """Execution sink for generated SQL."""

    async def execute(self, sql: str) -> None:
        """Execute one SQL statement against the target connection.

        Raises:
            DatabaseError: With the driver's error message if the statement fails.
        """
        ...

    async def close(self) -> None:
        """Close the connection and release resources."""
        ...
