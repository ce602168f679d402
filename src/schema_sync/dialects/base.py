"""SQL generator base class.

Defines ``SqlGenerator``, the method set every dialect implements, plus the
string-building helpers that are identical across dialects once identifier
quoting is applied.  All methods are pure: no I/O, no state.

Usage:
    from schema_sync.dialects import get_generator

    generator = get_generator("postgresql")
    generator.generate_drop_table("users")
    # 'DROP TABLE "users";'
"""

from abc import ABC, abstractmethod
from enum import Enum

from schema_sync.schema.models import (
    Column,
    ForeignKey,
    Index,
    TableSchema,
    UniqueConstraint,
)


class Dialect(str, Enum):
    """Supported SQL dialects."""

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"


class SqlGenerator(ABC):
    """Dialect-specific DDL generator.

    Every identifier emitted goes through ``quote_identifier()``.  Default
    values are emitted verbatim; comment text is placed in a single-quoted
    literal with embedded quotes doubled.
    """

    dialect: Dialect

    # ------------------------------------------------------------------
    # Dialect-specific operations
    # ------------------------------------------------------------------

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Wrap *name* in the dialect's identifier delimiter."""

    @abstractmethod
    def generate_create_table(self, table: TableSchema) -> str:
        """CREATE TABLE for *table*, including keys and constraints."""

    @abstractmethod
    def generate_add_column(self, table: str, column: Column) -> str:
        """ALTER TABLE ... ADD COLUMN."""

    @abstractmethod
    def generate_modify_column(self, table: str, column: Column) -> str:
        """ALTER TABLE statement changing an existing column."""

    @abstractmethod
    def generate_drop_index(self, table: str, index_name: str) -> str:
        """DROP INDEX."""

    @abstractmethod
    def generate_drop_foreign_key(self, table: str, fk_name: str) -> str:
        """Drop a foreign key constraint."""

    @abstractmethod
    def generate_drop_unique(self, table: str, uc_name: str) -> str:
        """Drop a unique constraint."""

    # ------------------------------------------------------------------
    # Shared operations
    # ------------------------------------------------------------------

    def generate_create_table_statements(self, table: TableSchema) -> list[str]:
        """Statements that create *table*, one per list entry."""
        return [self.generate_create_table(table)]

    def generate_drop_table(self, table_name: str) -> str:
        return f"DROP TABLE {self.quote_identifier(table_name)};"

    def generate_drop_column(self, table: str, column_name: str) -> str:
        return (
            f"ALTER TABLE {self.quote_identifier(table)} "
            f"DROP COLUMN {self.quote_identifier(column_name)};"
        )

    def generate_add_index(self, table: str, index: Index) -> str:
        return (
            f"CREATE {self._index_keyword(index)} "
            f"{self.quote_identifier(index.name)} "
            f"ON {self.quote_identifier(table)} ({self._column_list(index.columns)});"
        )

    def generate_add_foreign_key(self, table: str, fk: ForeignKey) -> str:
        return (
            f"ALTER TABLE {self.quote_identifier(table)} "
            f"ADD {self._foreign_key_clause(fk)};"
        )

    def generate_add_unique(self, table: str, uc: UniqueConstraint) -> str:
        return (
            f"ALTER TABLE {self.quote_identifier(table)} "
            f"ADD {self._unique_clause(uc)};"
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _column_list(self, names: list[str]) -> str:
        """Comma-separated quoted identifiers."""
        return ", ".join(self.quote_identifier(name) for name in names)

    @staticmethod
    def _index_keyword(index: Index) -> str:
        return "UNIQUE INDEX" if index.unique else "INDEX"

    @staticmethod
    def _quote_literal(value: str) -> str:
        """Single-quoted string literal with embedded quotes doubled."""
        return "'" + value.replace("'", "''") + "'"

    def _primary_key_clause(self, columns: list[str]) -> str:
        return f"PRIMARY KEY ({self._column_list(columns)})"

    def _unique_clause(self, uc: UniqueConstraint) -> str:
        return (
            f"CONSTRAINT {self.quote_identifier(uc.name)} "
            f"UNIQUE ({self._column_list(uc.columns)})"
        )

    def _foreign_key_clause(self, fk: ForeignKey) -> str:
        return (
            f"CONSTRAINT {self.quote_identifier(fk.name)} "
            f"FOREIGN KEY ({self._column_list(fk.columns)}) "
            f"REFERENCES {self.quote_identifier(fk.ref_table)} "
            f"({self._column_list(fk.ref_columns)}) "
            f"ON DELETE {fk.on_delete} ON UPDATE {fk.on_update}"
        )

    def _constraint_parts(self, table: TableSchema) -> list[str]:
        """Unique then foreign key clauses for CREATE TABLE."""
        parts = [f"  {self._unique_clause(uc)}" for uc in table.unique_constraints]
        parts.extend(f"  {self._foreign_key_clause(fk)}" for fk in table.foreign_keys)
        return parts

    @staticmethod
    def _wrap_create_table(quoted_name: str, parts: list[str]) -> str:
        return f"CREATE TABLE {quoted_name} (\n" + ",\n".join(parts) + "\n);"
