"""MySQL / MariaDB DDL generator.

Backtick identifiers, ``AUTO_INCREMENT`` and ``COMMENT`` column modifiers,
inline index clauses in CREATE TABLE, and ``MODIFY COLUMN`` restating the
full column definition.

Usage:
    from schema_sync.dialects.mysql import MySqlGenerator

    generator = MySqlGenerator()
    generator.quote_identifier("user`name")
    # '`user``name`'
"""

from schema_sync.dialects.base import Dialect, SqlGenerator
from schema_sync.schema.models import Column, TableSchema


class MySqlGenerator(SqlGenerator):
    """DDL generator for MySQL and MariaDB."""

    dialect = Dialect.MYSQL

    def quote_identifier(self, name: str) -> str:
        return "`" + name.replace("`", "``") + "`"

    def _column_definition(self, column: Column) -> str:
        """Quoted name, type and modifiers (NOT NULL, DEFAULT, AUTO_INCREMENT, COMMENT)."""
        definition = f"{self.quote_identifier(column.name)} {column.data_type}"
        if not column.nullable:
            definition += " NOT NULL"
        if column.default_value is not None:
            definition += f" DEFAULT {column.default_value}"
        if column.auto_increment:
            definition += " AUTO_INCREMENT"
        if column.comment is not None:
            definition += f" COMMENT {self._quote_literal(column.comment)}"
        return definition

    def generate_create_table(self, table: TableSchema) -> str:
        parts = [f"  {self._column_definition(col)}" for col in table.columns]

        if table.primary_key is not None:
            parts.append(f"  {self._primary_key_clause(table.primary_key.columns)}")

        # MySQL accepts index definitions inline
        for idx in table.indexes:
            parts.append(
                f"  {self._index_keyword(idx)} {self.quote_identifier(idx.name)} "
                f"({self._column_list(idx.columns)})"
            )

        parts.extend(self._constraint_parts(table))
        return self._wrap_create_table(self.quote_identifier(table.name), parts)

    def generate_add_column(self, table: str, column: Column) -> str:
        return (
            f"ALTER TABLE {self.quote_identifier(table)} "
            f"ADD COLUMN {self._column_definition(column)};"
        )

    def generate_modify_column(self, table: str, column: Column) -> str:
        return (
            f"ALTER TABLE {self.quote_identifier(table)} "
            f"MODIFY COLUMN {self._column_definition(column)};"
        )

    def generate_drop_index(self, table: str, index_name: str) -> str:
        return (
            f"DROP INDEX {self.quote_identifier(index_name)} "
            f"ON {self.quote_identifier(table)};"
        )

    def generate_drop_foreign_key(self, table: str, fk_name: str) -> str:
        return (
            f"ALTER TABLE {self.quote_identifier(table)} "
            f"DROP FOREIGN KEY {self.quote_identifier(fk_name)};"
        )

    def generate_drop_unique(self, table: str, uc_name: str) -> str:
        # Unique constraints are backed by an index of the same name
        return (
            f"ALTER TABLE {self.quote_identifier(table)} "
            f"DROP INDEX {self.quote_identifier(uc_name)};"
        )
