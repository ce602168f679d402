"""PostgreSQL DDL generator.

Double-quoted identifiers, ``SERIAL`` for auto-increment columns, and
indexes emitted as separate ``CREATE INDEX`` statements (PostgreSQL has no
inline index syntax in CREATE TABLE).  Column comments are not emitted.

The modify path only changes the column type (``ALTER COLUMN ... TYPE``);
nullability and defaults are not restated.
"""

from schema_sync.dialects.base import Dialect, SqlGenerator
from schema_sync.schema.models import Column, TableSchema

SERIAL_TYPE = "SERIAL"


class PostgresGenerator(SqlGenerator):
    """DDL generator for PostgreSQL."""

    dialect = Dialect.POSTGRESQL

    def quote_identifier(self, name: str) -> str:
        return '"' + name.replace('"', '""') + '"'

    @staticmethod
    def _column_type(column: Column) -> str:
        return SERIAL_TYPE if column.auto_increment else column.data_type

    def _column_definition(self, column: Column) -> str:
        definition = f"{self.quote_identifier(column.name)} {self._column_type(column)}"
        # SERIAL is implicitly NOT NULL
        if not column.nullable and not column.auto_increment:
            definition += " NOT NULL"
        if column.default_value is not None:
            definition += f" DEFAULT {column.default_value}"
        return definition

    def generate_create_table_statements(self, table: TableSchema) -> list[str]:
        parts = [f"  {self._column_definition(col)}" for col in table.columns]

        if table.primary_key is not None:
            parts.append(f"  {self._primary_key_clause(table.primary_key.columns)}")

        parts.extend(self._constraint_parts(table))
        statements = [self._wrap_create_table(self.quote_identifier(table.name), parts)]
        statements.extend(self.generate_add_index(table.name, idx) for idx in table.indexes)
        return statements

    def generate_create_table(self, table: TableSchema) -> str:
        return "\n".join(self.generate_create_table_statements(table))

    def generate_add_column(self, table: str, column: Column) -> str:
        return (
            f"ALTER TABLE {self.quote_identifier(table)} "
            f"ADD COLUMN {self._column_definition(column)};"
        )

    def generate_modify_column(self, table: str, column: Column) -> str:
        return (
            f"ALTER TABLE {self.quote_identifier(table)} "
            f"ALTER COLUMN {self.quote_identifier(column.name)} "
            f"TYPE {self._column_type(column)};"
        )

    def generate_drop_index(self, table: str, index_name: str) -> str:
        # Index names live in the schema namespace, not the table's
        return f"DROP INDEX {self.quote_identifier(index_name)};"

    def generate_drop_foreign_key(self, table: str, fk_name: str) -> str:
        return (
            f"ALTER TABLE {self.quote_identifier(table)} "
            f"DROP CONSTRAINT {self.quote_identifier(fk_name)};"
        )

    def generate_drop_unique(self, table: str, uc_name: str) -> str:
        return (
            f"ALTER TABLE {self.quote_identifier(table)} "
            f"DROP CONSTRAINT {self.quote_identifier(uc_name)};"
        )
