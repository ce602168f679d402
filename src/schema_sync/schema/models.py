"""Pydantic models for schema snapshots and schema diffs.

This module contains schema-domain models:
- Snapshot models: Column, PrimaryKey, Index, ForeignKey,
  UniqueConstraint, TableSchema
- Diff models: DiffType, DiffItem, DiffResult

Snapshot models are frozen value types compared by structural equality
(every field).  Diff models are produced by
``schema_sync.schema.comparator``.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ============================================================================
# Schema Snapshot Models
# ============================================================================


class Column(BaseModel):
    """Schema for a table column.

    ``data_type`` and ``default_value`` are dialect-native strings, passed
    through to generated SQL verbatim.

    Example:
        >>> col = Column(name="id", data_type="INT", nullable=False)
        >>> col.auto_increment
        False
    """

    model_config = ConfigDict(frozen=True)

    name: str
    data_type: str
    nullable: bool = True
    default_value: str | None = None
    auto_increment: bool = False
    comment: str | None = None
    ordinal_position: int = 0


class PrimaryKey(BaseModel):
    """Primary key of a table."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    columns: list[str] = Field(default_factory=list)


class Index(BaseModel):
    """Schema for a non-primary index."""

    model_config = ConfigDict(frozen=True)

    name: str
    columns: list[str] = Field(default_factory=list)
    unique: bool = False
    index_type: str = "BTREE"


class ForeignKey(BaseModel):
    """Schema for a foreign key constraint.

    ``columns`` and ``ref_columns`` are parallel sequences.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    columns: list[str] = Field(default_factory=list)
    ref_table: str
    ref_columns: list[str] = Field(default_factory=list)
    on_delete: str = "NO ACTION"
    on_update: str = "NO ACTION"


class UniqueConstraint(BaseModel):
    """Schema for a named unique constraint."""

    model_config = ConfigDict(frozen=True)

    name: str
    columns: list[str] = Field(default_factory=list)


class TableSchema(BaseModel):
    """Schema for a database table.

    Example:
        >>> table = TableSchema(
        ...     name="users",
        ...     columns=[Column(name="id", data_type="INT", nullable=False)],
        ...     primary_key=PrimaryKey(columns=["id"]),
        ... )
        >>> [c.name for c in table.columns]
        ['id']
    """

    model_config = ConfigDict(frozen=True)

    name: str
    columns: list[Column] = Field(default_factory=list)
    primary_key: PrimaryKey | None = None
    indexes: list[Index] = Field(default_factory=list)
    foreign_keys: list[ForeignKey] = Field(default_factory=list)
    unique_constraints: list[UniqueConstraint] = Field(default_factory=list)


# ============================================================================
# Diff Models
# ============================================================================


class DiffType(str, Enum):
    """Kind of structural discrepancy between two snapshots."""

    TABLE_ADDED = "table_added"
    TABLE_REMOVED = "table_removed"
    COLUMN_ADDED = "column_added"
    COLUMN_REMOVED = "column_removed"
    COLUMN_MODIFIED = "column_modified"
    INDEX_ADDED = "index_added"
    INDEX_REMOVED = "index_removed"
    INDEX_MODIFIED = "index_modified"
    FOREIGN_KEY_ADDED = "foreign_key_added"
    FOREIGN_KEY_REMOVED = "foreign_key_removed"
    FOREIGN_KEY_MODIFIED = "foreign_key_modified"
    UNIQUE_CONSTRAINT_ADDED = "unique_constraint_added"
    UNIQUE_CONSTRAINT_REMOVED = "unique_constraint_removed"
    UNIQUE_CONSTRAINT_MODIFIED = "unique_constraint_modified"


class DiffItem(BaseModel):
    """One classified discrepancy paired with ready-to-execute SQL.

    ``statements`` holds the individual statements to execute, in order
    (e.g. drop then recreate for a modified index).  ``sql`` is the same
    statements joined by newlines, for display.  An item built with only
    ``sql`` treats it as a single statement.  ``selected`` is toggled by
    the caller and is never read by the comparator.
    """

    id: str
    diff_type: DiffType
    table_name: str
    object_name: str | None = None
    source_def: str | None = None
    target_def: str | None = None
    sql: str
    statements: list[str] = Field(default_factory=list)
    selected: bool = True

    @model_validator(mode="after")
    def _default_statements(self) -> "DiffItem":
        if not self.statements:
            self.statements = [self.sql]
        return self


class DiffResult(BaseModel):
    """Result of comparing two schema snapshots.

    Example:
        >>> result = DiffResult(source_table_count=2, target_table_count=2)
        >>> result.is_empty
        True
        >>> result.format_report()
        'Schemas are identical'
    """

    items: list[DiffItem] = Field(default_factory=list)
    source_table_count: int = 0
    target_table_count: int = 0

    @property
    def is_empty(self) -> bool:
        """True if the snapshots have no structural differences."""
        return not self.items

    def selected_items(self) -> list[DiffItem]:
        """Items with ``selected`` set, in list order."""
        return [item for item in self.items if item.selected]

    def selected_sql(self) -> list[str]:
        """Flattened statements of all selected items, in execution order."""
        statements: list[str] = []
        for item in self.selected_items():
            statements.extend(item.statements)
        return statements

    def format_sql(self) -> str:
        """SQL of all selected items as one script, blank-line separated."""
        return "\n\n".join(item.sql for item in self.selected_items())

    def format_report(self) -> str:
        """Format diff result as human-readable report."""
        if self.is_empty:
            return "Schemas are identical"

        lines = [
            f"{len(self.items)} differences "
            f"({self.source_table_count} source tables, "
            f"{self.target_table_count} target tables):"
        ]
        for item in self.items:
            marker = "x" if item.selected else " "
            target = item.table_name
            if item.object_name:
                target = f"{item.table_name}.{item.object_name}"
            lines.append(f"  [{marker}] {item.id}. {item.diff_type.value} {target}")

        return "\n".join(lines)
