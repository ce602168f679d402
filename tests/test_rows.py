"""Tests for folding introspection rows into schema models."""

from schema_sync.adapters.rows import (
    build_foreign_keys,
    build_indexes,
    build_primary_key,
    build_unique_constraints,
)
from schema_sync.schema.models import ForeignKey, Index, PrimaryKey, UniqueConstraint


class TestBuildPrimaryKey:
    """build_primary_key() folds (constraint, column) rows."""

    def test_no_rows_is_none(self) -> None:
        assert build_primary_key([]) is None

    def test_composite_key_keeps_row_order(self) -> None:
        rows = [("PRIMARY", "tenant_id"), ("PRIMARY", "id")]
        assert build_primary_key(rows) == PrimaryKey(
            name="PRIMARY", columns=["tenant_id", "id"]
        )


class TestBuildIndexes:
    """build_indexes() groups rows per index name."""

    def test_groups_columns(self) -> None:
        rows = [
            ("idx_a", False, "a", "BTREE"),
            ("idx_bc", True, "b", "BTREE"),
            ("idx_bc", True, "c", "BTREE"),
        ]
        assert build_indexes(rows) == [
            Index(name="idx_a", columns=["a"], unique=False, index_type="BTREE"),
            Index(name="idx_bc", columns=["b", "c"], unique=True, index_type="BTREE"),
        ]

    def test_unique_flag_coerced_to_bool(self) -> None:
        # MySQL returns 0/1 for "non_unique = 0"
        indexes = build_indexes([("ux", 1, "a", "HASH")])
        assert indexes[0].unique is True
        assert indexes[0].index_type == "HASH"

    def test_empty(self) -> None:
        assert build_indexes([]) == []


class TestBuildForeignKeys:
    """build_foreign_keys() pairs local and referenced columns."""

    def test_composite_foreign_key(self) -> None:
        rows = [
            ("fk_line", "order_id", "orders", "id", "CASCADE", "NO ACTION"),
            ("fk_line", "tenant_id", "orders", "tenant_id", "CASCADE", "NO ACTION"),
        ]
        assert build_foreign_keys(rows) == [
            ForeignKey(
                name="fk_line",
                columns=["order_id", "tenant_id"],
                ref_table="orders",
                ref_columns=["id", "tenant_id"],
                on_delete="CASCADE",
                on_update="NO ACTION",
            )
        ]


class TestBuildUniqueConstraints:
    """build_unique_constraints() groups rows per constraint."""

    def test_groups_in_row_order(self) -> None:
        rows = [("uq_b", "b"), ("uq_a", "a1"), ("uq_a", "a2")]
        assert build_unique_constraints(rows) == [
            UniqueConstraint(name="uq_b", columns=["b"]),
            UniqueConstraint(name="uq_a", columns=["a1", "a2"]),
        ]
