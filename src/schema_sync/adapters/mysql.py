"""Async MySQL / MariaDB schema reader.

Introspects the connection's current database (``DATABASE()``) through
information_schema using SQLAlchemy's async engine with the ``aiomysql``
driver.
"""

from types import MappingProxyType

from schema_sync.adapters.engine import AsyncSchemaReader
from schema_sync.dialects import Dialect
from schema_sync.schema.models import Column


class AsyncMySqlReader(AsyncSchemaReader):
    """MySQL implementation of ``SchemaReader`` and ``StatementExecutor``.

    Args:
        database_url: MySQL connection URL.  ``mysql://``,
            ``mysql+pymysql://`` and ``mariadb://`` are normalized to
            ``mysql+aiomysql://``.
        **engine_kwargs: Additional keyword arguments forwarded to
            ``create_async_engine_pooled``.
    """

    dialect = Dialect.MYSQL
    schemes = ("mysql", "mysql+pymysql", "mariadb")
    async_scheme = "mysql+aiomysql"
    connect_args = MappingProxyType({"connect_timeout": 10})

    DATABASES_QUERY = """
        SELECT CAST(schema_name AS CHAR)
        FROM information_schema.schemata
        WHERE schema_name NOT IN ('information_schema', 'performance_schema', 'mysql', 'sys')
        ORDER BY schema_name
    """

    TABLES_QUERY = """
        SELECT CAST(table_name AS CHAR)
        FROM information_schema.tables
        WHERE table_schema = DATABASE()
          AND table_type = 'BASE TABLE'
        ORDER BY table_name
    """

    COLUMNS_QUERY = """
        SELECT
            CAST(column_name AS CHAR),
            CAST(column_type AS CHAR),
            CAST(is_nullable AS CHAR),
            CAST(column_default AS CHAR),
            CAST(extra AS CHAR),
            CAST(column_comment AS CHAR),
            ordinal_position
        FROM information_schema.columns
        WHERE table_schema = DATABASE()
          AND table_name = :table_name
        ORDER BY ordinal_position
    """

    PRIMARY_KEY_QUERY = """
        SELECT CAST(constraint_name AS CHAR), CAST(column_name AS CHAR)
        FROM information_schema.key_column_usage
        WHERE table_schema = DATABASE()
          AND table_name = :table_name
          AND constraint_name = 'PRIMARY'
        ORDER BY ordinal_position
    """

    # Unique constraints are also reported here as unique indexes; they are
    # excluded so each appears once, as a UniqueConstraint
    INDEXES_QUERY = """
        SELECT
            CAST(s.index_name AS CHAR),
            s.non_unique = 0,
            CAST(s.column_name AS CHAR),
            CAST(s.index_type AS CHAR)
        FROM information_schema.statistics s
        WHERE s.table_schema = DATABASE()
          AND s.table_name = :table_name
          AND s.index_name != 'PRIMARY'
          AND NOT EXISTS (
              SELECT 1 FROM information_schema.table_constraints tc
              WHERE tc.table_schema = s.table_schema
                AND tc.table_name = s.table_name
                AND tc.constraint_name = s.index_name
                AND tc.constraint_type IN ('UNIQUE', 'FOREIGN KEY')
          )
        ORDER BY s.index_name, s.seq_in_index
    """

    FOREIGN_KEYS_QUERY = """
        SELECT
            CAST(kcu.constraint_name AS CHAR),
            CAST(kcu.column_name AS CHAR),
            CAST(kcu.referenced_table_name AS CHAR),
            CAST(kcu.referenced_column_name AS CHAR),
            CAST(rc.delete_rule AS CHAR),
            CAST(rc.update_rule AS CHAR)
        FROM information_schema.key_column_usage kcu
        JOIN information_schema.referential_constraints rc
            ON kcu.constraint_name = rc.constraint_name
            AND kcu.table_schema = rc.constraint_schema
        WHERE kcu.table_schema = DATABASE()
          AND kcu.table_name = :table_name
          AND kcu.referenced_table_name IS NOT NULL
        ORDER BY kcu.constraint_name, kcu.ordinal_position
    """

    UNIQUE_CONSTRAINTS_QUERY = """
        SELECT CAST(tc.constraint_name AS CHAR), CAST(kcu.column_name AS CHAR)
        FROM information_schema.table_constraints tc
        JOIN information_schema.key_column_usage kcu
            ON tc.constraint_name = kcu.constraint_name
            AND tc.table_schema = kcu.table_schema
            AND tc.table_name = kcu.table_name
        WHERE tc.table_schema = DATABASE()
          AND tc.table_name = :table_name
          AND tc.constraint_type = 'UNIQUE'
        ORDER BY tc.constraint_name, kcu.ordinal_position
    """

    def _column_from_row(self, row: tuple) -> Column:
        """Map a COLUMNS_QUERY row to a ``Column``.

        ``extra`` containing ``auto_increment`` marks the column
        auto-increment; an empty comment becomes ``None``.
        """
        name, data_type, is_nullable, default, extra, comment, position = row
        return Column(
            name=name,
            data_type=data_type,
            nullable=(is_nullable == "YES"),
            default_value=default,
            auto_increment="auto_increment" in (extra or "").lower(),
            comment=comment or None,
            ordinal_position=position,
        )
