"""Dialect-aware DDL generation.

Provides the ``SqlGenerator`` base class, one generator per supported
``Dialect``, and ``get_generator()`` to look one up by dialect.

Usage:
    from schema_sync.dialects import Dialect, get_generator

    generator = get_generator(Dialect.MYSQL)
    sql = generator.generate_create_table(table)
"""

from schema_sync.dialects.base import Dialect, SqlGenerator
from schema_sync.dialects.mysql import MySqlGenerator
from schema_sync.dialects.postgres import PostgresGenerator

_GENERATORS: dict[Dialect, type[SqlGenerator]] = {
    Dialect.MYSQL: MySqlGenerator,
    Dialect.POSTGRESQL: PostgresGenerator,
}

# Accepted spellings when a dialect comes from config or a URL scheme
DIALECT_ALIASES: dict[str, Dialect] = {
    "mysql": Dialect.MYSQL,
    "mariadb": Dialect.MYSQL,
    "postgresql": Dialect.POSTGRESQL,
    "postgres": Dialect.POSTGRESQL,
}


def parse_dialect(value: "Dialect | str") -> Dialect:
    """Resolve a dialect name or alias (case-insensitive) to a ``Dialect``.

    Raises:
        ValueError: If *value* names no supported dialect.
    """
    if isinstance(value, Dialect):
        return value
    try:
        return DIALECT_ALIASES[value.lower()]
    except KeyError:
        supported = ", ".join(sorted(DIALECT_ALIASES))
        raise ValueError(f"Unsupported dialect '{value}'. Supported: {supported}") from None


def get_generator(dialect: "Dialect | str") -> SqlGenerator:
    """Return a generator instance for *dialect*.

    Raises:
        ValueError: If *dialect* is not supported.
    """
    return _GENERATORS[parse_dialect(dialect)]()


__all__ = [
    "Dialect",
    "SqlGenerator",
    "MySqlGenerator",
    "PostgresGenerator",
    "DIALECT_ALIASES",
    "parse_dialect",
    "get_generator",
]
