"""Reader factory.

Resolves a named profile from db.toml (or a raw connection URL) to the
async reader for its dialect.

Usage:
    from schema_sync.factory import get_reader

    reader = get_reader("prod")
    tables = await reader.get_tables()
    await reader.close()
"""

from pathlib import Path
from urllib.parse import quote

from sqlalchemy.engine import make_url

from schema_sync.adapters.engine import AsyncSchemaReader
from schema_sync.adapters.mysql import AsyncMySqlReader
from schema_sync.adapters.postgres import AsyncPostgresReader
from schema_sync.config.loader import load_db_config
from schema_sync.config.models import DatabaseProfile
from schema_sync.dialects import Dialect
from schema_sync.errors import NotFoundError, ValidationError

_READERS: dict[Dialect, type[AsyncSchemaReader]] = {
    Dialect.MYSQL: AsyncMySqlReader,
    Dialect.POSTGRESQL: AsyncPostgresReader,
}

PASSWORD_PLACEHOLDER = "[YOUR-PASSWORD]"


class ProfileNotFoundError(NotFoundError):
    """Raised when a named profile is missing from db.toml."""

    pass


def _override_database(url: str, database: str) -> str:
    """Return *url* pointing at *database* instead of its own database."""
    return make_url(url).set(database=database).render_as_string(hide_password=False)


def resolve_url(profile: DatabaseProfile, database: str | None = None) -> str:
    """Resolve profile URL with password substitution.

    Args:
        profile: Database profile from config
        database: Optional database name replacing the one in the URL

    Returns:
        Connection URL with password substituted
    """
    url = profile.url
    if profile.db_password and PASSWORD_PLACEHOLDER in url:
        url = url.replace(PASSWORD_PLACEHOLDER, quote(profile.db_password, safe=""))
    if database:
        url = _override_database(url, database)
    return url


def get_profile(profile_name: str, config_path: Path | None = None) -> DatabaseProfile:
    """Look up *profile_name* in db.toml.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ProfileNotFoundError: If the profile is not defined
    """
    config = load_db_config(config_path)
    if profile_name not in config.profiles:
        available = ", ".join(config.profiles.keys()) or "(none)"
        raise ProfileNotFoundError(
            f"Profile '{profile_name}' not found in db.toml. "
            f"Available: {available}"
        )
    return config.profiles[profile_name]


def get_reader(
    profile_name: str | None = None,
    database_url: str | None = None,
    database: str | None = None,
    config_path: Path | None = None,
) -> AsyncSchemaReader:
    """Create the reader for a profile or a raw connection URL.

    Exactly one of ``profile_name`` and ``database_url`` is used; a direct
    ``database_url`` wins when both are given.  The dialect comes from the
    profile's ``dialect`` setting, else from the URL scheme.

    Args:
        profile_name: Profile name from db.toml.
        database_url: Connection URL, bypassing db.toml.
        database: Optional database name overriding the one in the URL.
        config_path: Optional path to db.toml.

    Returns:
        ``AsyncMySqlReader`` or ``AsyncPostgresReader``.

    Raises:
        ProfileNotFoundError: If the profile is not defined.
        ValidationError: If neither argument is given or the dialect is
            unsupported.

    Example:
        >>> reader = get_reader(database_url="mysql://root@localhost/app")
        >>> reader.dialect
        <Dialect.MYSQL: 'mysql'>
    """
    if database_url is not None:
        profile = DatabaseProfile(url=database_url)
    elif profile_name is not None:
        profile = get_profile(profile_name, config_path)
    else:
        raise ValidationError("Either profile_name or database_url is required")

    try:
        dialect = profile.resolve_dialect()
    except ValueError as e:
        raise ValidationError(str(e)) from e

    reader_cls = _READERS[dialect]
    return reader_cls(resolve_url(profile, database))
