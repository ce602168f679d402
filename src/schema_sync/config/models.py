"""Pydantic models for connection profile configuration."""

from pydantic import BaseModel, field_validator

from schema_sync.dialects import Dialect, parse_dialect


# ============================================================================
# Configuration Models
# ============================================================================


class DatabaseProfile(BaseModel):
    """Database connection profile from db.toml."""

    url: str
    description: str = ""
    db_password: str | None = None  # For [YOUR-PASSWORD] placeholder substitution
    dialect: Dialect | None = None  # Inferred from the URL scheme when omitted

    @field_validator("dialect", mode="before")
    @classmethod
    def _parse_dialect(cls, value: object) -> object:
        if isinstance(value, str):
            return parse_dialect(value)
        return value

    def resolve_dialect(self) -> Dialect:
        """Return the configured dialect, or infer it from the URL scheme.

        Raises:
            ValueError: If the URL scheme names no supported dialect.
        """
        if self.dialect is not None:
            return self.dialect
        scheme = self.url.split("://", 1)[0]
        # "postgresql+asyncpg" -> "postgresql"
        return parse_dialect(scheme.split("+", 1)[0])


class DatabaseConfig(BaseModel):
    """Complete database configuration from db.toml."""

    profiles: dict[str, DatabaseProfile]
