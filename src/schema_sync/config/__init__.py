"""Configuration management: profiles, TOML loading, and config models.

Usage:
    >>> from schema_sync.config import load_db_config, DatabaseProfile, DatabaseConfig
"""

from schema_sync.config.loader import load_db_config
from schema_sync.config.models import DatabaseConfig, DatabaseProfile

__all__ = ["load_db_config", "DatabaseConfig", "DatabaseProfile"]
