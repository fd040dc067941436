"""
Configuration management for database connections.

This module handles database configuration using Pydantic settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from crtlo.utils.logger import logger


class DatabaseSettings(BaseSettings):
    """Database configuration using Pydantic settings."""

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    database_url: str = Field(description="PostgreSQL connection URL")

    # Connection pool settings
    db_pool_size: int = Field(default=5, description="Connection pool size")
    db_max_overflow: int = Field(
        default=10, description="Maximum overflow connections"
    )
    db_echo: bool = Field(default=False, description="Echo SQL statements to logs")

    def _strip_scheme(self) -> str:
        _, _, rest = self.database_url.partition("://")
        return rest

    def get_sync_url(self) -> str:
        """
        Get synchronous database URL for psycopg2 (used by Alembic).

        Returns:
            str: Database connection URL for sync operations
        """
        return f"postgresql+psycopg2://{self._strip_scheme()}"

    def get_async_url(self) -> str:
        """
        Get asynchronous database URL for asyncpg.

        `sslmode` is a libpq parameter; asyncpg spells it `ssl`.

        Returns:
            str: Database connection URL for async operations
        """
        url = f"postgresql+asyncpg://{self._strip_scheme()}"
        return url.replace("sslmode=", "ssl=")


# Global settings instance
_db_settings: DatabaseSettings | None = None


def get_db_settings() -> DatabaseSettings:
    """
    Get the global database settings instance.

    Returns:
        DatabaseSettings: The global settings instance
    """
    global _db_settings
    if _db_settings is None:
        _db_settings = DatabaseSettings()
        logger.info("DatabaseSettings loaded", pool_size=_db_settings.db_pool_size)
    return _db_settings


def set_db_settings(settings: DatabaseSettings) -> None:
    """
    Set the global database settings instance.

    Useful for testing.

    Args:
        settings: The settings to set
    """
    global _db_settings
    _db_settings = settings
