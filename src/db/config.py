"""
Configuration management for database connections.

This module handles database configuration using Pydantic settings.
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.utils.logger import logger


class DatabaseSettings(BaseSettings):
    """Database configuration using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="DB_"
    )

    url: str | None = Field(
        default=None,
        description="Full async SQLAlchemy URL; overrides the discrete fields below",
    )
    host: str | None = Field(default=None, description="Database host")
    port: int = Field(default=5432, description="Database port")
    name: str | None = Field(default=None, description="Database name")
    username: str | None = Field(default=None, description="Database username")
    password: str | None = Field(default=None, description="Database user password")
    ssl: bool = Field(default=True, description="Require SSL for connections")

    # Connection pool settings
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum overflow connections")
    echo: bool = Field(default=False, description="Echo SQL statements to logs")

    @model_validator(mode="after")
    def validate_connection_fields(self) -> "DatabaseSettings":
        """Require either a full URL or host/name/username/password."""
        if self.url:
            return self
        missing = [
            field
            for field in ("host", "name", "username", "password")
            if not getattr(self, field)
        ]
        if missing:
            raise ValueError(
                f"Database configuration incomplete. Set DB_URL or: "
                f"{', '.join(f'DB_{m.upper()}' for m in missing)}"
            )
        return self

    @property
    def is_sqlite(self) -> bool:
        return bool(self.url and self.url.startswith("sqlite"))

    def get_sync_url(self) -> str:
        """
        Get synchronous database URL for psycopg2 (Alembic migrations).

        Returns:
            str: Database connection URL for sync operations
        """
        if self.url:
            return self.url.replace("+asyncpg", "+psycopg2").replace("+aiosqlite", "")
        query = "?sslmode=require" if self.ssl else ""
        return (
            f"postgresql+psycopg2://{self.username}:{self.password}"
            f"@{self.host}:{self.port}/{self.name}{query}"
        )

    def get_async_url(self) -> str:
        """
        Get asynchronous database URL for asyncpg.

        Returns:
            str: Database connection URL for async operations
        """
        if self.url:
            return self.url
        query = "?ssl=require" if self.ssl else ""
        return (
            f"postgresql+asyncpg://{self.username}:{self.password}"
            f"@{self.host}:{self.port}/{self.name}{query}"
        )


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
        logger.info(
            "DatabaseSettings loaded",
            host=_db_settings.host,
            port=_db_settings.port,
            database=_db_settings.name,
            url_override=bool(_db_settings.url),
        )
    return _db_settings

