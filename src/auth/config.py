"""
Configuration management for the auth package.

Session issuance lives outside this service; only verification of the
bearer tokens it issues is configured here.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.utils.logger import logger


class AuthSettings(BaseSettings):
    """Bearer token verification settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="AUTH_"
    )

    jwt_secret: str | None = Field(
        default=None, description="Shared secret used to verify HS256 access tokens"
    )
    jwt_algorithm: str = Field(default="HS256", description="Accepted JWT algorithm")


_auth_settings: AuthSettings | None = None


def get_auth_settings() -> AuthSettings:
    """
    Get the global auth settings instance.

    Returns:
        AuthSettings: The global settings instance
    """
    global _auth_settings
    if _auth_settings is None:
        _auth_settings = AuthSettings()
        if not _auth_settings.jwt_secret:
            logger.warning("AUTH_JWT_SECRET is not set; authenticated endpoints will fail")
    return _auth_settings


def set_auth_settings(settings: AuthSettings) -> None:
    """
    Set the global auth settings instance.

    Args:
        settings: The settings to set
    """
    global _auth_settings
    _auth_settings = settings
