from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environments."""

    DEVELOPMENT = "dev"
    STAGING = "staging"
    PRODUCTION = "prod"


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Current environment (dev, staging, or prod)",
    )
    client_base_url: str = Field(
        default="http://localhost:5173", description="Frontend base URL (CORS origin)"
    )
    server_base_url: str | None = Field(
        default=None,
        description="Public server base URL used to build provider callback URLs",
    )
    compliance_contact_email: str = Field(
        default="compliance@healthsms.com",
        description="Fallback email for customer profiles when the user has none",
    )


_app_settings: AppSettings | None = None


def get_app_settings() -> AppSettings:
    global _app_settings
    if _app_settings is None:
        _app_settings = AppSettings()
    return _app_settings


def set_app_settings(settings: AppSettings) -> None:
    """Override the global app settings (used by tests)."""
    global _app_settings
    _app_settings = settings


def get_client_base_url() -> str:
    """Get the client base URL from settings."""
    settings = get_app_settings()
    return settings.client_base_url
