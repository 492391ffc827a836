"""
Twilio account configuration.

The credentials belong to the platform's single Twilio account and are shared
by every tenant. When they are absent the application still starts; the
provider gateway then reports itself as unavailable.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.config import get_app_settings
from src.utils.logger import logger


class TwilioSettings(BaseSettings):
    """Global Twilio account configuration."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="TWILIO_"
    )

    account_sid: str | None = Field(default=None, description="Twilio Account SID (ACxxx)")
    auth_token: str | None = Field(default=None, description="Twilio Auth Token")
    a2p_policy_sid: str = Field(
        default="RNdfbf3fae0e1107f8abad0571f5833516",
        description="TrustHub policy SID for A2P secondary customer profiles",
    )
    a2p_trust_bundle_sid: str | None = Field(
        default=None,
        description=(
            "TrustHub A2P trust bundle SID for brand registration; "
            "the customer profile SID is sent when unset"
        ),
    )
    request_timeout: float = Field(
        default=30.0, gt=0, description="Timeout in seconds applied to each provider call"
    )
    numbers_api_base_url: str = Field(
        default="https://numbers.twilio.com",
        description="Base URL of the Numbers v1 (porting) API",
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.account_sid and self.auth_token)


class TwilioWebhooks:
    """Callback URLs handed to Twilio when creating resources."""

    def __init__(self):
        self._base_url = get_app_settings().server_base_url

    @property
    def inbound_sms(self) -> str | None:
        """Inbound SMS URL for messaging services, if a public base URL is set."""
        if not self._base_url:
            return None
        return f"{self._base_url}/api/webhooks/twilio/sms"


_twilio_settings: TwilioSettings | None = None


def get_twilio_settings() -> TwilioSettings:
    """
    Get the global Twilio settings instance.

    Returns:
        TwilioSettings: The global settings instance
    """
    global _twilio_settings
    if _twilio_settings is None:
        _twilio_settings = TwilioSettings()
        logger.info(
            "TwilioSettings loaded",
            configured=_twilio_settings.is_configured,
            request_timeout=_twilio_settings.request_timeout,
        )
    return _twilio_settings


def set_twilio_settings(settings: TwilioSettings) -> None:
    """
    Set the global Twilio settings instance.

    Args:
        settings: The settings to set
    """
    global _twilio_settings
    _twilio_settings = settings
