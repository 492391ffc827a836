"""
Dependencies for the Twilio provider gateway.
"""

from twilio.rest import Client

from src.integrations.twilio.base import ProviderGateway
from src.integrations.twilio.client import TwilioComplianceClient
from src.integrations.twilio.config import get_twilio_settings
from src.integrations.twilio.gateway import TwilioGateway, UnavailableGateway


def get_twilio_client() -> Client:
    """
    Get global Twilio client (shared platform account).

    Returns:
        Configured Twilio REST client
    """
    settings = get_twilio_settings()
    return Client(settings.account_sid, settings.auth_token)


def get_provider_gateway() -> ProviderGateway:
    """
    FastAPI dependency for the provider gateway.

    Returns an ``UnavailableGateway`` when Twilio credentials are not set so
    the application keeps serving local reads.

    Returns:
        ProviderGateway: The configured gateway
    """
    settings = get_twilio_settings()
    if not settings.is_configured:
        return UnavailableGateway()

    client = TwilioComplianceClient(
        get_twilio_client(),
        timeout=settings.request_timeout,
        numbers_api_base_url=settings.numbers_api_base_url,
    )
    return TwilioGateway(client, settings)
