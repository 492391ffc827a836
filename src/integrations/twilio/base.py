"""
Abstract provider gateway.

The gateway is the only component that talks to the external telecom
provider. Implementations raise ``ProviderError`` subclasses and nothing else:
``ProviderUnavailableError`` when not configured, ``RemoteCallFailedError``
(or its ``ProviderNotFoundError`` / ``ProviderTimeoutError`` subclasses) when
a call was attempted and failed.
"""

from abc import ABC, abstractmethod

from src.integrations.twilio.schemas import (
    BrandRegistrationResult,
    BusinessIdentity,
    CampaignRegistrationRequest,
    CampaignRegistrationResult,
    PortabilityResult,
    PortInStatus,
    PortInSubmission,
)


class ProviderGateway(ABC):
    """Capability interface over the telecom provider's compliance and porting APIs."""

    @property
    def is_configured(self) -> bool:
        return True

    # ------------------------------------------------------------------
    # Brand (TrustHub customer profile + A2P brand)
    # ------------------------------------------------------------------

    @abstractmethod
    async def create_customer_profile(self, friendly_name: str, email: str) -> str:
        """Create a customer profile; returns its SID."""

    @abstractmethod
    async def create_business_identity(self, identity: BusinessIdentity) -> str:
        """Create the business-information end-user; returns its SID."""

    @abstractmethod
    async def attach_identity(self, profile_sid: str, identity_sid: str) -> None:
        """Assign the end-user to the customer profile."""

    @abstractmethod
    async def submit_profile_for_review(self, profile_sid: str) -> None:
        """Move the customer profile to pending-review."""

    @abstractmethod
    async def create_brand_registration(
        self, profile_sid: str, brand_type: str
    ) -> BrandRegistrationResult:
        """Register an A2P brand against a reviewed customer profile."""

    @abstractmethod
    async def fetch_brand_status(self, brand_sid: str) -> BrandRegistrationResult:
        """Fetch the current state of a brand registration."""

    # ------------------------------------------------------------------
    # Campaign (messaging service + A2P use-case)
    # ------------------------------------------------------------------

    @abstractmethod
    async def get_or_create_messaging_service(
        self, friendly_name: str, existing_sid: str | None = None
    ) -> str:
        """Return `existing_sid` when given, otherwise create a messaging service."""

    @abstractmethod
    async def create_campaign(
        self, messaging_service_sid: str, request: CampaignRegistrationRequest
    ) -> CampaignRegistrationResult:
        """Register an A2P use-case under a messaging service."""

    @abstractmethod
    async def list_campaigns(
        self, messaging_service_sid: str
    ) -> list[CampaignRegistrationResult]:
        """List A2P use-cases registered under a messaging service."""

    @abstractmethod
    async def associate_number(
        self, messaging_service_sid: str, phone_number_sid: str
    ) -> None:
        """Attach an owned number to a messaging service."""

    # ------------------------------------------------------------------
    # Porting
    # ------------------------------------------------------------------

    @abstractmethod
    async def check_portability(self, phone_number: str) -> PortabilityResult:
        """Check whether a number can be ported in."""

    @abstractmethod
    async def submit_port_in(self, submission: PortInSubmission) -> str:
        """Submit a port-in request; returns the provider's request SID."""

    @abstractmethod
    async def fetch_port_in(self, port_in_request_sid: str) -> PortInStatus:
        """Fetch the current state of a port-in request."""
