"""
Campaign registration.

Requires an approved brand. The messaging service is created at most once per
organization and reused afterwards. Numbers are attached to it one request
per number; a failure on one number is recorded and does not stop the rest.
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from src.compliance.constants import (
    CAMPAIGN_MESSAGE_FLOW,
    CAMPAIGN_MESSAGE_SAMPLES,
    DEFAULT_CAMPAIGN_DESCRIPTION,
    DEFAULT_USE_CASE,
    FRIENDLY_NAME_SUFFIX,
    A2PStatus,
    ComplianceMessage,
    RegistrationStatus,
)
from src.compliance.schemas import (
    CampaignRegistrationBody,
    CampaignRegistrationResponse,
    NumberAssociationResult,
)
from src.db.organizations.model import Organization
from src.db.organizations.repository import OrganizationRepository
from src.db.phone_numbers.repository import PhoneNumberRepository
from src.exceptions import (
    BrandNotApprovedError,
    BrandNotRegisteredError,
    NotFoundError,
)
from src.integrations.twilio.base import ProviderGateway
from src.integrations.twilio.exceptions import (
    ProviderError,
    ProviderUnavailableError,
    RemoteCallFailedError,
)
from src.integrations.twilio.schemas import CampaignRegistrationRequest
from src.utils.logger import logger


class CampaignRegistrationManager:
    """Registers an organization's messaging campaign against its approved brand."""

    def __init__(self, session: AsyncSession, gateway: ProviderGateway):
        """
        Initialize the manager.

        Args:
            session: Async database session
            gateway: Provider gateway
        """
        self.session = session
        self.gateway = gateway
        self.organizations = OrganizationRepository(session)
        self.phone_numbers = PhoneNumberRepository(session)

    async def register_campaign(
        self, org_id: str, request: CampaignRegistrationBody
    ) -> CampaignRegistrationResponse:
        """
        Register a campaign and attach the organization's numbers to it.

        Args:
            org_id: Organization to register
            request: Optional description / use-case overrides

        Returns:
            CampaignRegistrationResponse with per-number association results

        Raises:
            ProviderUnavailableError: If the gateway is not configured
            NotFoundError: If the organization does not exist
            BrandNotRegisteredError: If no brand has been registered
            BrandNotApprovedError: If the brand is not approved yet
        """
        if not self.gateway.is_configured:
            raise ProviderUnavailableError(operation="register_campaign")

        org = await self.organizations.get_by_id(org_id)
        if org is None:
            raise NotFoundError("Organization not found")
        if not org.brand_registration_id:
            raise BrandNotRegisteredError()
        if org.brand_status != RegistrationStatus.APPROVED.value:
            raise BrandNotApprovedError()

        try:
            messaging_service_sid = await self._ensure_messaging_service(org)
            campaign = await self.gateway.create_campaign(
                messaging_service_sid,
                CampaignRegistrationRequest(
                    brand_registration_sid=org.brand_registration_id,
                    description=request.description or DEFAULT_CAMPAIGN_DESCRIPTION,
                    message_flow=CAMPAIGN_MESSAGE_FLOW,
                    message_samples=CAMPAIGN_MESSAGE_SAMPLES,
                    use_case=request.use_case or DEFAULT_USE_CASE,
                    has_embedded_links=False,
                    has_embedded_phone=True,
                ),
            )
        except RemoteCallFailedError as e:
            logger.error(
                "Campaign registration did not complete",
                organization_id=org_id,
                operation=e.operation,
                error=str(e),
            )
            return CampaignRegistrationResponse(
                campaign_sid=org.campaign_id,
                campaign_status=org.campaign_status,
                messaging_service_sid=org.messaging_service_id,
                message=ComplianceMessage.CAMPAIGN_RETRYABLE.value,
            )

        campaign_status = campaign.campaign_status or RegistrationStatus.PENDING.value
        await self.organizations.update_registration(
            org, campaign_id=campaign.sid, campaign_status=campaign_status
        )
        await self.session.commit()
        logger.info(
            "Campaign registered",
            organization_id=org_id,
            campaign_sid=campaign.sid,
            campaign_status=campaign_status,
        )

        associations = await self._associate_numbers(org_id, messaging_service_sid)
        await self.session.commit()

        return CampaignRegistrationResponse(
            campaign_sid=campaign.sid,
            campaign_status=campaign_status,
            messaging_service_sid=messaging_service_sid,
            message=(
                ComplianceMessage.CAMPAIGN_APPROVED.value
                if campaign_status == RegistrationStatus.APPROVED.value
                else ComplianceMessage.CAMPAIGN_SUBMITTED.value
            ),
            associations=associations,
        )

    async def _ensure_messaging_service(self, org: Organization) -> str:
        """Reuse the organization's messaging service or create and persist one."""
        messaging_service_sid = await self.gateway.get_or_create_messaging_service(
            friendly_name=f"{org.name} - {FRIENDLY_NAME_SUFFIX}",
            existing_sid=org.messaging_service_id,
        )
        if messaging_service_sid != org.messaging_service_id:
            await self.organizations.update_registration(
                org, messaging_service_id=messaging_service_sid
            )
            await self.session.commit()
            logger.info(
                "Messaging service created",
                organization_id=org.id,
                messaging_service_sid=messaging_service_sid,
            )
        return messaging_service_sid

    async def _associate_numbers(
        self, org_id: str, messaging_service_sid: str
    ) -> list[NumberAssociationResult]:
        numbers = await self.phone_numbers.list_with_provider_id(org_id)
        if not numbers:
            return []

        outcomes = await asyncio.gather(
            *(
                self.gateway.associate_number(
                    messaging_service_sid, number.provider_number_id
                )
                for number in numbers
            ),
            return_exceptions=True,
        )

        results = []
        for number, outcome in zip(numbers, outcomes, strict=True):
            if isinstance(outcome, ProviderError):
                logger.warning(
                    "Failed to associate number with messaging service",
                    organization_id=org_id,
                    provider_number_id=number.provider_number_id,
                    error=str(outcome),
                )
                results.append(
                    NumberAssociationResult(
                        phone_number_id=number.id,
                        provider_number_id=number.provider_number_id,
                        associated=False,
                        error=outcome.message,
                    )
                )
                continue
            if isinstance(outcome, BaseException):
                raise outcome

            await self.phone_numbers.set_a2p_status(number, A2PStatus.PENDING)
            results.append(
                NumberAssociationResult(
                    phone_number_id=number.id,
                    provider_number_id=number.provider_number_id,
                    associated=True,
                )
            )

        logger.info(
            "Numbers associated with messaging service",
            organization_id=org_id,
            associated=sum(1 for r in results if r.associated),
            failed=sum(1 for r in results if not r.associated),
        )
        return results
