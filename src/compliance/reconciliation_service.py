"""
Pull-based reconciliation of brand and campaign status.

Only reads from the provider and overwrites local status, so it is safe to
call repeatedly. Provider failures leave the previous status in place.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.compliance.constants import RegistrationStatus
from src.compliance.schemas import ComplianceStatusResponse, RefreshResponse
from src.db.organizations.model import Organization
from src.db.organizations.repository import OrganizationRepository
from src.exceptions import NotFoundError
from src.integrations.twilio.base import ProviderGateway
from src.integrations.twilio.exceptions import (
    ProviderUnavailableError,
    RemoteCallFailedError,
)
from src.utils.logger import logger


def has_registration(org: Organization) -> bool:
    """Whether the organization has started brand registration."""
    return bool(
        org.brand_registration_id
        or org.brand_status != RegistrationStatus.UNREGISTERED.value
    )


class StatusReconciliationService:
    """Reads and refreshes an organization's compliance status."""

    def __init__(self, session: AsyncSession, gateway: ProviderGateway):
        self.session = session
        self.gateway = gateway
        self.organizations = OrganizationRepository(session)

    async def _get_org(self, org_id: str) -> Organization:
        org = await self.organizations.get_by_id(org_id)
        if org is None:
            raise NotFoundError("Organization not found")
        return org

    async def get_status(self, org_id: str) -> ComplianceStatusResponse:
        """
        Get the organization's local compliance record.

        Raises:
            NotFoundError: If the organization does not exist
        """
        org = await self._get_org(org_id)
        return ComplianceStatusResponse(
            legal_name=org.legal_name,
            ein=org.tax_id,
            brand_type=org.brand_type,
            brand_registration_sid=org.brand_registration_id,
            brand_status=org.brand_status,
            campaign_sid=org.campaign_id,
            campaign_status=org.campaign_status,
            messaging_service_sid=org.messaging_service_id,
            has_registration=has_registration(org),
        )

    async def refresh(self, org_id: str) -> RefreshResponse:
        """
        Re-fetch brand and campaign status from the provider.

        Args:
            org_id: Organization to refresh

        Returns:
            RefreshResponse with the (possibly unchanged) statuses

        Raises:
            ProviderUnavailableError: If the gateway is not configured
            NotFoundError: If the organization does not exist
        """
        if not self.gateway.is_configured:
            raise ProviderUnavailableError(operation="refresh_compliance")

        org = await self._get_org(org_id)

        if org.brand_registration_id:
            await self._refresh_brand(org)

        if org.campaign_id and org.messaging_service_id:
            await self._refresh_campaign(org)

        await self.session.commit()
        return RefreshResponse(
            brand_status=org.brand_status, campaign_status=org.campaign_status
        )

    async def _refresh_brand(self, org: Organization) -> None:
        try:
            brand = await self.gateway.fetch_brand_status(org.brand_registration_id)
        except RemoteCallFailedError as e:
            logger.warning(
                "Brand status refresh failed",
                organization_id=org.id,
                brand_sid=org.brand_registration_id,
                error=str(e),
            )
            return

        if brand.status:
            await self.organizations.update_registration(org, brand_status=brand.status)

    async def _refresh_campaign(self, org: Organization) -> None:
        try:
            campaigns = await self.gateway.list_campaigns(org.messaging_service_id)
        except RemoteCallFailedError as e:
            logger.warning(
                "Campaign status refresh failed",
                organization_id=org.id,
                campaign_sid=org.campaign_id,
                error=str(e),
            )
            return

        match = next((c for c in campaigns if c.sid == org.campaign_id), None)
        if match is None:
            logger.warning(
                "Campaign not found under messaging service",
                organization_id=org.id,
                campaign_sid=org.campaign_id,
                messaging_service_sid=org.messaging_service_id,
            )
            return

        if match.campaign_status:
            await self.organizations.update_registration(
                org, campaign_status=match.campaign_status
            )
