"""
Dependencies for compliance endpoints.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.compliance.brand_service import BrandRegistrationManager
from src.compliance.campaign_service import CampaignRegistrationManager
from src.compliance.reconciliation_service import StatusReconciliationService
from src.db.database import get_db
from src.integrations.twilio.base import ProviderGateway
from src.integrations.twilio.dependencies import get_provider_gateway


def get_brand_registration_manager(
    session: AsyncSession = Depends(get_db),
    gateway: ProviderGateway = Depends(get_provider_gateway),
) -> BrandRegistrationManager:
    """Get brand registration manager instance."""
    return BrandRegistrationManager(session, gateway)


def get_campaign_registration_manager(
    session: AsyncSession = Depends(get_db),
    gateway: ProviderGateway = Depends(get_provider_gateway),
) -> CampaignRegistrationManager:
    """Get campaign registration manager instance."""
    return CampaignRegistrationManager(session, gateway)


def get_status_reconciliation_service(
    session: AsyncSession = Depends(get_db),
    gateway: ProviderGateway = Depends(get_provider_gateway),
) -> StatusReconciliationService:
    """Get status reconciliation service instance."""
    return StatusReconciliationService(session, gateway)
