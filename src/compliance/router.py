"""
Compliance (10DLC) API endpoints.

Brand and campaign registration plus status polling for the caller's
organization.
"""

from fastapi import APIRouter, Depends, status

from src.auth.dependencies import get_current_user
from src.auth.schemas import User
from src.compliance.brand_service import BrandRegistrationManager
from src.compliance.campaign_service import CampaignRegistrationManager
from src.compliance.dependencies import (
    get_brand_registration_manager,
    get_campaign_registration_manager,
    get_status_reconciliation_service,
)
from src.compliance.reconciliation_service import StatusReconciliationService
from src.compliance.schemas import (
    BrandRegistrationRequest,
    BrandRegistrationResponse,
    CampaignRegistrationBody,
    CampaignRegistrationResponse,
    ComplianceStatusResponse,
    RefreshResponse,
)

router = APIRouter(prefix="/compliance", tags=["Compliance"])


@router.get("/status", response_model=ComplianceStatusResponse)
async def get_compliance_status(
    current_user: User = Depends(get_current_user),
    service: StatusReconciliationService = Depends(get_status_reconciliation_service),
) -> ComplianceStatusResponse:
    """
    Get the organization's brand and campaign registration state.

    Args:
        current_user: Current authenticated user
        service: Status reconciliation service

    Returns:
        Local compliance record
    """
    return await service.get_status(current_user.organization_id)


@router.post(
    "/brand",
    response_model=BrandRegistrationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_brand(
    data: BrandRegistrationRequest,
    current_user: User = Depends(get_current_user),
    manager: BrandRegistrationManager = Depends(get_brand_registration_manager),
) -> BrandRegistrationResponse:
    """
    Save business information and register the organization's brand.

    A provider failure is reported as a PENDING brand that can be retried.

    Args:
        data: Business information
        current_user: Current authenticated user
        manager: Brand registration manager

    Returns:
        Brand SID, status and a user-facing message
    """
    return await manager.register_brand(
        current_user.organization_id, data, contact_email=current_user.email
    )


@router.post(
    "/campaign",
    response_model=CampaignRegistrationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_campaign(
    data: CampaignRegistrationBody | None = None,
    current_user: User = Depends(get_current_user),
    manager: CampaignRegistrationManager = Depends(get_campaign_registration_manager),
) -> CampaignRegistrationResponse:
    """
    Register a messaging campaign under the organization's approved brand.

    Args:
        data: Optional description / use-case
        current_user: Current authenticated user
        manager: Campaign registration manager

    Returns:
        Campaign SID, status, messaging service and per-number association results
    """
    return await manager.register_campaign(
        current_user.organization_id, data or CampaignRegistrationBody()
    )


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_compliance_status(
    current_user: User = Depends(get_current_user),
    service: StatusReconciliationService = Depends(get_status_reconciliation_service),
) -> RefreshResponse:
    """
    Poll the provider for updated brand and campaign status.

    Args:
        current_user: Current authenticated user
        service: Status reconciliation service

    Returns:
        Current brand and campaign status
    """
    return await service.refresh(current_user.organization_id)
