"""
Brand registration.

Registration is a saga: the business information is committed first, then
the five provider steps run in order (each needs the identifiers returned by
the previous one), then the outcome is committed. A provider failure leaves
the organization PENDING and retryable; the business information is never
rolled back.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.compliance.constants import (
    BRAND_REQUIRED_FIELDS_MESSAGE,
    FRIENDLY_NAME_SUFFIX,
    BrandType,
    BusinessClassification,
    ComplianceMessage,
    RegistrationStatus,
)
from src.compliance.schemas import BrandRegistrationRequest, BrandRegistrationResponse
from src.config import get_app_settings
from src.db.organizations.repository import OrganizationRepository
from src.db.organizations.schemas import BusinessInfo
from src.exceptions import InvalidInputError, NotFoundError
from src.integrations.twilio.base import ProviderGateway
from src.integrations.twilio.exceptions import (
    ProviderUnavailableError,
    RemoteCallFailedError,
)
from src.integrations.twilio.schemas import BrandRegistrationResult, BusinessIdentity
from src.utils.logger import logger


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class BrandRegistrationManager:
    """Drives an organization from no registration to a submitted brand."""

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

    async def register_brand(
        self,
        org_id: str,
        request: BrandRegistrationRequest,
        contact_email: str | None = None,
    ) -> BrandRegistrationResponse:
        """
        Save business information and submit the brand to the provider.

        Args:
            org_id: Organization to register
            request: Business information
            contact_email: Email placed on the customer profile (falls back to
                the configured compliance contact)

        Returns:
            BrandRegistrationResponse: brand SID (None when degraded), status and message

        Raises:
            ProviderUnavailableError: If the gateway is not configured
            InvalidInputError: If the legal name or EIN is missing
            NotFoundError: If the organization does not exist
        """
        if not self.gateway.is_configured:
            raise ProviderUnavailableError(operation="register_brand")

        legal_name = _clean(request.legal_name)
        tax_id = _clean(request.ein)
        if not legal_name or not tax_id:
            raise InvalidInputError(BRAND_REQUIRED_FIELDS_MESSAGE)

        org = await self.organizations.get_by_id(org_id)
        if org is None:
            raise NotFoundError("Organization not found")

        brand_type = _clean(request.brand_type) or BrandType.SOLE_PROPRIETOR.value
        info = BusinessInfo(
            legal_name=legal_name,
            tax_id=tax_id,
            business_address=_clean(request.address),
            business_city=_clean(request.city),
            business_state=_clean(request.state),
            business_zip=_clean(request.zip),
            brand_type=brand_type,
        )

        # Persist intent; nothing below may undo this
        await self.organizations.save_business_info(org, info)
        await self.session.commit()
        logger.info("Business information saved", organization_id=org_id)

        email = contact_email or get_app_settings().compliance_contact_email
        try:
            profile_sid, brand = await self._submit_to_provider(info, brand_type, email)
        except RemoteCallFailedError as e:
            logger.error(
                "Brand registration degraded to pending",
                organization_id=org_id,
                operation=e.operation,
                error=str(e),
            )
            await self.organizations.update_registration(
                org, brand_status=RegistrationStatus.PENDING.value
            )
            await self.session.commit()
            return BrandRegistrationResponse(
                brand_sid=None,
                brand_status=RegistrationStatus.PENDING.value,
                message=ComplianceMessage.BRAND_RETRYABLE.value,
            )

        brand_status = brand.status or RegistrationStatus.PENDING.value
        await self.organizations.update_registration(
            org,
            trust_profile_id=profile_sid,
            brand_registration_id=brand.sid,
            brand_status=brand_status,
        )
        await self.session.commit()
        logger.info(
            "Brand registration submitted",
            organization_id=org_id,
            brand_sid=brand.sid,
            brand_status=brand_status,
        )

        return BrandRegistrationResponse(
            brand_sid=brand.sid,
            brand_status=brand_status,
            message=(
                ComplianceMessage.BRAND_APPROVED.value
                if brand_status == RegistrationStatus.APPROVED.value
                else ComplianceMessage.BRAND_SUBMITTED.value
            ),
        )

    async def _submit_to_provider(
        self, info: BusinessInfo, brand_type: str, email: str
    ) -> tuple[str, BrandRegistrationResult]:
        profile_sid = await self.gateway.create_customer_profile(
            friendly_name=f"{info.legal_name} - {FRIENDLY_NAME_SUFFIX}", email=email
        )
        identity_sid = await self.gateway.create_business_identity(
            BusinessIdentity(
                legal_name=info.legal_name,
                tax_id=info.tax_id,
                business_type=BusinessClassification.for_brand_type(brand_type).value,
            )
        )
        await self.gateway.attach_identity(profile_sid, identity_sid)
        await self.gateway.submit_profile_for_review(profile_sid)
        brand = await self.gateway.create_brand_registration(
            profile_sid,
            brand_type=(
                BrandType.SOLE_PROPRIETOR.value
                if brand_type == BrandType.SOLE_PROPRIETOR
                else BrandType.STANDARD.value
            ),
        )
        return profile_sid, brand

