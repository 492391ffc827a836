"""Tests for CampaignRegistrationManager."""

import pytest

from src.compliance.campaign_service import CampaignRegistrationManager
from src.compliance.constants import (
    DEFAULT_CAMPAIGN_DESCRIPTION,
    DEFAULT_USE_CASE,
    A2PStatus,
    ComplianceMessage,
    RegistrationStatus,
)
from src.compliance.schemas import CampaignRegistrationBody
from src.db.organizations.repository import OrganizationRepository
from src.db.phone_numbers.repository import PhoneNumberRepository
from src.exceptions import BrandNotApprovedError, BrandNotRegisteredError, NotFoundError
from src.integrations.twilio.exceptions import ProviderUnavailableError
from src.integrations.twilio.gateway import UnavailableGateway


@pytest.fixture
def manager(session, gateway):
    return CampaignRegistrationManager(session, gateway)


async def _approve_brand(session, org, **fields):
    await OrganizationRepository(session).update_registration(
        org,
        brand_registration_id="BN_brand",
        brand_status=RegistrationStatus.APPROVED.value,
        **fields,
    )
    await session.commit()


class TestRegisterCampaign:
    """Test suite for register_campaign."""

    @pytest.mark.asyncio
    async def test_creates_messaging_service_and_campaign(
        self, manager, gateway, session, organization
    ):
        await _approve_brand(session, organization)

        response = await manager.register_campaign(
            organization.id, CampaignRegistrationBody()
        )

        assert gateway.operations == ["get_or_create_messaging_service", "create_campaign"]
        assert gateway.messaging_services_created == 1
        assert response.campaign_sid == "QE_campaign"
        assert response.campaign_status == "PENDING"
        assert response.messaging_service_sid == "MG_service"
        assert response.message == ComplianceMessage.CAMPAIGN_SUBMITTED.value
        assert response.associations == []

        request = gateway.campaign_requests[0]
        assert request.brand_registration_sid == "BN_brand"
        assert request.description == DEFAULT_CAMPAIGN_DESCRIPTION
        assert request.use_case == DEFAULT_USE_CASE
        assert request.has_embedded_links is False
        assert request.has_embedded_phone is True
        assert len(request.message_samples) >= 2

        org = await OrganizationRepository(session).get_by_id(organization.id)
        assert org.messaging_service_id == "MG_service"
        assert org.campaign_id == "QE_campaign"
        assert org.campaign_status == "PENDING"

    @pytest.mark.asyncio
    async def test_overrides_are_passed_through(
        self, manager, gateway, session, organization
    ):
        await _approve_brand(session, organization)

        await manager.register_campaign(
            organization.id,
            CampaignRegistrationBody(description="Billing notices", use_case="ACCOUNT_NOTIFICATION"),
        )

        request = gateway.campaign_requests[0]
        assert request.description == "Billing notices"
        assert request.use_case == "ACCOUNT_NOTIFICATION"

    @pytest.mark.asyncio
    async def test_existing_messaging_service_is_reused(
        self, manager, gateway, session, organization
    ):
        await _approve_brand(session, organization, messaging_service_id="MG_existing")

        response = await manager.register_campaign(
            organization.id, CampaignRegistrationBody()
        )

        assert gateway.messaging_services_created == 0
        assert response.messaging_service_sid == "MG_existing"
        assert gateway.calls[1] == (
            "create_campaign",
            ("MG_existing", gateway.campaign_requests[0]),
        )

    @pytest.mark.asyncio
    async def test_repeated_registration_creates_one_messaging_service(
        self, manager, gateway, session, organization
    ):
        await _approve_brand(session, organization)

        await manager.register_campaign(organization.id, CampaignRegistrationBody())
        await manager.register_campaign(organization.id, CampaignRegistrationBody())

        assert gateway.messaging_services_created == 1

    @pytest.mark.asyncio
    async def test_numbers_are_associated_individually(
        self, manager, gateway, session, organization, add_phone_number
    ):
        await _approve_brand(session, organization)
        ok = await add_phone_number("+17145550100", provider_number_id="PN_ok")
        taken = await add_phone_number("+17145550101", provider_number_id="PN_taken")
        local_only = await add_phone_number("+17145550102")
        gateway.failing_numbers.add("PN_taken")

        response = await manager.register_campaign(
            organization.id, CampaignRegistrationBody()
        )

        results = {r.provider_number_id: r for r in response.associations}
        assert set(results) == {"PN_ok", "PN_taken"}
        assert results["PN_ok"].associated is True
        assert results["PN_ok"].phone_number_id == ok.id
        assert results["PN_taken"].associated is False
        assert results["PN_taken"].error

        repository = PhoneNumberRepository(session)
        assert (await repository.get_for_org(organization.id, ok.id)).a2p_status == (
            A2PStatus.PENDING.value
        )
        assert (await repository.get_for_org(organization.id, taken.id)).a2p_status == (
            A2PStatus.NONE.value
        )
        assert (await repository.get_for_org(organization.id, local_only.id)).a2p_status == (
            A2PStatus.NONE.value
        )

        # The campaign itself is still recorded
        org = await OrganizationRepository(session).get_by_id(organization.id)
        assert org.campaign_id == "QE_campaign"

    @pytest.mark.asyncio
    async def test_approved_campaign_message(self, manager, gateway, session, organization):
        await _approve_brand(session, organization)
        gateway.campaign_status = RegistrationStatus.APPROVED.value

        response = await manager.register_campaign(
            organization.id, CampaignRegistrationBody()
        )

        assert response.message == ComplianceMessage.CAMPAIGN_APPROVED.value

    @pytest.mark.asyncio
    async def test_campaign_failure_leaves_statuses_unchanged(
        self, manager, gateway, session, organization
    ):
        await _approve_brand(session, organization)
        gateway.fail("create_campaign")

        response = await manager.register_campaign(
            organization.id, CampaignRegistrationBody()
        )

        assert response.campaign_sid is None
        assert response.campaign_status == RegistrationStatus.UNREGISTERED.value
        assert response.message == ComplianceMessage.CAMPAIGN_RETRYABLE.value

        org = await OrganizationRepository(session).get_by_id(organization.id)
        assert org.brand_status == RegistrationStatus.APPROVED.value
        assert org.campaign_status == RegistrationStatus.UNREGISTERED.value
        assert org.campaign_id is None
        # The messaging service created before the failure is kept for the retry
        assert org.messaging_service_id == "MG_service"

    @pytest.mark.asyncio
    async def test_messaging_service_failure_is_retryable(
        self, manager, gateway, session, organization
    ):
        await _approve_brand(session, organization)
        gateway.fail("get_or_create_messaging_service")

        response = await manager.register_campaign(
            organization.id, CampaignRegistrationBody()
        )

        assert response.message == ComplianceMessage.CAMPAIGN_RETRYABLE.value
        assert "create_campaign" not in gateway.operations

    @pytest.mark.asyncio
    async def test_requires_registered_brand(self, manager, gateway, organization):
        with pytest.raises(BrandNotRegisteredError) as exc_info:
            await manager.register_campaign(organization.id, CampaignRegistrationBody())

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == "BRAND_NOT_REGISTERED"
        assert gateway.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("brand_status", ["PENDING", "IN_REVIEW", "FAILED"])
    async def test_requires_approved_brand(
        self, manager, gateway, session, organization, brand_status
    ):
        await OrganizationRepository(session).update_registration(
            organization, brand_registration_id="BN_brand", brand_status=brand_status
        )
        await session.commit()
        before = (
            organization.campaign_id,
            organization.campaign_status,
            organization.messaging_service_id,
        )

        with pytest.raises(BrandNotApprovedError) as exc_info:
            await manager.register_campaign(organization.id, CampaignRegistrationBody())

        assert exc_info.value.error_code == "BRAND_NOT_APPROVED"
        assert gateway.calls == []

        org = await OrganizationRepository(session).get_by_id(organization.id)
        await session.refresh(org)
        assert (org.campaign_id, org.campaign_status, org.messaging_service_id) == before

    @pytest.mark.asyncio
    async def test_unknown_organization(self, manager):
        with pytest.raises(NotFoundError):
            await manager.register_campaign("missing-org", CampaignRegistrationBody())

    @pytest.mark.asyncio
    async def test_unconfigured_gateway(self, session, organization):
        await _approve_brand(session, organization)
        manager = CampaignRegistrationManager(session, UnavailableGateway())

        with pytest.raises(ProviderUnavailableError):
            await manager.register_campaign(organization.id, CampaignRegistrationBody())
