"""Tests for AuthorizedForwardingRegistry and call-settings resolution."""

import pytest

from src.db.authorized_forward_numbers.repository import (
    AuthorizedForwardNumberRepository,
)
from src.db.phone_numbers.service import PhoneNumberService
from src.exceptions import InvalidInputError, NotAuthorizedError, NotFoundError
from src.forwarding.constants import AuthorizedNumberStatus, CallMode
from src.forwarding.schemas import ForwardingRequest
from src.forwarding.service import AuthorizedForwardingRegistry


@pytest.fixture
def registry(session):
    return AuthorizedForwardingRegistry(session)


class TestAuthorize:
    """Test suite for authorizing destinations."""

    @pytest.mark.asyncio
    async def test_authorize_normalizes_and_approves(self, registry, organization):
        record = await registry.authorize(
            organization.id, "user-1", "(949) 555-1234", label="Front desk"
        )

        assert record.e164_number == "+19495551234"
        assert record.status == AuthorizedNumberStatus.APPROVED.value
        assert record.label == "Front desk"
        assert record.created_by_user_id == "user-1"
        assert record.verified_at is not None

    @pytest.mark.asyncio
    async def test_authorize_twice_returns_same_record(self, registry, organization):
        first = await registry.authorize(organization.id, "user-1", "9495551234")
        second = await registry.authorize(organization.id, "user-2", "+1 949 555 1234")

        assert first.id == second.id
        records = await registry.list_authorized(organization.id)
        assert len(records) == 1

    @pytest.mark.asyncio
    async def test_authorize_keeps_label_when_none_given(self, registry, organization):
        await registry.authorize(organization.id, "user-1", "9495551234", label="Cell")
        record = await registry.authorize(organization.id, "user-1", "9495551234")

        assert record.label == "Cell"

    @pytest.mark.asyncio
    async def test_authorize_reactivates_disabled_number(self, registry, organization):
        record = await registry.authorize(organization.id, "user-1", "9495551234")
        await registry.disable(organization.id, record.id)

        again = await registry.authorize(organization.id, "user-1", "9495551234")

        assert again.id == record.id
        assert again.status == AuthorizedNumberStatus.APPROVED.value

    @pytest.mark.asyncio
    async def test_authorize_rejects_invalid_number(self, registry, organization):
        with pytest.raises(InvalidInputError):
            await registry.authorize(organization.id, "user-1", "555-1234")

    @pytest.mark.asyncio
    async def test_same_number_is_independent_per_organization(
        self, registry, organization, other_organization
    ):
        ours = await registry.authorize(organization.id, "user-1", "9495551234")
        theirs = await registry.authorize(other_organization.id, "user-9", "9495551234")

        assert ours.id != theirs.id
        assert [r.id for r in await registry.list_authorized(organization.id)] == [ours.id]


class TestDisable:
    """Test suite for disabling destinations."""

    @pytest.mark.asyncio
    async def test_disable_hides_from_listing(self, registry, organization):
        record = await registry.authorize(organization.id, "user-1", "9495551234")

        disabled = await registry.disable(organization.id, record.id)

        assert disabled.status == AuthorizedNumberStatus.DISABLED.value
        assert await registry.list_authorized(organization.id) == []

    @pytest.mark.asyncio
    async def test_disable_keeps_the_record(self, registry, session, organization):
        record = await registry.authorize(organization.id, "user-1", "9495551234")
        await registry.disable(organization.id, record.id)

        stored = await AuthorizedForwardNumberRepository(session).get_for_org(
            organization.id, record.id
        )
        assert stored is not None
        assert stored.is_disabled

    @pytest.mark.asyncio
    async def test_disable_clears_forwarding_on_phone_numbers(
        self, registry, session, organization, add_phone_number
    ):
        record = await registry.authorize(organization.id, "user-1", "9495551234")
        number = await add_phone_number(
            "+17145550100",
            call_forward_authorized_number_id=record.id,
            call_forward_to=record.e164_number,
        )
        untouched = await add_phone_number("+17145550101")

        await registry.disable(organization.id, record.id)
        await session.commit()

        await session.refresh(number)
        assert number.call_forward_authorized_number_id is None
        assert number.call_forward_to is None
        await session.refresh(untouched)
        assert untouched.call_forward_to is None

    @pytest.mark.asyncio
    async def test_disable_other_orgs_number_is_not_found(
        self, registry, organization, other_organization
    ):
        theirs = await registry.authorize(other_organization.id, "user-9", "9495551234")

        with pytest.raises(NotFoundError):
            await registry.disable(organization.id, theirs.id)


class TestResolveForwarding:
    """Test suite for resolve_forwarding precedence."""

    @pytest.mark.asyncio
    async def test_voicemail_clears_even_with_other_fields(self, registry, organization):
        record = await registry.authorize(organization.id, "user-1", "9495551234")

        resolution = await registry.resolve_forwarding(
            organization.id,
            "user-1",
            ForwardingRequest(
                call_mode=CallMode.VOICEMAIL,
                authorized_number_id=record.id,
                call_forward_to="9495551234",
            ),
        )

        assert resolution.is_cleared
        assert resolution.forward_number is None

    @pytest.mark.asyncio
    async def test_authorized_id_wins_over_raw_number(self, registry, organization):
        record = await registry.authorize(organization.id, "user-1", "9495551234")

        resolution = await registry.resolve_forwarding(
            organization.id,
            "user-1",
            ForwardingRequest(authorized_number_id=record.id, call_forward_to="7145550000"),
        )

        assert resolution.authorized_id == record.id
        assert resolution.forward_number == "+19495551234"

    @pytest.mark.asyncio
    async def test_disabled_id_is_not_authorized(self, registry, organization):
        record = await registry.authorize(organization.id, "user-1", "9495551234")
        await registry.disable(organization.id, record.id)

        with pytest.raises(NotAuthorizedError):
            await registry.resolve_forwarding(
                organization.id, "user-1", ForwardingRequest(authorized_number_id=record.id)
            )

    @pytest.mark.asyncio
    async def test_other_orgs_id_is_not_authorized(
        self, registry, organization, other_organization
    ):
        theirs = await registry.authorize(other_organization.id, "user-9", "9495551234")

        with pytest.raises(NotAuthorizedError):
            await registry.resolve_forwarding(
                organization.id, "user-1", ForwardingRequest(authorized_number_id=theirs.id)
            )

    @pytest.mark.asyncio
    async def test_raw_number_matches_existing_authorization(self, registry, organization):
        record = await registry.authorize(organization.id, "user-1", "9495551234")

        resolution = await registry.resolve_forwarding(
            organization.id, "user-1", ForwardingRequest(call_forward_to="949.555.1234")
        )

        assert resolution.authorized_id == record.id

    @pytest.mark.asyncio
    async def test_unauthorized_raw_number_is_rejected(self, registry, organization):
        with pytest.raises(NotAuthorizedError) as exc_info:
            await registry.resolve_forwarding(
                organization.id, "user-1", ForwardingRequest(call_forward_to="9495551234")
            )

        assert exc_info.value.status_code == 403
        assert await registry.list_authorized(organization.id) == []

    @pytest.mark.asyncio
    async def test_unauthorized_raw_number_auto_authorized(self, registry, organization):
        resolution = await registry.resolve_forwarding(
            organization.id,
            "user-1",
            ForwardingRequest(call_forward_to="9495551234", auto_authorize_if_missing=True),
        )

        records = await registry.list_authorized(organization.id)
        assert len(records) == 1
        assert resolution.authorized_id == records[0].id
        assert records[0].created_by_user_id == "user-1"

    @pytest.mark.asyncio
    async def test_disabled_raw_number_needs_auto_authorize(self, registry, organization):
        record = await registry.authorize(organization.id, "user-1", "9495551234")
        await registry.disable(organization.id, record.id)

        with pytest.raises(NotAuthorizedError):
            await registry.resolve_forwarding(
                organization.id, "user-1", ForwardingRequest(call_forward_to="9495551234")
            )

        resolution = await registry.resolve_forwarding(
            organization.id,
            "user-1",
            ForwardingRequest(call_forward_to="9495551234", auto_authorize_if_missing=True),
        )
        assert resolution.authorized_id == record.id

    @pytest.mark.asyncio
    async def test_invalid_raw_number(self, registry, organization):
        with pytest.raises(InvalidInputError):
            await registry.resolve_forwarding(
                organization.id,
                "user-1",
                ForwardingRequest(call_forward_to="12345", auto_authorize_if_missing=True),
            )

    @pytest.mark.asyncio
    async def test_no_fields_clears(self, registry, organization):
        resolution = await registry.resolve_forwarding(
            organization.id, "user-1", ForwardingRequest(call_forward_to="   ")
        )

        assert resolution.is_cleared


class TestUpdateCallSettings:
    """Test suite for PhoneNumberService.update_call_settings."""

    @pytest.mark.asyncio
    async def test_forwarding_is_set_and_cleared(
        self, session, organization, add_phone_number
    ):
        service = PhoneNumberService(session)
        number = await add_phone_number("+17145550100")
        record = await service.forwarding.authorize(organization.id, "user-1", "9495551234")

        updated = await service.update_call_settings(
            organization.id,
            "user-1",
            number.id,
            ForwardingRequest(call_mode=CallMode.FORWARD, authorized_number_id=record.id),
        )
        assert updated.call_forward_authorized_number_id == record.id
        assert updated.call_forward_to == "+19495551234"

        cleared = await service.update_call_settings(
            organization.id,
            "user-1",
            number.id,
            ForwardingRequest(call_mode=CallMode.VOICEMAIL),
        )
        assert cleared.call_forward_authorized_number_id is None
        assert cleared.call_forward_to is None

    @pytest.mark.asyncio
    async def test_rejected_destination_leaves_number_unchanged(
        self, session, organization, add_phone_number
    ):
        service = PhoneNumberService(session)
        number = await add_phone_number("+17145550100")

        with pytest.raises(NotAuthorizedError):
            await service.update_call_settings(
                organization.id,
                "user-1",
                number.id,
                ForwardingRequest(call_forward_to="9495551234"),
            )

        assert number.call_forward_to is None

    @pytest.mark.asyncio
    async def test_other_orgs_number_is_not_found(
        self, session, organization, other_organization, add_phone_number
    ):
        service = PhoneNumberService(session)
        theirs = await add_phone_number(
            "+17145550100", organization_id=other_organization.id
        )

        with pytest.raises(NotFoundError):
            await service.update_call_settings(
                organization.id,
                "user-1",
                theirs.id,
                ForwardingRequest(call_mode=CallMode.VOICEMAIL),
            )
