"""Tests for the Twilio provider gateway and its error translation."""

import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from twilio.base.exceptions import TwilioRestException

from src.config import AppSettings, set_app_settings
from src.integrations.twilio.client import TwilioComplianceClient
from src.integrations.twilio.config import TwilioSettings, set_twilio_settings
from src.integrations.twilio.dependencies import get_provider_gateway
from src.integrations.twilio.exceptions import (
    ProviderNotFoundError,
    ProviderTimeoutError,
    ProviderUnavailableError,
    RemoteCallFailedError,
)
from src.integrations.twilio.gateway import TwilioGateway, UnavailableGateway
from src.integrations.twilio.schemas import (
    BusinessIdentity,
    CampaignRegistrationRequest,
    LosingCarrierInformation,
    PortInSubmission,
)


@pytest.fixture
def settings():
    return TwilioSettings(account_sid="AC123", auth_token="token", request_timeout=5)


@pytest.fixture
def mock_client():
    """Create a mock compliance client."""
    return AsyncMock(spec=TwilioComplianceClient)


@pytest.fixture
def gateway(mock_client, settings):
    set_app_settings(AppSettings(server_base_url="https://api.example.com"))
    yield TwilioGateway(mock_client, settings)
    set_app_settings(None)


def _numbers_client(handler) -> TwilioComplianceClient:
    sdk_client = MagicMock()
    sdk_client.username = "AC123"
    sdk_client.password = "token"
    return TwilioComplianceClient(
        sdk_client,
        timeout=5,
        numbers_api_base_url="https://numbers.example.com/",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


class TestTwilioGateway:
    """Test suite for TwilioGateway."""

    @pytest.mark.asyncio
    async def test_create_customer_profile_uses_policy(self, gateway, mock_client, settings):
        mock_client.create_customer_profile.return_value = "BU123"

        sid = await gateway.create_customer_profile("Sunrise - Health SMS", "a@b.example")

        assert sid == "BU123"
        mock_client.create_customer_profile.assert_awaited_once_with(
            friendly_name="Sunrise - Health SMS",
            email="a@b.example",
            policy_sid=settings.a2p_policy_sid,
        )

    @pytest.mark.asyncio
    async def test_business_identity_attributes(self, gateway, mock_client):
        mock_client.create_end_user.return_value = "IT123"

        await gateway.create_business_identity(
            BusinessIdentity(
                legal_name="Sunrise LLC", tax_id="12-3456789", business_type="Corporation"
            )
        )

        kwargs = mock_client.create_end_user.await_args.kwargs
        assert kwargs["end_user_type"] == "customer_profile_business_information"
        assert kwargs["attributes"]["business_name"] == "Sunrise LLC"
        assert kwargs["attributes"]["business_registration_number"] == "12-3456789"
        assert kwargs["attributes"]["business_type"] == "Corporation"

    @pytest.mark.asyncio
    async def test_submit_profile_for_review(self, gateway, mock_client):
        await gateway.submit_profile_for_review("BU123")

        mock_client.update_customer_profile_status.assert_awaited_once_with(
            "BU123", "pending-review"
        )

    @pytest.mark.asyncio
    async def test_create_brand_registration(self, gateway, mock_client):
        mock_client.create_brand_registration.return_value = MagicMock(
            sid="BN123", status="PENDING"
        )

        result = await gateway.create_brand_registration("BU123", "STANDARD")

        assert (result.sid, result.status) == ("BN123", "PENDING")
        mock_client.create_brand_registration.assert_awaited_once_with(
            customer_profile_sid="BU123", a2p_profile_sid="BU123", brand_type="STANDARD"
        )

    @pytest.mark.asyncio
    async def test_create_brand_registration_uses_configured_trust_bundle(
        self, mock_client
    ):
        gateway = TwilioGateway(
            mock_client,
            TwilioSettings(
                account_sid="AC123", auth_token="token", a2p_trust_bundle_sid="BU_a2p"
            ),
        )
        mock_client.create_brand_registration.return_value = MagicMock(
            sid="BN123", status="PENDING"
        )

        await gateway.create_brand_registration("BU123", "STANDARD")

        mock_client.create_brand_registration.assert_awaited_once_with(
            customer_profile_sid="BU123", a2p_profile_sid="BU_a2p", brand_type="STANDARD"
        )

    @pytest.mark.asyncio
    async def test_existing_messaging_service_is_not_recreated(self, gateway, mock_client):
        sid = await gateway.get_or_create_messaging_service("Sunrise", existing_sid="MG1")

        assert sid == "MG1"
        mock_client.create_messaging_service.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_new_messaging_service_gets_inbound_url(self, gateway, mock_client):
        mock_client.create_messaging_service.return_value = "MG2"

        sid = await gateway.get_or_create_messaging_service("Sunrise")

        assert sid == "MG2"
        assert mock_client.create_messaging_service.await_args.kwargs[
            "inbound_request_url"
        ].startswith("https://api.example.com/")

    @pytest.mark.asyncio
    async def test_create_campaign_passes_flags(self, gateway, mock_client):
        mock_client.create_us_app_to_person.return_value = MagicMock(
            sid="QE123", campaign_status="PENDING", campaign_id=None
        )

        result = await gateway.create_campaign(
            "MG1",
            CampaignRegistrationRequest(
                brand_registration_sid="BN123",
                description="Reminders",
                message_flow="Opt-in at registration",
                message_samples=["one", "two"],
                use_case="MIXED",
            ),
        )

        assert result.sid == "QE123"
        args = mock_client.create_us_app_to_person.await_args
        assert args.args == ("MG1",)
        assert args.kwargs["us_app_to_person_usecase"] == "MIXED"
        assert args.kwargs["has_embedded_links"] is False
        assert args.kwargs["has_embedded_phone"] is True

    @pytest.mark.asyncio
    async def test_check_portability(self, gateway, mock_client):
        mock_client.fetch_portability.return_value = MagicMock(
            portable=False,
            number_type="LOCAL",
            country="US",
            pin_and_account_number_required=None,
            not_portable_reason="ALREADY_IN_ACCOUNT",
            not_portable_reason_code=22132,
        )

        result = await gateway.check_portability("+19495551234")

        assert result.portable is False
        assert result.pin_and_account_number_required is False
        assert result.not_portable_reason_code == 22132

    @pytest.mark.asyncio
    async def test_submit_port_in_reads_sid(self, gateway, mock_client):
        mock_client.create_port_in.return_value = {"port_in_request_sid": "KW123"}

        sid = await gateway.submit_port_in(
            PortInSubmission(
                phone_numbers=["+19495551234"],
                losing_carrier_information=LosingCarrierInformation(
                    customer_type="Business",
                    customer_name="Sunrise",
                    authorized_representative="Dana Reyes",
                    authorized_representative_email="dana@sunrise.example",
                    account_telephone_number="+19495551234",
                ),
                notification_emails=["dana@sunrise.example"],
                target_port_in_date="2026-04-04",
            )
        )

        assert sid == "KW123"

    @pytest.mark.asyncio
    async def test_submit_port_in_without_sid_fails(self, gateway, mock_client):
        mock_client.create_port_in.return_value = {}

        with pytest.raises(RemoteCallFailedError):
            await gateway.submit_port_in(MagicMock(to_payload=MagicMock(return_value={})))


class TestErrorTranslation:
    """Test suite for SDK/transport error translation."""

    @pytest.mark.asyncio
    async def test_rest_404_is_not_found(self, gateway, mock_client):
        mock_client.fetch_portability.side_effect = TwilioRestException(
            404, "https://numbers.twilio.com/v1/Porting/Portability", msg="Not found"
        )

        with pytest.raises(ProviderNotFoundError) as exc_info:
            await gateway.check_portability("+19495551234")

        assert exc_info.value.provider_status == 404
        assert exc_info.value.operation == "check_portability"

    @pytest.mark.asyncio
    async def test_rest_error_code_20404_is_not_found(self, gateway, mock_client):
        mock_client.get_brand_registration.side_effect = TwilioRestException(
            400, "https://messaging.twilio.com", msg="Resource missing", code=20404
        )

        with pytest.raises(ProviderNotFoundError):
            await gateway.fetch_brand_status("BN123")

    @pytest.mark.asyncio
    async def test_rest_error_is_remote_failure(self, gateway, mock_client):
        mock_client.create_brand_registration.side_effect = TwilioRestException(
            400, "https://messaging.twilio.com", msg="Invalid EIN", code=21601
        )

        with pytest.raises(RemoteCallFailedError) as exc_info:
            await gateway.create_brand_registration("BU123", "STANDARD")

        assert not isinstance(exc_info.value, ProviderNotFoundError)
        assert exc_info.value.provider_code == 21601

    @pytest.mark.asyncio
    async def test_timeout(self, gateway, mock_client):
        mock_client.create_customer_profile.side_effect = TimeoutError()

        with pytest.raises(ProviderTimeoutError) as exc_info:
            await gateway.create_customer_profile("Sunrise", "a@b.example")

        assert exc_info.value.timeout_duration == 5

    @pytest.mark.asyncio
    async def test_http_status_error(self, gateway, mock_client):
        request = httpx.Request("GET", "https://numbers.example.com/v1/Porting/PortIn/KW1")
        mock_client.get_port_in.side_effect = httpx.HTTPStatusError(
            "server error", request=request, response=httpx.Response(500, request=request)
        )

        with pytest.raises(RemoteCallFailedError) as exc_info:
            await gateway.fetch_port_in("KW1")

        assert exc_info.value.provider_status == 500


class TestNumbersApi:
    """Test suite for the Port In API calls made over httpx."""

    @pytest.mark.asyncio
    async def test_create_port_in_posts_json_with_basic_auth(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"port_in_request_sid": "KW123"})

        client = _numbers_client(handler)

        body = await client.create_port_in({"phone_numbers": [{"phone_number": "+1"}]})

        assert body == {"port_in_request_sid": "KW123"}
        assert seen["method"] == "POST"
        assert seen["url"] == "https://numbers.example.com/v1/Porting/PortIn"
        assert seen["auth"].startswith("Basic ")
        assert seen["body"] == {"phone_numbers": [{"phone_number": "+1"}]}

    @pytest.mark.asyncio
    async def test_fetch_port_in_status(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v1/Porting/PortIn/KW123"
            return httpx.Response(
                200,
                json={
                    "port_in_request_sid": "KW123",
                    "port_in_request_status": "in_progress",
                    "status_details": "FOC date set",
                },
            )

        gateway = TwilioGateway(_numbers_client(handler), settings)

        status = await gateway.fetch_port_in("KW123")

        assert status.status == "in_progress"
        assert status.status_detail == "FOC date set"

    @pytest.mark.asyncio
    async def test_fetch_port_in_404_is_not_found(self, settings):
        gateway = TwilioGateway(
            _numbers_client(lambda request: httpx.Response(404, json={"code": 20404})),
            settings,
        )

        with pytest.raises(ProviderNotFoundError):
            await gateway.fetch_port_in("KW_missing")


class TestGatewaySelection:
    """Test suite for get_provider_gateway and UnavailableGateway."""

    def test_unconfigured_settings_give_unavailable_gateway(self):
        set_twilio_settings(TwilioSettings(account_sid=None, auth_token=None))
        try:
            gateway = get_provider_gateway()
        finally:
            set_twilio_settings(None)

        assert isinstance(gateway, UnavailableGateway)
        assert gateway.is_configured is False

    def test_configured_settings_give_twilio_gateway(self, settings):
        set_twilio_settings(settings)
        try:
            gateway = get_provider_gateway()
        finally:
            set_twilio_settings(None)

        assert isinstance(gateway, TwilioGateway)
        assert gateway.is_configured is True

    @pytest.mark.asyncio
    async def test_unavailable_gateway_refuses_calls(self):
        gateway = UnavailableGateway()

        with pytest.raises(ProviderUnavailableError) as exc_info:
            await gateway.check_portability("+19495551234")

        assert exc_info.value.status_code == 503
        assert exc_info.value.operation == "check_portability"
