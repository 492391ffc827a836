"""
Twilio implementation of the provider gateway.

SDK and HTTP failures are translated into ``ProviderError`` subclasses here so
callers only ever see the typed errors declared in ``exceptions.py``.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from twilio.base.exceptions import TwilioException, TwilioRestException

from src.integrations.twilio.base import ProviderGateway
from src.integrations.twilio.client import TwilioComplianceClient
from src.integrations.twilio.config import TwilioSettings, TwilioWebhooks
from src.integrations.twilio.exceptions import (
    ProviderNotFoundError,
    ProviderTimeoutError,
    ProviderUnavailableError,
    RemoteCallFailedError,
)
from src.integrations.twilio.schemas import (
    BrandRegistrationResult,
    BusinessIdentity,
    CampaignRegistrationRequest,
    CampaignRegistrationResult,
    PortabilityResult,
    PortInStatus,
    PortInSubmission,
)
from src.utils.logger import logger

# Twilio's "resource not found" error code
TWILIO_NOT_FOUND_CODE = 20404

BUSINESS_INFORMATION_END_USER_TYPE = "customer_profile_business_information"
PROFILE_PENDING_REVIEW = "pending-review"


@asynccontextmanager
async def translate_provider_errors(
    operation: str, timeout: float | None = None
) -> AsyncIterator[None]:
    """Re-raise SDK/transport failures as typed provider errors."""
    try:
        yield
    except TwilioRestException as e:
        logger.error(
            "[TWILIO] API error",
            operation=operation,
            status=e.status,
            code=e.code,
            error=e.msg,
        )
        error_cls = (
            ProviderNotFoundError
            if e.status == 404 or e.code == TWILIO_NOT_FOUND_CODE
            else RemoteCallFailedError
        )
        raise error_cls(
            f"Twilio {operation} failed: {e.msg}",
            operation=operation,
            provider_status=e.status,
            provider_code=e.code,
        ) from e
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        error_cls = ProviderNotFoundError if status_code == 404 else RemoteCallFailedError
        raise error_cls(
            f"Twilio {operation} failed with HTTP {status_code}",
            operation=operation,
            provider_status=status_code,
        ) from e
    except (TimeoutError, httpx.TimeoutException) as e:
        logger.error("[TWILIO] Request timed out", operation=operation, timeout=timeout)
        raise ProviderTimeoutError(
            f"Twilio {operation} timed out",
            operation=operation,
            timeout_duration=timeout,
        ) from e
    except (httpx.HTTPError, TwilioException) as e:
        logger.error("[TWILIO] Transport error", operation=operation, error=str(e))
        raise RemoteCallFailedError(
            f"Twilio {operation} failed: {e}", operation=operation
        ) from e


class TwilioGateway(ProviderGateway):
    """Provider gateway backed by the platform's Twilio account."""

    def __init__(self, client: TwilioComplianceClient, settings: TwilioSettings):
        """
        Initialize with a configured client wrapper.

        Args:
            client: Async Twilio client wrapper
            settings: Twilio settings (policy SID, timeout)
        """
        self.client = client
        self.settings = settings
        self.webhooks = TwilioWebhooks()

    def _errors(self, operation: str):
        return translate_provider_errors(operation, timeout=self.settings.request_timeout)

    async def create_customer_profile(self, friendly_name: str, email: str) -> str:
        async with self._errors("create_customer_profile"):
            sid = await self.client.create_customer_profile(
                friendly_name=friendly_name,
                email=email,
                policy_sid=self.settings.a2p_policy_sid,
            )
        logger.info("[TWILIO] Customer profile created", profile_sid=sid)
        return sid

    async def create_business_identity(self, identity: BusinessIdentity) -> str:
        async with self._errors("create_business_identity"):
            sid = await self.client.create_end_user(
                friendly_name=identity.legal_name,
                end_user_type=BUSINESS_INFORMATION_END_USER_TYPE,
                attributes=identity.to_attributes(),
            )
        logger.info("[TWILIO] Business identity created", end_user_sid=sid)
        return sid

    async def attach_identity(self, profile_sid: str, identity_sid: str) -> None:
        async with self._errors("attach_identity"):
            await self.client.assign_to_customer_profile(profile_sid, identity_sid)

    async def submit_profile_for_review(self, profile_sid: str) -> None:
        async with self._errors("submit_profile_for_review"):
            await self.client.update_customer_profile_status(
                profile_sid, PROFILE_PENDING_REVIEW
            )
        logger.info("[TWILIO] Customer profile submitted", profile_sid=profile_sid)

    async def create_brand_registration(
        self, profile_sid: str, brand_type: str
    ) -> BrandRegistrationResult:
        async with self._errors("create_brand_registration"):
            brand = await self.client.create_brand_registration(
                customer_profile_sid=profile_sid,
                a2p_profile_sid=self.settings.a2p_trust_bundle_sid or profile_sid,
                brand_type=brand_type,
            )
        logger.info("[TWILIO] Brand registered", brand_sid=brand.sid, status=brand.status)
        return BrandRegistrationResult(sid=brand.sid, status=brand.status)

    async def fetch_brand_status(self, brand_sid: str) -> BrandRegistrationResult:
        async with self._errors("fetch_brand_status"):
            brand = await self.client.get_brand_registration(brand_sid)
        return BrandRegistrationResult(sid=brand.sid, status=brand.status)

    async def get_or_create_messaging_service(
        self, friendly_name: str, existing_sid: str | None = None
    ) -> str:
        if existing_sid:
            return existing_sid
        async with self._errors("create_messaging_service"):
            sid = await self.client.create_messaging_service(
                friendly_name=friendly_name,
                inbound_request_url=self.webhooks.inbound_sms,
            )
        logger.info("[TWILIO] Messaging service created", messaging_service_sid=sid)
        return sid

    async def create_campaign(
        self, messaging_service_sid: str, request: CampaignRegistrationRequest
    ) -> CampaignRegistrationResult:
        async with self._errors("create_campaign"):
            usecase = await self.client.create_us_app_to_person(
                messaging_service_sid,
                brand_registration_sid=request.brand_registration_sid,
                description=request.description,
                message_flow=request.message_flow,
                message_samples=request.message_samples,
                us_app_to_person_usecase=request.use_case,
                has_embedded_links=request.has_embedded_links,
                has_embedded_phone=request.has_embedded_phone,
            )
        logger.info(
            "[TWILIO] Campaign registered",
            campaign_sid=usecase.sid,
            campaign_status=usecase.campaign_status,
        )
        return CampaignRegistrationResult(
            sid=usecase.sid,
            campaign_status=usecase.campaign_status,
            campaign_id=usecase.campaign_id,
        )

    async def list_campaigns(
        self, messaging_service_sid: str
    ) -> list[CampaignRegistrationResult]:
        async with self._errors("list_campaigns"):
            usecases = await self.client.list_us_app_to_person(messaging_service_sid)
        return [
            CampaignRegistrationResult(
                sid=usecase.sid,
                campaign_status=usecase.campaign_status,
                campaign_id=usecase.campaign_id,
            )
            for usecase in usecases
        ]

    async def associate_number(
        self, messaging_service_sid: str, phone_number_sid: str
    ) -> None:
        async with self._errors("associate_number"):
            await self.client.add_service_phone_number(
                messaging_service_sid, phone_number_sid
            )

    async def check_portability(self, phone_number: str) -> PortabilityResult:
        async with self._errors("check_portability"):
            result = await self.client.fetch_portability(phone_number)
        return PortabilityResult(
            phone_number=phone_number,
            portable=result.portable is True,
            number_type=result.number_type,
            country=result.country,
            pin_and_account_number_required=bool(result.pin_and_account_number_required),
            not_portable_reason=result.not_portable_reason,
            not_portable_reason_code=result.not_portable_reason_code,
        )

    async def submit_port_in(self, submission: PortInSubmission) -> str:
        payload = submission.to_payload()
        async with self._errors("submit_port_in"):
            body = await self.client.create_port_in(payload)

        sid = body.get("port_in_request_sid") or body.get("sid")
        if not sid:
            raise RemoteCallFailedError(
                "Twilio submit_port_in returned no request SID",
                operation="submit_port_in",
            )
        logger.info("[TWILIO] Port-in submitted", port_in_request_sid=sid)
        return sid

    async def fetch_port_in(self, port_in_request_sid: str) -> PortInStatus:
        async with self._errors("fetch_port_in"):
            body = await self.client.get_port_in(port_in_request_sid)
        return PortInStatus(
            port_in_request_sid=body.get("port_in_request_sid") or port_in_request_sid,
            status=body.get("port_in_request_status"),
            status_detail=body.get("status_details") or body.get("status_detail"),
        )


class UnavailableGateway(ProviderGateway):
    """Gateway used when Twilio credentials are absent; every call is refused."""

    @property
    def is_configured(self) -> bool:
        return False

    def _refuse(self, operation: str):
        raise ProviderUnavailableError(operation=operation)

    async def create_customer_profile(self, friendly_name: str, email: str) -> str:
        self._refuse("create_customer_profile")

    async def create_business_identity(self, identity: BusinessIdentity) -> str:
        self._refuse("create_business_identity")

    async def attach_identity(self, profile_sid: str, identity_sid: str) -> None:
        self._refuse("attach_identity")

    async def submit_profile_for_review(self, profile_sid: str) -> None:
        self._refuse("submit_profile_for_review")

    async def create_brand_registration(
        self, profile_sid: str, brand_type: str
    ) -> BrandRegistrationResult:
        self._refuse("create_brand_registration")

    async def fetch_brand_status(self, brand_sid: str) -> BrandRegistrationResult:
        self._refuse("fetch_brand_status")

    async def get_or_create_messaging_service(
        self, friendly_name: str, existing_sid: str | None = None
    ) -> str:
        self._refuse("get_or_create_messaging_service")

    async def create_campaign(
        self, messaging_service_sid: str, request: CampaignRegistrationRequest
    ) -> CampaignRegistrationResult:
        self._refuse("create_campaign")

    async def list_campaigns(
        self, messaging_service_sid: str
    ) -> list[CampaignRegistrationResult]:
        self._refuse("list_campaigns")

    async def associate_number(
        self, messaging_service_sid: str, phone_number_sid: str
    ) -> None:
        self._refuse("associate_number")

    async def check_portability(self, phone_number: str) -> PortabilityResult:
        self._refuse("check_portability")

    async def submit_port_in(self, submission: PortInSubmission) -> str:
        self._refuse("submit_port_in")

    async def fetch_port_in(self, port_in_request_sid: str) -> PortInStatus:
        self._refuse("fetch_port_in")
