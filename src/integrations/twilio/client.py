"""
Twilio client wrapper for async operations.

The Twilio SDK is synchronous, so SDK calls run in a worker thread and are
bounded by the configured request timeout. The Numbers v1 Port In API takes a
JSON body and is called directly over httpx with basic auth.
"""

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from twilio.rest import Client
from twilio.rest.messaging.v1.brand_registration import BrandRegistrationInstance
from twilio.rest.messaging.v1.service.us_app_to_person import UsAppToPersonInstance
from twilio.rest.numbers.v1.porting_portability import PortingPortabilityInstance

from src.utils.logger import logger

T = TypeVar("T")


class TwilioComplianceClient:
    """Async wrapper for the TrustHub, Messaging and Numbers APIs."""

    def __init__(
        self,
        client: Client,
        timeout: float,
        numbers_api_base_url: str = "https://numbers.twilio.com",
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize client wrapper.

        Args:
            client: Configured Twilio REST client
            timeout: Seconds allowed for each call
            numbers_api_base_url: Base URL of the Numbers v1 API
            http_client: Optional preconfigured httpx client (tests inject a mock transport)
        """
        self.client = client
        self.timeout = timeout
        self.numbers_api_base_url = numbers_api_base_url.rstrip("/")
        self._http_client = http_client

    async def _run(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        return await asyncio.wait_for(
            asyncio.to_thread(func, *args, **kwargs), timeout=self.timeout
        )

    # ------------------------------------------------------------------
    # TrustHub
    # ------------------------------------------------------------------

    async def create_customer_profile(
        self, friendly_name: str, email: str, policy_sid: str
    ) -> str:
        profile = await self._run(
            self.client.trusthub.v1.customer_profiles.create,
            friendly_name=friendly_name,
            email=email,
            policy_sid=policy_sid,
        )
        return profile.sid

    async def create_end_user(
        self, friendly_name: str, end_user_type: str, attributes: dict[str, Any]
    ) -> str:
        end_user = await self._run(
            self.client.trusthub.v1.end_users.create,
            friendly_name=friendly_name,
            type=end_user_type,
            attributes=attributes,
        )
        return end_user.sid

    async def assign_to_customer_profile(self, profile_sid: str, object_sid: str) -> None:
        await self._run(
            self.client.trusthub.v1.customer_profiles(
                profile_sid
            ).customer_profiles_entity_assignments.create,
            object_sid=object_sid,
        )

    async def update_customer_profile_status(self, profile_sid: str, status: str) -> None:
        await self._run(
            self.client.trusthub.v1.customer_profiles(profile_sid).update,
            status=status,
        )

    # ------------------------------------------------------------------
    # Messaging (A2P 10DLC)
    # ------------------------------------------------------------------

    async def create_brand_registration(
        self, customer_profile_sid: str, a2p_profile_sid: str, brand_type: str
    ) -> BrandRegistrationInstance:
        return await self._run(
            self.client.messaging.v1.brand_registrations.create,
            customer_profile_bundle_sid=customer_profile_sid,
            a2p_profile_bundle_sid=a2p_profile_sid,
            brand_type=brand_type,
        )

    async def get_brand_registration(self, brand_sid: str) -> BrandRegistrationInstance:
        return await self._run(
            self.client.messaging.v1.brand_registrations(brand_sid).fetch
        )

    async def create_messaging_service(
        self, friendly_name: str, inbound_request_url: str | None = None
    ) -> str:
        params: dict[str, Any] = {"friendly_name": friendly_name}
        if inbound_request_url:
            params["inbound_request_url"] = inbound_request_url
        service = await self._run(self.client.messaging.v1.services.create, **params)
        return service.sid

    async def create_us_app_to_person(
        self, messaging_service_sid: str, **params: Any
    ) -> UsAppToPersonInstance:
        return await self._run(
            self.client.messaging.v1.services(
                messaging_service_sid
            ).us_app_to_person.create,
            **params,
        )

    async def list_us_app_to_person(
        self, messaging_service_sid: str
    ) -> list[UsAppToPersonInstance]:
        return await self._run(
            self.client.messaging.v1.services(messaging_service_sid).us_app_to_person.list
        )

    async def add_service_phone_number(
        self, messaging_service_sid: str, phone_number_sid: str
    ) -> None:
        await self._run(
            self.client.messaging.v1.services(messaging_service_sid).phone_numbers.create,
            phone_number_sid=phone_number_sid,
        )

    # ------------------------------------------------------------------
    # Numbers (porting)
    # ------------------------------------------------------------------

    async def fetch_portability(self, phone_number: str) -> PortingPortabilityInstance:
        return await self._run(
            self.client.numbers.v1.porting_portabilities(phone_number).fetch
        )

    async def _numbers_request(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        url = f"{self.numbers_api_base_url}{path}"
        auth = (self.client.username, self.client.password)

        if self._http_client is not None:
            response = await self._http_client.request(method, url, json=json, auth=auth)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as http_client:
                response = await http_client.request(method, url, json=json, auth=auth)

        if response.is_error:
            logger.warning(
                "[TWILIO] Numbers API error response",
                method=method,
                path=path,
                status_code=response.status_code,
                body=response.text[:500],
            )
        response.raise_for_status()
        return response.json()

    async def create_port_in(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._numbers_request("POST", "/v1/Porting/PortIn", json=payload)

    async def get_port_in(self, port_in_request_sid: str) -> dict[str, Any]:
        return await self._numbers_request(
            "GET", f"/v1/Porting/PortIn/{port_in_request_sid}"
        )
