"""
Port-in request orchestration.

A submission always produces exactly one local record. The record is written
first as ``submitted``; when the provider accepts the request it moves to
``in_review`` with the provider's SID. A provider failure leaves the
``submitted`` record in place so the organization keeps a durable request.
"""

from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from src.db.port_requests.model import PortRequest
from src.db.port_requests.repository import PortRequestRepository
from src.exceptions import InvalidInputError, NotFoundError
from src.integrations.twilio.base import ProviderGateway
from src.integrations.twilio.exceptions import (
    ProviderNotFoundError,
    ProviderUnavailableError,
    RemoteCallFailedError,
)
from src.integrations.twilio.schemas import (
    LosingCarrierInformation,
    PortInSubmission,
    ServiceAddress,
)
from src.porting.constants import (
    DEFAULT_COUNTRY,
    DEFAULT_CUSTOMER_TYPE,
    MISSING_AUTHORIZED_CONTACT_MESSAGE,
    NOT_PORTABLE_FALLBACK_REASON,
    TARGET_PORT_IN_LEAD_DAYS,
    PortRequestStatus,
    not_portable_reason,
)
from src.porting.ingestion_service import PortStatusIngestionService
from src.porting.schemas import PortabilityCheckResponse, PortRequestCreate
from src.utils.logger import logger
from src.utils.phone import require_e164


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def target_port_in_date(today: date | None = None) -> str:
    """ISO date at least ``TARGET_PORT_IN_LEAD_DAYS`` days out."""
    today = today or date.today()
    return (today + timedelta(days=TARGET_PORT_IN_LEAD_DAYS)).isoformat()


class PortRequestOrchestrator:
    """Checks portability, submits port-in requests and owns their records."""

    def __init__(self, session: AsyncSession, gateway: ProviderGateway):
        """
        Initialize the orchestrator.

        Args:
            session: Async database session
            gateway: Provider gateway
        """
        self.session = session
        self.gateway = gateway
        self.repository = PortRequestRepository(session)
        self.ingestion = PortStatusIngestionService(session)

    def _require_gateway(self, operation: str) -> None:
        if not self.gateway.is_configured:
            raise ProviderUnavailableError(operation=operation)

    async def check_portability(self, raw_number: str | None) -> PortabilityCheckResponse:
        """
        Check whether a number can be ported in.

        A not-found answer from the provider is treated as portable with an
        unknown number type; the port attempt itself is authoritative.

        Args:
            raw_number: Number as typed by the user

        Returns:
            PortabilityCheckResponse

        Raises:
            ProviderUnavailableError: If the gateway is not configured
            InvalidInputError: If the number cannot be normalized
            RemoteCallFailedError: For provider failures other than not-found
        """
        self._require_gateway("check_portability")
        e164_number = require_e164(raw_number)

        try:
            result = await self.gateway.check_portability(e164_number)
        except ProviderNotFoundError:
            logger.info(
                "[TWILIO] Portability unknown, allowing",
                phone_number=e164_number,
            )
            return PortabilityCheckResponse(
                portable=True,
                phone_number=e164_number,
                number_type="UNKNOWN",
                country=DEFAULT_COUNTRY,
                pin_required=False,
                reason=None,
                reason_code=None,
            )

        if result.portable:
            reason = None
        elif result.not_portable_reason:
            reason = not_portable_reason(result.not_portable_reason)
        else:
            reason = NOT_PORTABLE_FALLBACK_REASON

        return PortabilityCheckResponse(
            portable=result.portable,
            phone_number=e164_number,
            number_type=result.number_type or None,
            country=result.country or None,
            pin_required=result.pin_and_account_number_required,
            reason=reason,
            reason_code=result.not_portable_reason_code or None,
        )

    async def submit_port_request(
        self, org_id: str, user_id: str | None, data: PortRequestCreate
    ) -> PortRequest:
        """
        Submit a port-in request and record it.

        Args:
            org_id: Owning organization
            user_id: Submitting user (audit only)
            data: Submission form

        Returns:
            The persisted port request (``in_review`` when the provider
            accepted it, ``submitted`` otherwise)

        Raises:
            ProviderUnavailableError: If the gateway is not configured
            InvalidInputError: If the number, authorized name or email is missing/invalid
        """
        self._require_gateway("submit_port_request")

        e164_number = require_e164(data.phone_number)
        authorized_name = _clean(data.authorized_name)
        authorized_email = _clean(data.authorized_email)
        if not authorized_name or not authorized_email:
            raise InvalidInputError(MISSING_AUTHORIZED_CONTACT_MESSAGE)

        if await self.repository.has_open_request(org_id, e164_number):
            logger.warning(
                "Port request submitted while another is still open",
                organization_id=org_id,
                phone_number=e164_number,
            )

        address_parts = [
            _clean(data.street),
            _clean(data.city),
            _clean(data.state),
            _clean(data.zip),
        ]
        service_address = ", ".join(part for part in address_parts if part) or None

        port_request = await self.repository.create(
            organization_id=org_id,
            created_by_user_id=user_id,
            phone_number=e164_number,
            losing_carrier=_clean(data.losing_carrier),
            authorized_name=authorized_name,
            authorized_email=authorized_email,
            authorized_phone=_clean(data.authorized_phone),
            service_address=service_address,
            status=PortRequestStatus.SUBMITTED.value,
        )
        await self.session.commit()

        submission = self._build_submission(
            data, e164_number, authorized_name, authorized_email
        )
        try:
            provider_request_id = await self.gateway.submit_port_in(submission)
        except RemoteCallFailedError as e:
            logger.error(
                "Port-in submission did not reach the provider; kept as submitted",
                organization_id=org_id,
                port_request_id=port_request.id,
                error=str(e),
            )
            return port_request

        port_request.provider_request_id = provider_request_id
        port_request.status = PortRequestStatus.IN_REVIEW.value
        await self.session.commit()
        logger.info(
            "Port request submitted",
            organization_id=org_id,
            port_request_id=port_request.id,
            provider_request_id=provider_request_id,
        )
        return port_request

    def _build_submission(
        self,
        data: PortRequestCreate,
        e164_number: str,
        authorized_name: str,
        authorized_email: str,
    ) -> PortInSubmission:
        street, city, state, zip_code = (
            _clean(data.street),
            _clean(data.city),
            _clean(data.state),
            _clean(data.zip),
        )
        address = None
        if street or city or state or zip_code:
            address = ServiceAddress(
                street=street or "",
                city=city or "",
                state=state or "",
                zip=zip_code or "",
                country=DEFAULT_COUNTRY,
            )

        return PortInSubmission(
            phone_numbers=[e164_number],
            losing_carrier_information=LosingCarrierInformation(
                customer_type=_clean(data.customer_type) or DEFAULT_CUSTOMER_TYPE,
                customer_name=_clean(data.customer_name) or authorized_name,
                authorized_representative=authorized_name,
                authorized_representative_email=authorized_email,
                account_telephone_number=e164_number,
                account_number=_clean(data.account_number),
                address=address,
            ),
            notification_emails=[authorized_email],
            target_port_in_date=target_port_in_date(),
        )

    async def list_port_requests(self, org_id: str) -> list[PortRequest]:
        """List the organization's requests, newest first. Local data only."""
        return await self.repository.list_for_org(org_id)

    async def refresh_port_request(self, org_id: str, port_request_id: str) -> PortRequest:
        """
        Pull the current provider status of a request and apply it.

        Args:
            org_id: Owning organization
            port_request_id: Local port request ID

        Returns:
            The (possibly unchanged) port request

        Raises:
            NotFoundError: If the request does not belong to the organization
            ProviderUnavailableError: If the gateway is not configured
        """
        port_request = await self.repository.get_for_org(org_id, port_request_id)
        if port_request is None:
            raise NotFoundError("Port request not found")
        if not port_request.provider_request_id:
            return port_request

        self._require_gateway("refresh_port_request")
        try:
            remote = await self.gateway.fetch_port_in(port_request.provider_request_id)
        except RemoteCallFailedError as e:
            logger.warning(
                "Port request refresh failed",
                port_request_id=port_request.id,
                provider_request_id=port_request.provider_request_id,
                error=str(e),
            )
            return port_request

        updated = await self.ingestion.apply(
            port_request.provider_request_id, remote.status, remote.status_detail
        )
        await self.session.commit()
        return updated or port_request
