"""
Service layer for authorized call-forwarding destinations.

An organization may only forward calls to numbers it has explicitly
authorized. ``resolve_forwarding`` turns a requested call setting into an
approved, persisted destination (or a cleared one).
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.db.authorized_forward_numbers.model import AuthorizedForwardNumber
from src.db.authorized_forward_numbers.repository import (
    AuthorizedForwardNumberRepository,
)
from src.db.phone_numbers.repository import PhoneNumberRepository
from src.exceptions import NotAuthorizedError, NotFoundError
from src.forwarding.constants import (
    AUTHORIZE_FIRST_MESSAGE,
    UNKNOWN_AUTHORIZED_NUMBER_MESSAGE,
    CallMode,
)
from src.forwarding.schemas import ForwardingRequest, ForwardingResolution
from src.utils.logger import logger
from src.utils.phone import require_e164


class AuthorizedForwardingRegistry:
    """Manages an organization's approved forwarding destinations."""

    def __init__(self, session: AsyncSession):
        """
        Initialize the registry.

        Args:
            session: Async database session
        """
        self.session = session
        self.repository = AuthorizedForwardNumberRepository(session)
        self.phone_numbers = PhoneNumberRepository(session)

    async def list_authorized(self, org_id: str) -> list[AuthorizedForwardNumber]:
        """List the organization's non-disabled destinations, newest first."""
        return await self.repository.list_active(org_id)

    async def authorize(
        self,
        org_id: str,
        user_id: str | None,
        raw_number: str,
        label: str | None = None,
    ) -> AuthorizedForwardNumber:
        """
        Authorize a destination, reactivating it if it was disabled.

        Authorizing the same number twice returns the same record.

        Args:
            org_id: Owning organization
            user_id: Acting user (audit only)
            raw_number: Number as typed by the user
            label: Optional display label

        Returns:
            The approved record

        Raises:
            InvalidInputError: If the number cannot be normalized
        """
        e164_number = require_e164(raw_number)
        record = await self.repository.upsert_approved(
            org_id=org_id, user_id=user_id, e164_number=e164_number, label=label
        )
        logger.info(
            "Forwarding number authorized",
            organization_id=org_id,
            authorized_number_id=record.id,
        )
        return record

    async def disable(self, org_id: str, authorized_number_id: str) -> AuthorizedForwardNumber:
        """
        Disable a destination and clear forwarding on numbers that use it.

        Raises:
            NotFoundError: If the record does not exist in this organization
        """
        record = await self.repository.get_for_org(org_id, authorized_number_id)
        if record is None:
            raise NotFoundError(UNKNOWN_AUTHORIZED_NUMBER_MESSAGE)

        await self.repository.disable(record)
        cleared = await self.phone_numbers.clear_forwarding_for_authorized(
            org_id, record.id
        )
        logger.info(
            "Forwarding number disabled",
            organization_id=org_id,
            authorized_number_id=record.id,
            cleared_phone_numbers=cleared,
        )
        return record

    async def resolve_forwarding(
        self, org_id: str, user_id: str | None, request: ForwardingRequest
    ) -> ForwardingResolution:
        """
        Resolve a requested call setting to an approved destination.

        Args:
            org_id: Owning organization
            user_id: Acting user, recorded if a destination is auto-authorized
            request: Requested call setting

        Returns:
            ForwardingResolution: destination number and authorized id, or both None

        Raises:
            NotAuthorizedError: Unknown/disabled id, or unauthorized raw number
                without auto-authorization
            InvalidInputError: Raw number cannot be normalized
        """
        if request.call_mode == CallMode.VOICEMAIL:
            return ForwardingResolution()

        if request.authorized_number_id:
            record = await self.repository.get_for_org(
                org_id, request.authorized_number_id
            )
            if record is None or record.is_disabled:
                raise NotAuthorizedError(UNKNOWN_AUTHORIZED_NUMBER_MESSAGE)
            return ForwardingResolution(
                forward_number=record.e164_number, authorized_id=record.id
            )

        if request.call_forward_to and request.call_forward_to.strip():
            e164_number = require_e164(request.call_forward_to)
            record = await self.repository.get_by_number(org_id, e164_number)
            if record is None or record.is_disabled:
                if not request.auto_authorize_if_missing:
                    raise NotAuthorizedError(AUTHORIZE_FIRST_MESSAGE)
                record = await self.repository.upsert_approved(
                    org_id=org_id, user_id=user_id, e164_number=e164_number
                )
                logger.info(
                    "Forwarding number auto-authorized",
                    organization_id=org_id,
                    authorized_number_id=record.id,
                )
            return ForwardingResolution(
                forward_number=record.e164_number, authorized_id=record.id
            )

        return ForwardingResolution()
