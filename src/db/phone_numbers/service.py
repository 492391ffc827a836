"""
Service layer for phone number call settings.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.db.phone_numbers.model import PhoneNumber
from src.db.phone_numbers.repository import PhoneNumberRepository
from src.exceptions import NotFoundError
from src.forwarding.schemas import ForwardingRequest
from src.forwarding.service import AuthorizedForwardingRegistry
from src.utils.logger import logger


class PhoneNumberService:
    """Service for listing numbers and updating their forwarding."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = PhoneNumberRepository(session)
        self.forwarding = AuthorizedForwardingRegistry(session)

    async def list_phone_numbers(self, org_id: str) -> list[PhoneNumber]:
        """List the organization's numbers."""
        return await self.repository.list_for_org(org_id)

    async def update_call_settings(
        self,
        org_id: str,
        user_id: str | None,
        phone_number_id: str,
        request: ForwardingRequest,
    ) -> PhoneNumber:
        """
        Resolve and persist the forwarding destination of a number.

        Args:
            org_id: Owning organization
            user_id: Acting user
            phone_number_id: Phone number to update
            request: Requested call setting

        Returns:
            Updated phone number

        Raises:
            NotFoundError: If the number does not belong to the organization
            NotAuthorizedError: If the destination is not authorized
            InvalidInputError: If a raw destination cannot be normalized
        """
        phone_number = await self.repository.get_for_org(org_id, phone_number_id)
        if phone_number is None:
            raise NotFoundError("Phone number not found")

        resolution = await self.forwarding.resolve_forwarding(org_id, user_id, request)
        await self.repository.set_forwarding(
            phone_number,
            authorized_number_id=resolution.authorized_id,
            forward_to=resolution.forward_number,
        )
        logger.info(
            "Call settings updated",
            organization_id=org_id,
            phone_number_id=phone_number.id,
            forwarding=not resolution.is_cleared,
        )
        return phone_number
