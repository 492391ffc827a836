"""Repository for organization phone numbers."""

from datetime import UTC, datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.compliance.constants import A2PStatus
from src.db.phone_numbers.model import PhoneNumber


class PhoneNumberRepository:
    """Tenant-scoped queries over ``phone_numbers``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_for_org(self, org_id: str) -> list[PhoneNumber]:
        """List every number the organization owns, oldest first."""
        result = await self.session.execute(
            select(PhoneNumber)
            .where(PhoneNumber.organization_id == org_id)
            .order_by(PhoneNumber.created_at)
        )
        return list(result.scalars().all())

    async def get_for_org(self, org_id: str, phone_number_id: str) -> PhoneNumber | None:
        result = await self.session.execute(
            select(PhoneNumber).where(
                PhoneNumber.id == phone_number_id,
                PhoneNumber.organization_id == org_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_with_provider_id(self, org_id: str) -> list[PhoneNumber]:
        """List the organization's numbers that exist on the provider side."""
        result = await self.session.execute(
            select(PhoneNumber)
            .where(
                PhoneNumber.organization_id == org_id,
                PhoneNumber.provider_number_id.is_not(None),
            )
            .order_by(PhoneNumber.created_at)
        )
        return list(result.scalars().all())

    async def set_a2p_status(self, phone_number: PhoneNumber, status: A2PStatus) -> None:
        phone_number.a2p_status = status.value
        await self.session.flush()

    async def set_forwarding(
        self,
        phone_number: PhoneNumber,
        authorized_number_id: str | None,
        forward_to: str | None,
    ) -> PhoneNumber:
        """
        Point a number at an authorized destination, or clear forwarding.

        Args:
            phone_number: Number to update
            authorized_number_id: AuthorizedForwardNumber id, or None to clear
            forward_to: E.164 destination mirrored into the legacy column

        Returns:
            Updated phone number
        """
        phone_number.call_forward_authorized_number_id = authorized_number_id
        phone_number.call_forward_to = forward_to
        await self.session.flush()
        return phone_number

    async def clear_forwarding_for_authorized(
        self, org_id: str, authorized_number_id: str
    ) -> int:
        """
        Clear forwarding on every number that references an authorized destination.

        Returns:
            Number of phone numbers updated
        """
        result = await self.session.execute(
            update(PhoneNumber)
            .where(
                PhoneNumber.organization_id == org_id,
                PhoneNumber.call_forward_authorized_number_id == authorized_number_id,
            )
            .values(
                call_forward_authorized_number_id=None,
                call_forward_to=None,
                updated_at=datetime.now(UTC),
            )
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
