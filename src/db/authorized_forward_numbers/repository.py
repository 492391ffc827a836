"""Repository for authorized call-forwarding destinations."""

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.authorized_forward_numbers.model import AuthorizedForwardNumber
from src.exceptions import ConflictError
from src.forwarding.constants import AuthorizedNumberStatus
from src.utils.logger import logger


class AuthorizedForwardNumberRepository:
    """Tenant-scoped access to ``authorized_forward_numbers``."""

    def __init__(self, session: AsyncSession):
        """
        Initialize the repository.

        Args:
            session: Async database session
        """
        self.session = session

    async def get_for_org(
        self, org_id: str, authorized_number_id: str
    ) -> AuthorizedForwardNumber | None:
        """Get a record by id, only if it belongs to the organization."""
        result = await self.session.execute(
            select(AuthorizedForwardNumber).where(
                AuthorizedForwardNumber.id == authorized_number_id,
                AuthorizedForwardNumber.organization_id == org_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_number(
        self, org_id: str, e164_number: str
    ) -> AuthorizedForwardNumber | None:
        """Get the organization's record for a number, whatever its status."""
        result = await self.session.execute(
            select(AuthorizedForwardNumber).where(
                AuthorizedForwardNumber.organization_id == org_id,
                AuthorizedForwardNumber.e164_number == e164_number,
            )
        )
        return result.scalar_one_or_none()

    async def list_active(self, org_id: str) -> list[AuthorizedForwardNumber]:
        """List non-disabled records, newest first."""
        result = await self.session.execute(
            select(AuthorizedForwardNumber)
            .where(
                AuthorizedForwardNumber.organization_id == org_id,
                AuthorizedForwardNumber.status != AuthorizedNumberStatus.DISABLED.value,
            )
            .order_by(AuthorizedForwardNumber.created_at.desc())
        )
        return list(result.scalars().all())

    async def upsert_approved(
        self,
        org_id: str,
        user_id: str | None,
        e164_number: str,
        label: str | None = None,
    ) -> AuthorizedForwardNumber:
        """
        Create an approved record, or reactivate the existing one.

        The ``(organization_id, e164_number)`` unique constraint arbitrates
        concurrent inserts: the loser re-reads the winner's row and
        reactivates it.

        Args:
            org_id: Owning organization
            user_id: User performing the authorization (audit only)
            e164_number: Normalized destination number
            label: Optional display label; an existing label is kept when None

        Returns:
            The approved record

        Raises:
            ConflictError: If the insert lost a race and the winning row cannot be read
        """
        existing = await self.get_by_number(org_id, e164_number)
        if existing is not None:
            return await self._reactivate(existing, label)

        record = AuthorizedForwardNumber(
            organization_id=org_id,
            created_by_user_id=user_id,
            e164_number=e164_number,
            label=label,
            status=AuthorizedNumberStatus.APPROVED.value,
            verified_at=datetime.now(UTC),
        )
        try:
            async with self.session.begin_nested():
                self.session.add(record)
                await self.session.flush()
        except IntegrityError as e:
            logger.warning(
                "Authorized number insert raced; reusing existing row",
                organization_id=org_id,
                e164_number=e164_number,
            )
            existing = await self.get_by_number(org_id, e164_number)
            if existing is None:
                raise ConflictError(
                    "This forwarding number is being authorized concurrently. Try again."
                ) from e
            return await self._reactivate(existing, label)

        await self.session.refresh(record)
        return record

    async def _reactivate(
        self, record: AuthorizedForwardNumber, label: str | None
    ) -> AuthorizedForwardNumber:
        record.status = AuthorizedNumberStatus.APPROVED.value
        if label is not None:
            record.label = label
        if record.verified_at is None:
            record.verified_at = datetime.now(UTC)
        await self.session.flush()
        return record

    async def disable(self, record: AuthorizedForwardNumber) -> AuthorizedForwardNumber:
        record.status = AuthorizedNumberStatus.DISABLED.value
        await self.session.flush()
        return record
