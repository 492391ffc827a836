"""Repository for port-in requests."""

from datetime import UTC, datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.port_requests.model import PortRequest
from src.porting.constants import TERMINAL_PORT_STATUSES, PortRequestStatus


class PortRequestRepository:
    """Repository for port request lifecycle records."""

    def __init__(self, session: AsyncSession):
        """
        Initialize the repository.

        Args:
            session: Async database session
        """
        self.session = session

    async def create(self, **fields) -> PortRequest:
        """
        Insert a port request.

        Args:
            **fields: Column values (organization_id, phone_number, ...)

        Returns:
            Created port request
        """
        port_request = PortRequest(**fields)
        self.session.add(port_request)
        await self.session.flush()
        await self.session.refresh(port_request)
        return port_request

    async def list_for_org(self, org_id: str) -> list[PortRequest]:
        """List the organization's requests, newest first."""
        result = await self.session.execute(
            select(PortRequest)
            .where(PortRequest.organization_id == org_id)
            .order_by(PortRequest.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_for_org(self, org_id: str, port_request_id: str) -> PortRequest | None:
        result = await self.session.execute(
            select(PortRequest).where(
                PortRequest.id == port_request_id,
                PortRequest.organization_id == org_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_provider_request_id(
        self, provider_request_id: str
    ) -> PortRequest | None:
        result = await self.session.execute(
            select(PortRequest)
            .where(PortRequest.provider_request_id == provider_request_id)
            .order_by(PortRequest.created_at.desc())
        )
        return result.scalars().first()

    async def has_open_request(self, org_id: str, phone_number: str) -> bool:
        """Whether a non-terminal request already exists for the number."""
        result = await self.session.execute(
            select(func.count())
            .select_from(PortRequest)
            .where(
                PortRequest.organization_id == org_id,
                PortRequest.phone_number == phone_number,
                PortRequest.status.not_in([s.value for s in TERMINAL_PORT_STATUSES]),
            )
        )
        return result.scalar_one() > 0

    async def apply_status_update(
        self,
        provider_request_id: str,
        status: PortRequestStatus,
        status_detail: str | None,
    ) -> PortRequest | None:
        """
        Apply a provider status to the request(s) keyed by the provider id.

        ``completed_at`` is only filled when the new status is completed and
        the column is still null, so replaying the same update is a no-op.

        Args:
            provider_request_id: Provider's port-in request SID
            status: Mapped local status
            status_detail: Free-form detail from the provider

        Returns:
            The updated request, or None when no request matches
        """
        now = datetime.now(UTC)
        values = {
            "status": status.value,
            "status_detail": status_detail,
            "updated_at": now,
        }
        if status is PortRequestStatus.COMPLETED:
            values["completed_at"] = func.coalesce(PortRequest.completed_at, now)

        result = await self.session.execute(
            update(PortRequest)
            .where(PortRequest.provider_request_id == provider_request_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None

        refreshed = await self.session.execute(
            select(PortRequest)
            .where(PortRequest.provider_request_id == provider_request_id)
            .order_by(PortRequest.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return refreshed.scalars().first()
