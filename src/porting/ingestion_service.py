"""
Port-in status ingestion.

Both the provider's status webhook and an explicit refresh land here, so the
two synchronization paths converge on the same update: map the vendor status,
then apply it keyed by the provider's request SID.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.db.port_requests.model import PortRequest
from src.db.port_requests.repository import PortRequestRepository
from src.exceptions import MissingRequestIdError
from src.porting.constants import PortRequestStatus, map_vendor_status
from src.utils.logger import logger


class PortStatusIngestionService:
    """Applies provider port-in statuses to local port requests."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = PortRequestRepository(session)

    async def ingest_port_status(
        self,
        provider_request_id: str | None,
        vendor_status: str | None,
        vendor_detail: str | None,
    ) -> PortRequest | None:
        """
        Handle a port-in status delivery from the provider.

        Safe to replay: the status overwrite converges and ``completed_at``
        is only ever set once.

        Args:
            provider_request_id: Provider's port-in request SID
            vendor_status: Provider status string
            vendor_detail: Provider status details

        Returns:
            The updated port request, or None if no request matches

        Raises:
            MissingRequestIdError: If the delivery carries no request SID
        """
        if not provider_request_id or not provider_request_id.strip():
            raise MissingRequestIdError()

        port_request = await self.apply(
            provider_request_id.strip(), vendor_status, vendor_detail
        )
        await self.session.commit()
        return port_request

    async def apply(
        self,
        provider_request_id: str,
        vendor_status: str | None,
        vendor_detail: str | None,
    ) -> PortRequest | None:
        """Map and apply a provider status without committing."""
        status = map_vendor_status(vendor_status)

        current = await self.repository.get_by_provider_request_id(provider_request_id)
        if current is None:
            logger.info(
                "[TWILIO] Port status for unknown request ignored",
                provider_request_id=provider_request_id,
                vendor_status=vendor_status,
            )
            return None

        if PortRequestStatus(current.status).is_terminal and not status.is_terminal:
            logger.warning(
                "[TWILIO] Terminal port request moved back to a non-terminal status",
                port_request_id=current.id,
                provider_request_id=provider_request_id,
                previous_status=current.status,
                new_status=status.value,
            )

        port_request = await self.repository.apply_status_update(
            provider_request_id, status, vendor_detail
        )
        logger.info(
            "[TWILIO] Port status applied",
            provider_request_id=provider_request_id,
            vendor_status=vendor_status,
            status=status.value,
        )
        return port_request
