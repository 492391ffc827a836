"""
Dependencies for porting endpoints.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.database import get_db
from src.integrations.twilio.base import ProviderGateway
from src.integrations.twilio.dependencies import get_provider_gateway
from src.porting.ingestion_service import PortStatusIngestionService
from src.porting.service import PortRequestOrchestrator


def get_port_request_orchestrator(
    session: AsyncSession = Depends(get_db),
    gateway: ProviderGateway = Depends(get_provider_gateway),
) -> PortRequestOrchestrator:
    """Get port request orchestrator instance."""
    return PortRequestOrchestrator(session, gateway)


def get_port_status_ingestion_service(
    session: AsyncSession = Depends(get_db),
) -> PortStatusIngestionService:
    """Get port status ingestion service instance (no provider calls)."""
    return PortStatusIngestionService(session)
