"""
Number porting API endpoints.

All endpoints are tenant-authenticated except the provider status webhook,
which is keyed by the provider's own request SID.
"""

from fastapi import APIRouter, Depends, Form, Query, status

from src.auth.dependencies import get_current_user
from src.auth.schemas import User
from src.porting.dependencies import (
    get_port_request_orchestrator,
    get_port_status_ingestion_service,
)
from src.porting.ingestion_service import PortStatusIngestionService
from src.porting.schemas import (
    PortabilityCheckResponse,
    PortRequestCreate,
    PortRequestResponse,
    PortRequestSummary,
    WebhookAck,
)
from src.porting.service import PortRequestOrchestrator
from src.utils.logger import logger

router = APIRouter(prefix="/porting", tags=["Porting"])


@router.get("/check", response_model=PortabilityCheckResponse)
async def check_portability(
    phone_number: str | None = Query(None, alias="phoneNumber"),
    current_user: User = Depends(get_current_user),
    orchestrator: PortRequestOrchestrator = Depends(get_port_request_orchestrator),
) -> PortabilityCheckResponse:
    """
    Check whether a number can be ported in.

    Args:
        phone_number: Number as typed by the user
        current_user: Current authenticated user
        orchestrator: Port request orchestrator

    Returns:
        Portability result
    """
    return await orchestrator.check_portability(phone_number)


@router.post(
    "/request", response_model=PortRequestSummary, status_code=status.HTTP_201_CREATED
)
async def submit_port_request(
    data: PortRequestCreate,
    current_user: User = Depends(get_current_user),
    orchestrator: PortRequestOrchestrator = Depends(get_port_request_orchestrator),
) -> PortRequestSummary:
    """
    Submit a port-in request.

    The request is recorded even when the provider submission fails.

    Args:
        data: Submission form
        current_user: Current authenticated user
        orchestrator: Port request orchestrator

    Returns:
        Summary of the persisted request
    """
    port_request = await orchestrator.submit_port_request(
        current_user.organization_id, current_user.id, data
    )
    return PortRequestSummary.from_record(port_request)


@router.get("/requests", response_model=list[PortRequestResponse])
async def list_port_requests(
    current_user: User = Depends(get_current_user),
    orchestrator: PortRequestOrchestrator = Depends(get_port_request_orchestrator),
) -> list[PortRequestResponse]:
    """
    List the organization's port requests, newest first.

    Args:
        current_user: Current authenticated user
        orchestrator: Port request orchestrator

    Returns:
        Port requests
    """
    port_requests = await orchestrator.list_port_requests(current_user.organization_id)
    return [PortRequestResponse.from_record(pr) for pr in port_requests]


@router.post("/requests/{port_request_id}/refresh", response_model=PortRequestResponse)
async def refresh_port_request(
    port_request_id: str,
    current_user: User = Depends(get_current_user),
    orchestrator: PortRequestOrchestrator = Depends(get_port_request_orchestrator),
) -> PortRequestResponse:
    """
    Pull the provider's current status for a port request.

    Args:
        port_request_id: Port request ID
        current_user: Current authenticated user
        orchestrator: Port request orchestrator

    Returns:
        The (possibly unchanged) port request
    """
    port_request = await orchestrator.refresh_port_request(
        current_user.organization_id, port_request_id
    )
    return PortRequestResponse.from_record(port_request)


@router.post("/webhook", response_model=WebhookAck)
async def port_status_webhook(
    PortRequestSid: str | None = Form(None),
    Status: str | None = Form(None),
    StatusDetails: str | None = Form(None),
    ingestion: PortStatusIngestionService = Depends(get_port_status_ingestion_service),
) -> WebhookAck:
    """Handle Twilio port-in status updates."""
    logger.info(
        "[TWILIO] Port status webhook",
        port_request_sid=PortRequestSid,
        status=Status,
    )
    await ingestion.ingest_port_status(PortRequestSid, Status, StatusDetails)
    return WebhookAck()
