"""
Authorized forwarding number API endpoints.
"""

from fastapi import APIRouter, Depends, status

from src.auth.dependencies import get_current_user
from src.auth.schemas import User
from src.forwarding.dependencies import get_forwarding_registry
from src.forwarding.schemas import AuthorizedNumberCreate, AuthorizedNumberResponse
from src.forwarding.service import AuthorizedForwardingRegistry

router = APIRouter(prefix="/authorized-forward-numbers", tags=["Call Forwarding"])


@router.get("", response_model=list[AuthorizedNumberResponse])
async def list_authorized_numbers(
    current_user: User = Depends(get_current_user),
    registry: AuthorizedForwardingRegistry = Depends(get_forwarding_registry),
) -> list[AuthorizedNumberResponse]:
    """
    List the organization's authorized forwarding numbers.

    Args:
        current_user: Current authenticated user
        registry: Forwarding registry

    Returns:
        Non-disabled destinations, newest first
    """
    records = await registry.list_authorized(current_user.organization_id)
    return [AuthorizedNumberResponse.from_record(record) for record in records]


@router.post(
    "", response_model=AuthorizedNumberResponse, status_code=status.HTTP_201_CREATED
)
async def authorize_number(
    data: AuthorizedNumberCreate,
    current_user: User = Depends(get_current_user),
    registry: AuthorizedForwardingRegistry = Depends(get_forwarding_registry),
) -> AuthorizedNumberResponse:
    """
    Authorize a forwarding number, or reactivate it if previously disabled.

    Args:
        data: Number and optional label
        current_user: Current authenticated user
        registry: Forwarding registry

    Returns:
        The approved destination
    """
    record = await registry.authorize(
        org_id=current_user.organization_id,
        user_id=current_user.id,
        raw_number=data.phone_number,
        label=data.label,
    )
    await registry.session.commit()
    return AuthorizedNumberResponse.from_record(record)


@router.delete("/{authorized_number_id}", response_model=AuthorizedNumberResponse)
async def disable_number(
    authorized_number_id: str,
    current_user: User = Depends(get_current_user),
    registry: AuthorizedForwardingRegistry = Depends(get_forwarding_registry),
) -> AuthorizedNumberResponse:
    """
    Disable a forwarding number. The record is kept for audit.

    Args:
        authorized_number_id: Authorized number ID
        current_user: Current authenticated user
        registry: Forwarding registry

    Returns:
        The disabled destination
    """
    record = await registry.disable(current_user.organization_id, authorized_number_id)
    await registry.session.commit()
    return AuthorizedNumberResponse.from_record(record)
