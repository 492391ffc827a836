"""
Phone number API endpoints.

This module provides endpoints for listing an organization's numbers and
configuring where their inbound calls are forwarded.
"""

from fastapi import APIRouter, Depends

from src.auth.dependencies import get_current_user
from src.auth.schemas import User
from src.db.phone_numbers.dependencies import get_phone_number_service
from src.db.phone_numbers.schemas import PhoneNumberResponse
from src.db.phone_numbers.service import PhoneNumberService
from src.forwarding.schemas import ForwardingRequest

router = APIRouter(prefix="/phone-numbers", tags=["Phone Numbers"])


@router.get("", response_model=list[PhoneNumberResponse])
async def list_phone_numbers(
    current_user: User = Depends(get_current_user),
    service: PhoneNumberService = Depends(get_phone_number_service),
) -> list[PhoneNumberResponse]:
    """
    List the organization's phone numbers.

    Args:
        current_user: Current authenticated user
        service: Phone number service

    Returns:
        Numbers with their forwarding and A2P state
    """
    numbers = await service.list_phone_numbers(current_user.organization_id)
    return [PhoneNumberResponse.from_record(number) for number in numbers]


@router.patch("/{phone_number_id}/call-settings", response_model=PhoneNumberResponse)
async def update_call_settings(
    phone_number_id: str,
    data: ForwardingRequest,
    current_user: User = Depends(get_current_user),
    service: PhoneNumberService = Depends(get_phone_number_service),
) -> PhoneNumberResponse:
    """
    Update how inbound calls to a number are handled.

    Args:
        phone_number_id: Phone number ID
        data: Requested call setting
        current_user: Current authenticated user
        service: Phone number service

    Returns:
        Updated phone number
    """
    number = await service.update_call_settings(
        org_id=current_user.organization_id,
        user_id=current_user.id,
        phone_number_id=phone_number_id,
        request=data,
    )
    await service.session.commit()
    return PhoneNumberResponse.from_record(number)
