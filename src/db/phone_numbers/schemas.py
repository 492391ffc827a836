"""
Pydantic schemas for phone number API.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.db.phone_numbers.model import PhoneNumber
from src.forwarding.constants import CallMode


class PhoneNumberResponse(BaseModel):
    """Response schema for an organization phone number."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    number: str = Field(..., description="Phone number in E.164 format")
    label: str | None = None
    provider_sid: str | None = Field(None, alias="providerSid")
    call_mode: CallMode = Field(..., alias="callMode")
    call_forward_to: str | None = Field(None, alias="callForwardTo")
    call_forward_authorized_number_id: str | None = Field(
        None, alias="callForwardAuthorizedNumberId"
    )
    a2p_status: str = Field(..., alias="a2pStatus")

    @classmethod
    def from_record(cls, record: PhoneNumber) -> "PhoneNumberResponse":
        return cls(
            id=record.id,
            number=record.e164_number,
            label=record.label,
            provider_sid=record.provider_number_id,
            call_mode=(
                CallMode.FORWARD
                if record.call_forward_authorized_number_id
                else CallMode.VOICEMAIL
            ),
            call_forward_to=record.call_forward_to,
            call_forward_authorized_number_id=record.call_forward_authorized_number_id,
            a2p_status=record.a2p_status,
        )
