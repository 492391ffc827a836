"""
Pydantic schemas for authorized forwarding numbers and call settings.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.db.authorized_forward_numbers.model import AuthorizedForwardNumber
from src.forwarding.constants import CallMode


class AuthorizedNumberCreate(BaseModel):
    """Request schema for authorizing a forwarding destination."""

    model_config = ConfigDict(populate_by_name=True)

    phone_number: str = Field(..., alias="phoneNumber", description="Number as typed")
    label: str | None = Field(None, max_length=255, description="Display label")

    @field_validator("label")
    @classmethod
    def blank_label_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class AuthorizedNumberResponse(BaseModel):
    """Response schema for an authorized forwarding destination."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    number: str = Field(..., description="Destination number (E.164 format)")
    label: str | None = None
    status: str
    verified_at: datetime | None = Field(None, alias="verifiedAt")
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_record(cls, record: AuthorizedForwardNumber) -> "AuthorizedNumberResponse":
        return cls(
            id=record.id,
            number=record.e164_number,
            label=record.label,
            status=record.status,
            verified_at=record.verified_at,
            created_at=record.created_at,
        )


class ForwardingRequest(BaseModel):
    """
    Requested forwarding configuration for a phone number.

    Precedence when several fields are given: voicemail mode, then an explicit
    authorized-number id, then a raw number; none of them clears forwarding.
    """

    model_config = ConfigDict(populate_by_name=True)

    call_mode: CallMode | None = Field(None, alias="callMode")
    authorized_number_id: str | None = Field(None, alias="authorizedNumberId")
    call_forward_to: str | None = Field(None, alias="callForwardTo")
    auto_authorize_if_missing: bool = Field(False, alias="autoAuthorizeIfMissing")


class ForwardingResolution(BaseModel):
    """Resolved forwarding target; both fields are None when forwarding is cleared."""

    forward_number: str | None = None
    authorized_id: str | None = None

    @property
    def is_cleared(self) -> bool:
        return self.authorized_id is None
