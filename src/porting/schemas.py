"""
Pydantic schemas for the porting API.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.db.port_requests.model import PortRequest


class PortabilityCheckResponse(BaseModel):
    """Portability of a single number, as shown to the user."""

    model_config = ConfigDict(populate_by_name=True)

    portable: bool
    phone_number: str = Field(..., alias="phoneNumber")
    number_type: str | None = Field(None, alias="numberType")
    country: str | None = None
    pin_required: bool = Field(False, alias="pinRequired")
    reason: str | None = None
    reason_code: int | None = Field(None, alias="reasonCode")


class PortRequestCreate(BaseModel):
    """
    Port-in submission form.

    Required fields are validated by the orchestrator so that missing values
    produce the same 400 response as malformed ones.
    """

    model_config = ConfigDict(populate_by_name=True)

    phone_number: str | None = Field(None, alias="phoneNumber")
    losing_carrier: str | None = Field(None, alias="losingCarrier")
    customer_type: str | None = Field(None, alias="customerType")
    customer_name: str | None = Field(None, alias="customerName")
    account_number: str | None = Field(None, alias="accountNumber")
    authorized_name: str | None = Field(None, alias="authorizedName")
    authorized_email: str | None = Field(None, alias="authorizedEmail")
    authorized_phone: str | None = Field(None, alias="authorizedPhone")
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None


class PortRequestSummary(BaseModel):
    """Returned right after submission."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    phone_number: str = Field(..., alias="phoneNumber")
    status: str
    provider_request_id: str | None = Field(None, alias="twilioSid")
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_record(cls, record: PortRequest) -> "PortRequestSummary":
        return cls(
            id=record.id,
            phone_number=record.phone_number,
            status=record.status,
            provider_request_id=record.provider_request_id,
            created_at=record.created_at,
        )


class PortRequestResponse(BaseModel):
    """Port request as listed for the organization."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    phone_number: str = Field(..., alias="phoneNumber")
    losing_carrier: str | None = Field(None, alias="losingCarrier")
    authorized_name: str = Field(..., alias="authorizedName")
    authorized_email: str = Field(..., alias="authorizedEmail")
    status: str
    status_detail: str | None = Field(None, alias="statusDetail")
    provider_request_id: str | None = Field(None, alias="twilioSid")
    completed_at: datetime | None = Field(None, alias="completedAt")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    @classmethod
    def from_record(cls, record: PortRequest) -> "PortRequestResponse":
        return cls(
            id=record.id,
            phone_number=record.phone_number,
            losing_carrier=record.losing_carrier,
            authorized_name=record.authorized_name,
            authorized_email=record.authorized_email,
            status=record.status,
            status_detail=record.status_detail,
            provider_request_id=record.provider_request_id,
            completed_at=record.completed_at,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class WebhookAck(BaseModel):
    ok: bool = True
