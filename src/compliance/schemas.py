"""
Pydantic schemas for the compliance API.

Field names are camelCase on the wire; attributes are snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field


class BrandRegistrationRequest(BaseModel):
    """Business information submitted for brand registration."""

    model_config = ConfigDict(populate_by_name=True)

    # Optional here so a missing name/EIN is reported as a 400 by the service
    legal_name: str | None = Field(None, alias="legalName", description="Legal business name")
    ein: str | None = Field(None, description="EIN / tax identifier")
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    # Anything other than SOLE_PROPRIETOR registers as STANDARD
    brand_type: str | None = Field(None, alias="brandType")


class BrandRegistrationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    brand_sid: str | None = Field(None, alias="brandSid")
    brand_status: str = Field(..., alias="brandStatus")
    message: str


class CampaignRegistrationBody(BaseModel):
    """Optional overrides for campaign registration."""

    model_config = ConfigDict(populate_by_name=True)

    description: str | None = None
    use_case: str | None = Field(None, alias="useCase")


class NumberAssociationResult(BaseModel):
    """Outcome of attaching one number to the messaging service."""

    model_config = ConfigDict(populate_by_name=True)

    phone_number_id: str = Field(..., alias="phoneNumberId")
    provider_number_id: str = Field(..., alias="providerNumberId")
    associated: bool
    error: str | None = None


class CampaignRegistrationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    campaign_sid: str | None = Field(None, alias="campaignSid")
    campaign_status: str = Field(..., alias="campaignStatus")
    messaging_service_sid: str | None = Field(None, alias="messagingServiceSid")
    message: str
    associations: list[NumberAssociationResult] = Field(default_factory=list)


class ComplianceStatusResponse(BaseModel):
    """Current registration state of the caller's organization."""

    model_config = ConfigDict(populate_by_name=True)

    legal_name: str | None = Field(None, alias="legalName")
    ein: str | None = None
    brand_type: str | None = Field(None, alias="brandType")
    brand_registration_sid: str | None = Field(None, alias="brandRegistrationSid")
    brand_status: str = Field(..., alias="brandStatus")
    campaign_sid: str | None = Field(None, alias="campaignSid")
    campaign_status: str = Field(..., alias="campaignStatus")
    messaging_service_sid: str | None = Field(None, alias="messagingServiceSid")
    has_registration: bool = Field(..., alias="hasRegistration")


class RefreshResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    brand_status: str = Field(..., alias="brandStatus")
    campaign_status: str = Field(..., alias="campaignStatus")
