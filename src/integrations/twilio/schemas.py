"""
Pydantic schemas exchanged with the provider gateway.

These are provider-neutral shapes; the Twilio gateway converts SDK instances
and JSON payloads into them.
"""

from pydantic import BaseModel, Field


class BusinessIdentity(BaseModel):
    """Business information submitted as a TrustHub end-user."""

    legal_name: str = Field(..., description="Legal business name")
    tax_id: str = Field(..., description="EIN / business registration number")
    business_type: str = Field(..., description="Sole Proprietorship or Corporation")
    regions_of_operation: str = Field(default="USA_AND_CANADA")
    registration_identifier: str = Field(default="EIN")
    website_url: str = Field(default="")
    social_media_profile_urls: str = Field(default="")

    def to_attributes(self) -> dict[str, str]:
        """Render as the `customer_profile_business_information` attribute set."""
        return {
            "business_name": self.legal_name,
            "business_identity": "direct_customer",
            "business_type": self.business_type,
            "business_registration_number": self.tax_id,
            "business_regions_of_operation": self.regions_of_operation,
            "social_media_profile_urls": self.social_media_profile_urls,
            "website_url": self.website_url,
            "business_registration_identifier": self.registration_identifier,
        }


class BrandRegistrationResult(BaseModel):
    """Outcome of creating or fetching a brand registration."""

    sid: str
    status: str | None = None


class CampaignRegistrationRequest(BaseModel):
    """A2P use-case (campaign) registration parameters."""

    brand_registration_sid: str
    description: str
    message_flow: str
    message_samples: list[str]
    use_case: str
    has_embedded_links: bool = False
    has_embedded_phone: bool = True


class CampaignRegistrationResult(BaseModel):
    """A registered A2P use-case as reported by the provider."""

    sid: str
    campaign_status: str | None = None
    campaign_id: str | None = Field(None, description="TCR campaign identifier, if assigned")


class PortabilityResult(BaseModel):
    """Raw portability answer for a single number."""

    phone_number: str
    portable: bool
    number_type: str | None = None
    country: str | None = None
    pin_and_account_number_required: bool = False
    not_portable_reason: str | None = None
    not_portable_reason_code: int | None = None


class ServiceAddress(BaseModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = "US"


class LosingCarrierInformation(BaseModel):
    """Account holder details at the carrier currently serving the number."""

    customer_type: str
    customer_name: str
    authorized_representative: str
    authorized_representative_email: str
    account_telephone_number: str
    account_number: str | None = None
    address: ServiceAddress | None = None


class PortInSubmission(BaseModel):
    """Port-in request payload for the Numbers v1 Port In API."""

    phone_numbers: list[str]
    losing_carrier_information: LosingCarrierInformation
    notification_emails: list[str]
    target_port_in_date: str = Field(..., description="ISO date (YYYY-MM-DD)")

    def to_payload(self) -> dict:
        return {
            "phone_numbers": [{"phone_number": number} for number in self.phone_numbers],
            "losing_carrier_information": self.losing_carrier_information.model_dump(
                exclude_none=True
            ),
            "notification_emails": self.notification_emails,
            "target_port_in_date": self.target_port_in_date,
        }


class PortInStatus(BaseModel):
    """Current state of a submitted port-in request."""

    port_in_request_sid: str
    status: str | None = None
    status_detail: str | None = None
