"""
Compliance (10DLC) constants and enums.

Brand and campaign statuses are stored verbatim from the provider, so the
enum below names the values this service itself writes or compares against;
the provider may report others (e.g. ``IN_REVIEW``, ``VERIFIED``).
"""

from enum import Enum


class RegistrationStatus(str, Enum):
    """Brand / campaign registration status values."""

    UNREGISTERED = "UNREGISTERED"
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    FAILED = "FAILED"


class BrandType(str, Enum):
    """A2P brand types."""

    SOLE_PROPRIETOR = "SOLE_PROPRIETOR"
    STANDARD = "STANDARD"


class BusinessClassification(str, Enum):
    """TrustHub business_type values for the business-information identity."""

    SOLE_PROPRIETORSHIP = "Sole Proprietorship"
    CORPORATION = "Corporation"

    @classmethod
    def for_brand_type(cls, brand_type: str | None) -> "BusinessClassification":
        if brand_type == BrandType.SOLE_PROPRIETOR:
            return cls.SOLE_PROPRIETORSHIP
        return cls.CORPORATION


DEFAULT_USE_CASE = "MIXED"

DEFAULT_CAMPAIGN_DESCRIPTION = "Patient appointment reminders and healthcare communication"

CAMPAIGN_MESSAGE_FLOW = (
    "Patients opt-in during registration. They can reply STOP at any time."
)

CAMPAIGN_MESSAGE_SAMPLES = [
    "Hi [Name], this is a reminder of your appointment on [Date] at [Time]. "
    "Reply Y to confirm or call us to reschedule.",
    "Your lab results are ready. Please call our office to discuss. "
    "Reply STOP to opt out.",
]

FRIENDLY_NAME_SUFFIX = "Health SMS"

BRAND_REQUIRED_FIELDS_MESSAGE = "Business name and EIN are required"


class ComplianceMessage(str, Enum):
    """User-facing messages returned by the registration endpoints."""

    BRAND_APPROVED = "Brand approved! You can now register a campaign."
    BRAND_SUBMITTED = "Brand registration submitted. Review usually takes 1-2 weeks."
    BRAND_RETRYABLE = (
        "Business information saved. Brand submission to the carrier did not "
        "complete; you can retry the registration."
    )
    CAMPAIGN_APPROVED = "Campaign approved! Your numbers are ready for SMS."
    CAMPAIGN_SUBMITTED = "Campaign submitted for review. Usually takes a few days."
    CAMPAIGN_RETRYABLE = (
        "Campaign submission to the carrier did not complete; "
        "you can retry the registration."
    )


class A2PStatus(str, Enum):
    """Per-number clearance for application-to-person SMS."""

    NONE = "none"
    PENDING = "pending"
    APPROVED = "approved"
