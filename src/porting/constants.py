"""
Port-in constants: the local status vocabulary and the translation table
from the provider's status strings.
"""

from enum import Enum


class PortRequestStatus(str, Enum):
    """Local lifecycle of a port-in request."""

    SUBMITTED = "submitted"
    IN_REVIEW = "in_review"
    WAITING_FOR_SIGNATURE = "waiting_for_signature"
    IN_PROGRESS = "in_progress"
    ACTION_REQUIRED = "action_required"
    COMPLETED = "completed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_PORT_STATUSES


TERMINAL_PORT_STATUSES = frozenset(
    {
        PortRequestStatus.COMPLETED,
        PortRequestStatus.REJECTED,
        PortRequestStatus.CANCELLED,
    }
)

VENDOR_STATUS_MAP: dict[str, PortRequestStatus] = {
    "In Review": PortRequestStatus.IN_REVIEW,
    "Waiting for Signature": PortRequestStatus.WAITING_FOR_SIGNATURE,
    "In Progress": PortRequestStatus.IN_PROGRESS,
    "Completed": PortRequestStatus.COMPLETED,
    "Action Required": PortRequestStatus.ACTION_REQUIRED,
    "Rejected": PortRequestStatus.REJECTED,
    "Cancelled": PortRequestStatus.CANCELLED,
    "Canceled": PortRequestStatus.CANCELLED,
    "Canceling": PortRequestStatus.CANCELLED,
}


def map_vendor_status(vendor_status: str | None) -> PortRequestStatus:
    """
    Map a provider port-in status to the local status.

    Webhooks send display strings ("In Review"); the Port In API returns
    machine values ("in_review", "canceled"). Both are accepted. Unknown or
    missing values map to ``in_review`` so an unfamiliar status never causes
    a delivery to be rejected.

    Args:
        vendor_status: Provider status string

    Returns:
        Local PortRequestStatus
    """
    if not vendor_status:
        return PortRequestStatus.IN_REVIEW

    value = vendor_status.strip()
    if value in VENDOR_STATUS_MAP:
        return VENDOR_STATUS_MAP[value]

    machine_value = value.lower().replace("-", "_").replace(" ", "_")
    if machine_value in ("canceled", "canceling"):
        return PortRequestStatus.CANCELLED
    try:
        status = PortRequestStatus(machine_value)
    except ValueError:
        return PortRequestStatus.IN_REVIEW
    # "submitted" is local-only; the provider never reports it
    if status is PortRequestStatus.SUBMITTED:
        return PortRequestStatus.IN_REVIEW
    return status


# Minimum lead time the provider accepts for a US port-in target date
TARGET_PORT_IN_LEAD_DAYS = 10

DEFAULT_CUSTOMER_TYPE = "Business"
DEFAULT_COUNTRY = "US"

NOT_PORTABLE_FALLBACK_REASON = "This number cannot be ported at this time."
MISSING_AUTHORIZED_CONTACT_MESSAGE = (
    "Authorized representative name and email are required"
)


def not_portable_reason(reason: str) -> str:
    return (
        f"This number cannot be ported: {reason}. "
        "Contact your carrier for more information."
    )
