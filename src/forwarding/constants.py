"""Call-forwarding constants and enums."""

from enum import Enum


class AuthorizedNumberStatus(str, Enum):
    """Lifecycle of an authorized forwarding destination."""

    APPROVED = "approved"
    DISABLED = "disabled"


class CallMode(str, Enum):
    """How inbound calls to an organization number are handled."""

    FORWARD = "forward"
    VOICEMAIL = "voicemail"


AUTHORIZE_FIRST_MESSAGE = (
    "This forwarding number is not authorized. "
    "Authorize it under Call Settings before using it."
)
UNKNOWN_AUTHORIZED_NUMBER_MESSAGE = "Authorized forwarding number not found or disabled"
