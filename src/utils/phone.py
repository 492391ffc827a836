"""
Phone number normalization to E.164.

Only the shapes the product accepts from users are recognized: 10-digit US
numbers, 11-digit numbers with a leading 1, and ``+``-prefixed numbers with at
least 10 digits. Common separators are tolerated; letters are not.
"""

import re

import phonenumbers

from src.exceptions import InvalidInputError
from src.utils.logger import logger

INVALID_US_NUMBER_MESSAGE = "Enter a valid US phone number"
DEFAULT_REGION = "US"

_DIALABLE = re.compile(r"^\+?[\d\s\-\.\(\)]+$")
_NON_DIGITS = re.compile(r"\D")


def normalize_to_e164(raw: str | None) -> str | None:
    """
    Normalize raw user input to an E.164 number.

    Numbers are not checked against carrier numbering plans, so any 10-digit
    input becomes ``+1`` followed by those digits.

    Args:
        raw: Phone number as typed (may contain spaces, dashes, dots, parentheses)

    Returns:
        E.164 string (e.g. "+19495551234"), or None when the input is not a number
    """
    if not raw or not isinstance(raw, str):
        return None

    candidate = raw.strip()
    if not _DIALABLE.match(candidate):
        return None

    digits = _NON_DIGITS.sub("", candidate)
    if len(digits) == 10:
        candidate = f"+1{digits}"
    elif len(digits) == 11 and digits.startswith("1"):
        candidate = f"+{digits}"
    elif not (candidate.startswith("+") and len(digits) >= 10):
        return None

    try:
        parsed = phonenumbers.parse(candidate, DEFAULT_REGION)
    except phonenumbers.NumberParseException:
        logger.debug("Could not parse phone number", phone_number=raw)
        return None

    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def require_e164(raw: str | None, message: str = INVALID_US_NUMBER_MESSAGE) -> str:
    """
    Normalize or raise.

    Raises:
        InvalidInputError: If the input cannot be normalized
    """
    normalized = normalize_to_e164(raw)
    if normalized is None:
        raise InvalidInputError(message, error_code="INVALID_PHONE_NUMBER")
    return normalized
