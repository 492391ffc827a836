"""Organization phone number models."""

from src.db.phone_numbers.model import PhoneNumber
from src.db.phone_numbers.repository import PhoneNumberRepository

__all__ = ["PhoneNumber", "PhoneNumberRepository"]
