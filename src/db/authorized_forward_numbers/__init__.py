"""Authorized call-forwarding destination models."""

from src.db.authorized_forward_numbers.model import AuthorizedForwardNumber
from src.db.authorized_forward_numbers.repository import (
    AuthorizedForwardNumberRepository,
)

__all__ = ["AuthorizedForwardNumber", "AuthorizedForwardNumberRepository"]
