"""Port-in request models."""

from src.db.port_requests.model import PortRequest
from src.db.port_requests.repository import PortRequestRepository

__all__ = ["PortRequest", "PortRequestRepository"]
