"""Organization database models."""

from src.db.organizations.model import Organization
from src.db.organizations.repository import OrganizationRepository
from src.db.organizations.schemas import BusinessInfo, OrganizationCreate

__all__ = [
    "Organization",
    "OrganizationRepository",
    "OrganizationCreate",
    "BusinessInfo",
]
