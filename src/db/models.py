"""
Model registry.

Importing this module registers every table on ``Base.metadata``; used by
the Alembic environment and by the test fixtures.
"""

from src.db.authorized_forward_numbers.model import AuthorizedForwardNumber
from src.db.organizations.model import Organization
from src.db.phone_numbers.model import PhoneNumber
from src.db.port_requests.model import PortRequest

__all__ = [
    "AuthorizedForwardNumber",
    "Organization",
    "PhoneNumber",
    "PortRequest",
]
