"""
Dependencies for forwarding endpoints.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.database import get_db
from src.forwarding.service import AuthorizedForwardingRegistry


async def get_forwarding_registry(
    session: AsyncSession = Depends(get_db),
) -> AuthorizedForwardingRegistry:
    """Get authorized forwarding registry instance."""
    return AuthorizedForwardingRegistry(session)
