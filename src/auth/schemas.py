"""
Auth-specific Pydantic schemas.
"""

from pydantic import BaseModel, Field


class User(BaseModel):
    """Authenticated caller, as carried in the access token."""

    id: str = Field(..., description="User's unique identifier")
    email: str | None = Field(None, description="User's email address")
    organization_id: str = Field(..., description="User's organization ID")
    role: str | None = Field(None, description="User's role")
