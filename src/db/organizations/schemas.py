"""Pydantic schemas for organization models."""

from pydantic import BaseModel, Field


class OrganizationCreate(BaseModel):
    """Schema for creating an organization."""

    name: str = Field(..., min_length=1, max_length=255, description="Organization display name")


class BusinessInfo(BaseModel):
    """Business information persisted ahead of brand registration."""

    legal_name: str = Field(..., description="Legal business name")
    tax_id: str = Field(..., description="EIN / tax identifier")
    business_address: str | None = None
    business_city: str | None = None
    business_state: str | None = None
    business_zip: str | None = None
    brand_type: str = Field(..., description="Brand type as submitted")
