"""Repository for organization database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.organizations.model import Organization as OrganizationModel
from src.db.organizations.schemas import BusinessInfo, OrganizationCreate

# Columns the registration managers are allowed to write back
REGISTRATION_FIELDS = frozenset(
    {
        "trust_profile_id",
        "brand_registration_id",
        "brand_status",
        "campaign_id",
        "campaign_status",
        "messaging_service_id",
    }
)


class OrganizationRepository:
    """Repository for managing organizations in the database."""

    def __init__(self, session: AsyncSession):
        """
        Initialize the repository.

        Args:
            session: Async database session
        """
        self.session = session

    async def create(self, data: OrganizationCreate) -> OrganizationModel:
        """
        Create a new organization.

        Args:
            data: Organization creation data

        Returns:
            Created organization model
        """
        org = OrganizationModel(name=data.name)
        self.session.add(org)
        await self.session.flush()
        await self.session.refresh(org)
        return org

    async def get_by_id(self, org_id: str) -> OrganizationModel | None:
        """
        Get an organization by ID.

        Args:
            org_id: Organization UUID

        Returns:
            Organization model or None if not found
        """
        result = await self.session.execute(
            select(OrganizationModel).where(OrganizationModel.id == org_id)
        )
        return result.scalar_one_or_none()

    async def save_business_info(
        self, org: OrganizationModel, info: BusinessInfo
    ) -> OrganizationModel:
        """
        Overwrite the organization's business information.

        Args:
            org: Organization to update
            info: Business information from the registration form

        Returns:
            Updated organization
        """
        org.legal_name = info.legal_name
        org.tax_id = info.tax_id
        org.business_address = info.business_address
        org.business_city = info.business_city
        org.business_state = info.business_state
        org.business_zip = info.business_zip
        org.brand_type = info.brand_type

        await self.session.flush()
        return org

    async def update_registration(
        self, org: OrganizationModel, **fields: str | None
    ) -> OrganizationModel:
        """
        Write provider identifiers and statuses onto the organization.

        Args:
            org: Organization to update
            **fields: Any of the registration columns

        Returns:
            Updated organization

        Raises:
            ValueError: If a field outside the registration columns is given
        """
        unknown = set(fields) - REGISTRATION_FIELDS
        if unknown:
            raise ValueError(f"Not registration fields: {sorted(unknown)}")

        for name, value in fields.items():
            setattr(org, name, value)

        await self.session.flush()
        return org
