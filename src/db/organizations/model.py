"""
SQLAlchemy model for organizations.

Organizations are the tenant boundary. Besides identity they carry the
organization's 10DLC compliance record: the business information submitted for
brand verification and the provider identifiers/statuses of the brand,
campaign and messaging service.
"""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from src.compliance.constants import RegistrationStatus
from src.db.database import Base


class Organization(Base):
    """Organization (tenant) with its compliance registration state."""

    __tablename__ = "organizations"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        comment="Organization UUID",
    )
    name: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="Organization display name"
    )

    # Business information submitted for brand verification
    legal_name: Mapped[str | None] = mapped_column(String(255), comment="Legal business name")
    tax_id: Mapped[str | None] = mapped_column(String(32), comment="EIN / tax identifier")
    business_address: Mapped[str | None] = mapped_column(String(255))
    business_city: Mapped[str | None] = mapped_column(String(128))
    business_state: Mapped[str | None] = mapped_column(String(64))
    business_zip: Mapped[str | None] = mapped_column(String(16))
    brand_type: Mapped[str | None] = mapped_column(
        String(32), comment="Submitted brand type; only SOLE_PROPRIETOR is special-cased"
    )

    # Provider-side registration state
    trust_profile_id: Mapped[str | None] = mapped_column(
        String(64), comment="TrustHub customer profile SID"
    )
    brand_registration_id: Mapped[str | None] = mapped_column(
        String(64), comment="A2P brand registration SID"
    )
    brand_status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=RegistrationStatus.UNREGISTERED.value,
        comment="Brand status as reported by the provider",
    )
    campaign_id: Mapped[str | None] = mapped_column(
        String(64), comment="A2P use-case (campaign) SID"
    )
    campaign_status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=RegistrationStatus.UNREGISTERED.value,
        comment="Campaign status as reported by the provider",
    )
    messaging_service_id: Mapped[str | None] = mapped_column(
        String(64), comment="Messaging service SID numbers are attached to"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        comment="Record creation timestamp",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        comment="Record last update timestamp",
    )

    def __repr__(self) -> str:
        return (
            f"<Organization(id={self.id}, name={self.name}, "
            f"brand_status={self.brand_status}, campaign_status={self.campaign_status})>"
        )
