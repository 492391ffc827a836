"""
Database model for organization phone numbers.

Only the columns the compliance and forwarding services touch are modeled;
message storage and provisioning live elsewhere.
"""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from src.compliance.constants import A2PStatus
from src.db.database import Base


class PhoneNumber(Base):
    """A number owned by an organization."""

    __tablename__ = "phone_numbers"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    e164_number: Mapped[str] = mapped_column(
        String(20), nullable=False, comment="Phone number (E.164 format)"
    )
    label: Mapped[str | None] = mapped_column(String(255))
    provider_number_id: Mapped[str | None] = mapped_column(
        String(64), unique=True, comment="Twilio IncomingPhoneNumber SID (PNxxx)"
    )

    # Forwarding: the authorized reference is the source of truth, the raw
    # number is kept in sync for older readers.
    call_forward_authorized_number_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("authorized_forward_numbers.id", ondelete="SET NULL"),
        nullable=True,
    )
    call_forward_to: Mapped[str | None] = mapped_column(String(20))

    a2p_status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=A2PStatus.NONE.value
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )
