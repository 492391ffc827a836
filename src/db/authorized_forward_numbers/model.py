"""
Database model for authorized call-forwarding destinations.

Rows are never deleted; disabling is a status change so the audit trail of
who authorized which number survives.
"""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.db.database import Base
from src.forwarding.constants import AuthorizedNumberStatus


class AuthorizedForwardNumber(Base):
    """A number an organization has approved as a forwarding destination."""

    __tablename__ = "authorized_forward_numbers"
    __table_args__ = (
        UniqueConstraint(
            "organization_id", "e164_number", name="uq_authorized_forward_numbers_org_number"
        ),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_by_user_id: Mapped[str | None] = mapped_column(
        String(255), comment="User who first authorized the number (audit only)"
    )
    e164_number: Mapped[str] = mapped_column(String(20), nullable=False)
    label: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=AuthorizedNumberStatus.APPROVED.value
    )
    verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    @property
    def is_disabled(self) -> bool:
        return self.status == AuthorizedNumberStatus.DISABLED.value

    def __repr__(self) -> str:
        return (
            f"<AuthorizedForwardNumber(id={self.id}, number={self.e164_number}, "
            f"status={self.status})>"
        )
