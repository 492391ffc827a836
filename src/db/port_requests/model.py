"""
SQLAlchemy model for port-in requests.

A row is written for every submission, whether or not the provider accepted
it. After creation, status changes only through webhook ingestion or an
explicit refresh, both keyed by ``provider_request_id``.
"""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.db.database import Base
from src.porting.constants import PortRequestStatus


class PortRequest(Base):
    """Port-in request lifecycle record."""

    __tablename__ = "port_requests"
    __table_args__ = (
        Index("ix_port_requests_org_created", "organization_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_by_user_id: Mapped[str | None] = mapped_column(
        String(255), comment="User who submitted the request (audit only)"
    )

    phone_number: Mapped[str] = mapped_column(String(20), nullable=False)
    losing_carrier: Mapped[str | None] = mapped_column(String(255))
    authorized_name: Mapped[str] = mapped_column(String(255), nullable=False)
    authorized_email: Mapped[str] = mapped_column(String(255), nullable=False)
    authorized_phone: Mapped[str | None] = mapped_column(String(32))
    service_address: Mapped[str | None] = mapped_column(String(512))

    provider_request_id: Mapped[str | None] = mapped_column(
        String(64), index=True, comment="Twilio PortInRequestSid"
    )
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=PortRequestStatus.SUBMITTED.value
    )
    status_detail: Mapped[str | None] = mapped_column(Text)
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), comment="Set once, on transition into completed"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    def __repr__(self) -> str:
        return (
            f"<PortRequest(id={self.id}, phone_number={self.phone_number}, "
            f"status={self.status}, provider_request_id={self.provider_request_id})>"
        )
