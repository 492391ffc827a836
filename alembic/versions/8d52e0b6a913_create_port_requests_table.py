"""Create port requests table

Revision ID: 8d52e0b6a913
Revises: 3c1f9a2e7b40
Create Date: 2026-09-16 15:41:07.902114

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8d52e0b6a913'
down_revision: Union[str, Sequence[str], None] = '3c1f9a2e7b40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'port_requests',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('organization_id', sa.String(length=36), nullable=False),
        sa.Column('created_by_user_id', sa.String(length=255), nullable=True, comment='User who submitted the request (audit only)'),
        sa.Column('phone_number', sa.String(length=20), nullable=False),
        sa.Column('losing_carrier', sa.String(length=255), nullable=True),
        sa.Column('authorized_name', sa.String(length=255), nullable=False),
        sa.Column('authorized_email', sa.String(length=255), nullable=False),
        sa.Column('authorized_phone', sa.String(length=32), nullable=True),
        sa.Column('service_address', sa.String(length=512), nullable=True),
        sa.Column('provider_request_id', sa.String(length=64), nullable=True, comment='Twilio PortInRequestSid'),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='submitted'),
        sa.Column('status_detail', sa.Text(), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True, comment='Set once, on transition into completed'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )

    # Webhooks look requests up by provider SID; listings are per org, newest first
    op.create_index(op.f('ix_port_requests_provider_request_id'), 'port_requests', ['provider_request_id'], unique=False)
    op.create_index('ix_port_requests_org_created', 'port_requests', ['organization_id', 'created_at'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_port_requests_org_created', table_name='port_requests')
    op.drop_index(op.f('ix_port_requests_provider_request_id'), table_name='port_requests')
    op.drop_table('port_requests')
