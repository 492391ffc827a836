"""Create organizations, phone numbers and authorized forward numbers

Revision ID: 3c1f9a2e7b40
Revises: 
Create Date: 2026-09-02 10:14:22.418305

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f9a2e7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Organizations carry the 10DLC registration record
    op.create_table(
        'organizations',
        sa.Column('id', sa.String(length=36), nullable=False, comment='Organization UUID'),
        sa.Column('name', sa.String(length=255), nullable=False, comment='Organization display name'),
        sa.Column('legal_name', sa.String(length=255), nullable=True, comment='Legal business name'),
        sa.Column('tax_id', sa.String(length=32), nullable=True, comment='EIN / tax identifier'),
        sa.Column('business_address', sa.String(length=255), nullable=True),
        sa.Column('business_city', sa.String(length=128), nullable=True),
        sa.Column('business_state', sa.String(length=64), nullable=True),
        sa.Column('business_zip', sa.String(length=16), nullable=True),
        sa.Column('brand_type', sa.String(length=32), nullable=True, comment='Submitted brand type; only SOLE_PROPRIETOR is special-cased'),
        sa.Column('trust_profile_id', sa.String(length=64), nullable=True, comment='TrustHub customer profile SID'),
        sa.Column('brand_registration_id', sa.String(length=64), nullable=True, comment='A2P brand registration SID'),
        sa.Column('brand_status', sa.String(length=32), nullable=False, server_default='UNREGISTERED', comment='Brand status as reported by the provider'),
        sa.Column('campaign_id', sa.String(length=64), nullable=True, comment='A2P use-case (campaign) SID'),
        sa.Column('campaign_status', sa.String(length=32), nullable=False, server_default='UNREGISTERED', comment='Campaign status as reported by the provider'),
        sa.Column('messaging_service_id', sa.String(length=64), nullable=True, comment='Messaging service SID numbers are attached to'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()'), comment='Record creation timestamp'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()'), comment='Record last update timestamp'),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'authorized_forward_numbers',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('organization_id', sa.String(length=36), nullable=False),
        sa.Column('created_by_user_id', sa.String(length=255), nullable=True, comment='User who first authorized the number (audit only)'),
        sa.Column('e164_number', sa.String(length=20), nullable=False),
        sa.Column('label', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='approved'),
        sa.Column('verified_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('organization_id', 'e164_number', name='uq_authorized_forward_numbers_org_number')
    )
    op.create_index(op.f('ix_authorized_forward_numbers_organization_id'), 'authorized_forward_numbers', ['organization_id'], unique=False)

    op.create_table(
        'phone_numbers',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('organization_id', sa.String(length=36), nullable=False),
        sa.Column('e164_number', sa.String(length=20), nullable=False, comment='Phone number (E.164 format)'),
        sa.Column('label', sa.String(length=255), nullable=True),
        sa.Column('provider_number_id', sa.String(length=64), nullable=True, comment='Twilio IncomingPhoneNumber SID (PNxxx)'),
        sa.Column('call_forward_authorized_number_id', sa.String(length=36), nullable=True),
        sa.Column('call_forward_to', sa.String(length=20), nullable=True),
        sa.Column('a2p_status', sa.String(length=16), nullable=False, server_default='none'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['call_forward_authorized_number_id'], ['authorized_forward_numbers.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('provider_number_id')
    )
    op.create_index(op.f('ix_phone_numbers_organization_id'), 'phone_numbers', ['organization_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_phone_numbers_organization_id'), table_name='phone_numbers')
    op.drop_table('phone_numbers')
    op.drop_index(op.f('ix_authorized_forward_numbers_organization_id'), table_name='authorized_forward_numbers')
    op.drop_table('authorized_forward_numbers')
    op.drop_table('organizations')
