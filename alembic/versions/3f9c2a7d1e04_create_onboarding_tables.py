"""create_onboarding_tables

Revision ID: 3f9c2a7d1e04
Revises:
Create Date: 2025-09-01 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f9c2a7d1e04'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONList = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Create client, project_milestone and integration_status tables."""
    op.create_table(
        'client',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('industry', sa.String(), nullable=True),
        sa.Column('primary_contact_name', sa.String(), nullable=False),
        sa.Column('primary_contact_email', sa.String(), nullable=False),
        sa.Column('salesforce_edition', sa.String(), nullable=True),
        sa.Column('number_of_users', sa.String(), nullable=True),
        sa.Column('integrations', JSONList, nullable=True),
        sa.Column('compliance_requirements', JSONList, nullable=True),
        sa.Column('service_package', sa.String(), nullable=True),
        sa.Column('zoho_contract_id', sa.String(), nullable=True),
        sa.Column('zoho_meeting_url', sa.String(), nullable=True),
        sa.Column('current_step', sa.String(length=1), nullable=False, server_default='1'),
        sa.Column('contract_signed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('system_details_complete', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('kickoff_scheduled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('resources_accessed', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_client_primary_contact_email', 'client', ['primary_contact_email'])

    op.create_table(
        'project_milestone',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('client_id', sa.String(length=36), sa.ForeignKey('client.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column(
            'type',
            sa.Enum('kickoff', 'review', 'delivery', 'custom', name='milestonetype'),
            nullable=False,
        ),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_project_milestone_client_id', 'project_milestone', ['client_id'])

    op.create_table(
        'integration_status',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('client_id', sa.String(length=36), sa.ForeignKey('client.id', ondelete='CASCADE'), nullable=False),
        sa.Column('slack_connected', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('zoho_connected', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('n8n_connected', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('slack_webhook_url', sa.String(), nullable=True),
        sa.Column('n8n_webhook_url', sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_integration_status_client_id', 'integration_status', ['client_id'])


def downgrade() -> None:
    """Drop onboarding tables."""
    op.drop_index('ix_integration_status_client_id', table_name='integration_status')
    op.drop_table('integration_status')
    op.drop_index('ix_project_milestone_client_id', table_name='project_milestone')
    op.drop_table('project_milestone')
    op.drop_index('ix_client_primary_contact_email', table_name='client')
    op.drop_table('client')
    sa.Enum(name='milestonetype').drop(op.get_bind(), checkfirst=True)
