"""Initial scheduler schema

Revision ID: 4b1e9c27d5a0
Revises: 
Create Date: 2026-10-18 09:12:41.208311

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1e9c27d5a0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        sa.Column('role', sa.String(length=50), nullable=False, server_default='user'),
        sa.Column('working_days', sa.JSON(), nullable=True),
        sa.Column('work_schedule', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_profiles_email', 'profiles', ['email'])
    op.create_index('ix_profiles_role', 'profiles', ['role'])

    op.create_table(
        'properties',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('property_name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=2), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'unit_sizes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('unit_size_label', sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'job_types',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('job_type_label', sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'job_phases',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('job_phase_label', sa.String(length=100), nullable=False),
        sa.Column('color_dark_mode', sa.String(length=20), nullable=True),
        sa.Column('color_light_mode', sa.String(length=20), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('job_phase_label')
    )

    op.create_table(
        'jobs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('work_order_num', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Uuid(), nullable=False),
        sa.Column('unit_number', sa.String(length=50), nullable=False),
        sa.Column('unit_size_id', sa.Uuid(), nullable=False),
        sa.Column('job_type_id', sa.Uuid(), nullable=False),
        sa.Column('current_phase_id', sa.Uuid(), nullable=False),
        sa.Column('scheduled_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('assigned_to', sa.Uuid(), nullable=True),
        sa.Column('assignment_status', sa.String(length=20), nullable=True),
        sa.Column('assignment_decision_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('declined_reason_code', sa.String(length=50), nullable=True),
        sa.Column('declined_reason_text', sa.Text(), nullable=True),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id']),
        sa.ForeignKeyConstraint(['unit_size_id'], ['unit_sizes.id']),
        sa.ForeignKeyConstraint(['job_type_id'], ['job_types.id']),
        sa.ForeignKeyConstraint(['current_phase_id'], ['job_phases.id']),
        sa.ForeignKeyConstraint(['assigned_to'], ['profiles.id']),
        sa.ForeignKeyConstraint(['created_by'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('work_order_num')
    )
    op.create_index('ix_jobs_property_id', 'jobs', ['property_id'])
    op.create_index('ix_jobs_current_phase_id', 'jobs', ['current_phase_id'])
    op.create_index('ix_jobs_scheduled_date', 'jobs', ['scheduled_date'])
    op.create_index('ix_jobs_assigned_to', 'jobs', ['assigned_to'])
    op.create_index('ix_jobs_assignment_status', 'jobs', ['assignment_status'])

    op.create_table(
        'assignment_decisions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('job_id', sa.Uuid(), nullable=False),
        sa.Column('subcontractor_id', sa.Uuid(), nullable=False),
        sa.Column('decision', sa.String(length=20), nullable=False),
        sa.Column('previous_status', sa.String(length=20), nullable=True),
        sa.Column('reason_code', sa.String(length=50), nullable=True),
        sa.Column('reason_text', sa.Text(), nullable=True),
        sa.Column('decided_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id']),
        sa.ForeignKeyConstraint(['subcontractor_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_assignment_decisions_job_id', 'assignment_decisions', ['job_id'])
    op.create_index('ix_assignment_decisions_subcontractor_id', 'assignment_decisions', ['subcontractor_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False, server_default='system'),
        sa.Column('reference_id', sa.Uuid(), nullable=True),
        sa.Column('reference_type', sa.String(length=50), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])

    op.create_table(
        'sub_assignment_notification_recipients',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('sub_assignment_notification_recipients')
    op.drop_index('ix_notifications_user_id', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('ix_assignment_decisions_subcontractor_id', table_name='assignment_decisions')
    op.drop_index('ix_assignment_decisions_job_id', table_name='assignment_decisions')
    op.drop_table('assignment_decisions')
    op.drop_index('ix_jobs_assignment_status', table_name='jobs')
    op.drop_index('ix_jobs_assigned_to', table_name='jobs')
    op.drop_index('ix_jobs_scheduled_date', table_name='jobs')
    op.drop_index('ix_jobs_current_phase_id', table_name='jobs')
    op.drop_index('ix_jobs_property_id', table_name='jobs')
    op.drop_table('jobs')
    op.drop_table('job_phases')
    op.drop_table('job_types')
    op.drop_table('unit_sizes')
    op.drop_table('properties')
    op.drop_index('ix_profiles_role', table_name='profiles')
    op.drop_index('ix_profiles_email', table_name='profiles')
    op.drop_table('profiles')
