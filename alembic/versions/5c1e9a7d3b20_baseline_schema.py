"""baseline_schema

Revision ID: 5c1e9a7d3b20
Revises: 
Create Date: 2026-10-18 10:12:41.118204

Production-safe migration: only creates tables that do not exist yet.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '5c1e9a7d3b20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    """
    Create the tracker tables if they are missing.
    Enum-like columns are plain VARCHAR(32); values are validated by the ORM.
    """
    if not table_exists('resumes'):
        op.create_table('resumes',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('version_name', sa.String(), nullable=False),
            sa.Column('file_url', sa.String(), nullable=False),
            sa.Column('upload_date', sa.Date(), nullable=False),
            sa.Column('times_used', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('success_rate', sa.Float(), nullable=False, server_default='0'),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_resumes_id'), 'resumes', ['id'], unique=False)
        op.create_index(op.f('ix_resumes_user_id'), 'resumes', ['user_id'], unique=False)

    if not table_exists('referrals'):
        op.create_table('referrals',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('person_name', sa.String(), nullable=False),
            sa.Column('company', sa.String(), nullable=False),
            sa.Column('linkedin_url', sa.String(), nullable=True),
            sa.Column('relationship', sa.String(), nullable=True),
            sa.Column('date_asked', sa.Date(), nullable=True),
            sa.Column('status', sa.String(length=32), nullable=False),
            sa.Column('follow_up_date', sa.Date(), nullable=True),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_referrals_id'), 'referrals', ['id'], unique=False)
        op.create_index(op.f('ix_referrals_user_id'), 'referrals', ['user_id'], unique=False)
        op.create_index(op.f('ix_referrals_follow_up_date'), 'referrals', ['follow_up_date'], unique=False)

    if not table_exists('applications'):
        op.create_table('applications',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('company_name', sa.String(), nullable=False),
            sa.Column('role', sa.String(), nullable=False),
            sa.Column('job_link', sa.String(), nullable=True),
            sa.Column('job_id', sa.String(), nullable=True),
            sa.Column('application_source', sa.String(length=32), nullable=True),
            sa.Column('status', sa.String(length=32), nullable=False),
            sa.Column('applied_date', sa.Date(), nullable=False),
            sa.Column('response_date', sa.Date(), nullable=True),
            sa.Column('offer_date', sa.Date(), nullable=True),
            sa.Column('company_tier', sa.String(length=32), nullable=True),
            sa.Column('priority', sa.String(length=32), nullable=False),
            sa.Column('salary_range', sa.String(), nullable=True),
            sa.Column('tech_stack', sa.JSON(), nullable=True),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('resume_id', sa.Integer(), nullable=True),
            sa.Column('referral_id', sa.Integer(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['resume_id'], ['resumes.id'], ondelete='SET NULL'),
            sa.ForeignKeyConstraint(['referral_id'], ['referrals.id'], ondelete='SET NULL'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_applications_user_applied', 'applications', ['user_id', 'applied_date'], unique=False)
        op.create_index(op.f('ix_applications_id'), 'applications', ['id'], unique=False)
        op.create_index(op.f('ix_applications_user_id'), 'applications', ['user_id'], unique=False)
        op.create_index(op.f('ix_applications_company_name'), 'applications', ['company_name'], unique=False)
        op.create_index(op.f('ix_applications_status'), 'applications', ['status'], unique=False)
        op.create_index(op.f('ix_applications_applied_date'), 'applications', ['applied_date'], unique=False)
        op.create_index(op.f('ix_applications_resume_id'), 'applications', ['resume_id'], unique=False)
        op.create_index(op.f('ix_applications_referral_id'), 'applications', ['referral_id'], unique=False)

    if not table_exists('interviews'):
        op.create_table('interviews',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('application_id', sa.Integer(), nullable=False),
            sa.Column('round_name', sa.String(), nullable=False),
            sa.Column('scheduled_date', sa.DateTime(timezone=True), nullable=True),
            sa.Column('status', sa.String(length=32), nullable=False),
            sa.Column('prep_notes', sa.Text(), nullable=True),
            sa.Column('feedback', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['application_id'], ['applications.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_interviews_user_scheduled', 'interviews', ['user_id', 'scheduled_date'], unique=False)
        op.create_index(op.f('ix_interviews_id'), 'interviews', ['id'], unique=False)
        op.create_index(op.f('ix_interviews_user_id'), 'interviews', ['user_id'], unique=False)
        op.create_index(op.f('ix_interviews_application_id'), 'interviews', ['application_id'], unique=False)

    if not table_exists('user_preferences'):
        op.create_table('user_preferences',
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('email_notifications', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('telegram_notifications', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('telegram_chat_id', sa.String(), nullable=True),
            sa.Column('user_email', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.PrimaryKeyConstraint('user_id')
        )

    if not table_exists('activities'):
        op.create_table('activities',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('activity_type', sa.String(length=32), nullable=False),
            sa.Column('action', sa.String(length=32), nullable=False),
            sa.Column('entity_id', sa.String(), nullable=False),
            sa.Column('entity_name', sa.String(), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('old_value', sa.String(), nullable=True),
            sa.Column('new_value', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_activities_user_created', 'activities', ['user_id', 'created_at'], unique=False)
        op.create_index(op.f('ix_activities_id'), 'activities', ['id'], unique=False)
        op.create_index(op.f('ix_activities_user_id'), 'activities', ['user_id'], unique=False)
        op.create_index(op.f('ix_activities_created_at'), 'activities', ['created_at'], unique=False)


def downgrade() -> None:
    """Downgrade: drop the tracker tables, children first."""
    op.drop_index(op.f('ix_activities_created_at'), table_name='activities')
    op.drop_index(op.f('ix_activities_user_id'), table_name='activities')
    op.drop_index(op.f('ix_activities_id'), table_name='activities')
    op.drop_index('idx_activities_user_created', table_name='activities')
    op.drop_table('activities')

    op.drop_table('user_preferences')

    op.drop_index(op.f('ix_interviews_application_id'), table_name='interviews')
    op.drop_index(op.f('ix_interviews_user_id'), table_name='interviews')
    op.drop_index(op.f('ix_interviews_id'), table_name='interviews')
    op.drop_index('idx_interviews_user_scheduled', table_name='interviews')
    op.drop_table('interviews')

    op.drop_index(op.f('ix_applications_referral_id'), table_name='applications')
    op.drop_index(op.f('ix_applications_resume_id'), table_name='applications')
    op.drop_index(op.f('ix_applications_applied_date'), table_name='applications')
    op.drop_index(op.f('ix_applications_status'), table_name='applications')
    op.drop_index(op.f('ix_applications_company_name'), table_name='applications')
    op.drop_index(op.f('ix_applications_user_id'), table_name='applications')
    op.drop_index(op.f('ix_applications_id'), table_name='applications')
    op.drop_index('idx_applications_user_applied', table_name='applications')
    op.drop_table('applications')

    op.drop_index(op.f('ix_referrals_follow_up_date'), table_name='referrals')
    op.drop_index(op.f('ix_referrals_user_id'), table_name='referrals')
    op.drop_index(op.f('ix_referrals_id'), table_name='referrals')
    op.drop_table('referrals')

    op.drop_index(op.f('ix_resumes_user_id'), table_name='resumes')
    op.drop_index(op.f('ix_resumes_id'), table_name='resumes')
    op.drop_table('resumes')
