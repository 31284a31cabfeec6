"""Initial schema creation

Revision ID: a001
Revises: 
Create Date: 2026-02-01

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'a001'
down_revision = None
branch_labels = None
depends_on = None


CATEGORIES = ('tutoring', 'mentoring', 'community_service', 'office_work', 'event_support', 'other')


def upgrade() -> None:
    """Create initial database schema."""
    
    # Create profiles table
    op.create_table(
        'profiles',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('role', sa.Enum('student', 'admin', name='userrole', native_enum=False, length=32), nullable=False),
        sa.Column('total_goal', sa.Integer(), nullable=False, server_default='150'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    
    # Create shifts table
    op.create_table(
        'shifts',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('category', sa.Enum(*CATEGORIES, name='category', native_enum=False, length=32), nullable=False),
        sa.Column('task_description', sa.Text(), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=True),
        sa.Column('status', sa.Enum('active', 'completed', name='shiftstatus', native_enum=False, length=32), nullable=False),
        sa.Column('duration_minutes', sa.Numeric(10, 2), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('active_lock', sa.Boolean(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id']),
        sa.UniqueConstraint('user_id', 'active_lock', name='uq_shift_user_active')
    )
    op.create_index('ix_shifts_user_id', 'shifts', ['user_id'])
    op.create_index('ix_shifts_start_time', 'shifts', ['start_time'])
    op.create_index('ix_shifts_status', 'shifts', ['status'])
    
    # Create manual_logs table
    op.create_table(
        'manual_logs',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('duration_minutes', sa.Numeric(10, 2), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.Enum(*CATEGORIES, name='category', native_enum=False, length=32), nullable=False),
        sa.Column('status', sa.Enum('pending', 'approved', 'rejected', name='manuallogstatus', native_enum=False, length=32), nullable=False),
        sa.Column('reviewed_by', sa.String(36), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id']),
        sa.ForeignKeyConstraint(['reviewed_by'], ['profiles.id'])
    )
    op.create_index('ix_manual_logs_user_id', 'manual_logs', ['user_id'])
    op.create_index('ix_manual_logs_status', 'manual_logs', ['status'])
    op.create_index('ix_manual_logs_created_at', 'manual_logs', ['created_at'])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('manual_logs')
    op.drop_table('shifts')
    op.drop_table('profiles')
