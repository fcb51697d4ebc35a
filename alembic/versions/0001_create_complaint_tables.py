"""create complaints, users and location_qr_bindings

Initial schema for complaint intake, admin accounts and location QR bindings.

Revision ID: 0001_create_complaint_tables
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_create_complaint_tables'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

COMPLAINT_TYPES = ('Road', 'Nala', 'Water Supply', 'Electricity', 'Waste Management', 'Public Health', 'Other')
PRIORITIES = ('Low', 'Medium', 'High', 'Emergency')
STATUSES = ('Submitted', 'Under Review', 'Accepted', 'In Progress', 'Resolved', 'Rejected')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'complaints',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('complaint_number', sa.String(length=40), nullable=False),
        sa.Column('person_name', sa.String(length=120), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('address', sa.String(length=300), nullable=False),
        sa.Column('ward_number', sa.Integer(), nullable=False),
        sa.Column('location', sa.String(length=200), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('complaint_type', sa.Enum(*COMPLAINT_TYPES, name='complaint_type'), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('priority', sa.Enum(*PRIORITIES, name='complaint_priority'), nullable=False),
        sa.Column('status', sa.Enum(*STATUSES, name='complaint_status'), nullable=False),
        sa.Column('source', sa.Enum('web', 'qr', name='complaint_source'), nullable=False),
        sa.Column('assigned_to', sa.String(length=120), nullable=True),
        sa.Column('assigned_phone', sa.String(length=30), nullable=True),
        sa.Column('assigned_email', sa.String(length=255), nullable=True),
        sa.Column('resolution_notes', sa.Text(), nullable=True),
        sa.Column('action_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('incident_date', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_complaints_complaint_number', 'complaints', ['complaint_number'], unique=True)
    op.create_index('ix_complaints_ward_number', 'complaints', ['ward_number'])
    op.create_index('ix_complaints_complaint_type', 'complaints', ['complaint_type'])
    op.create_index('ix_complaints_priority', 'complaints', ['priority'])
    op.create_index('ix_complaints_status', 'complaints', ['status'])
    op.create_index('ix_complaints_created_at', 'complaints', ['created_at'])
    op.create_index('ix_complaints_status_ward', 'complaints', ['status', 'ward_number'])

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(length=60), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum('admin', 'officer', name='user_role'), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'location_qr_bindings',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('location', sa.String(length=200), nullable=False),
        sa.Column('ward_number', sa.Integer(), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('payload_url', sa.String(length=1000), nullable=False, unique=True),
        sa.Column('created_by', sa.String(length=60), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_location_qr_bindings_location', 'location_qr_bindings', ['location'])
    op.create_index('ix_location_qr_bindings_ward_number', 'location_qr_bindings', ['ward_number'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('location_qr_bindings')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
    op.drop_table('complaints')
    for name in ('complaint_source', 'complaint_status', 'complaint_priority', 'complaint_type', 'user_role'):
        sa.Enum(name=name).drop(op.get_bind(), checkfirst=True)
