"""create profoli tables

Revision ID: 4f2a9c71d0e3
Revises:
Create Date: 2026-10-19 10:12:40.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4f2a9c71d0e3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # 1. users
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='standard'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username')
    )

    # 2. attendees
    op.create_table(
        'attendees',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('cpf', sa.String(length=11), nullable=False),
        sa.Column('roles', postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column('church', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
        sa.Column('payment_status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('cpf')
    )
    op.create_index('ix_attendees_payment_status', 'attendees', ['payment_status'])

    # 3. themes
    op.create_table(
        'themes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('speaker', sa.String(length=255), nullable=True),
        sa.Column('event_date', sa.Date(), nullable=True),
        sa.Column('file_url', sa.String(length=512), nullable=False),
        sa.Column('file_type', sa.String(length=128), nullable=False),
        sa.Column('cover_image_url', sa.String(length=512), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    # 4. attendance (uma linha por inscrito por chamada)
    op.create_table(
        'attendance',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('attendee_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('theme_id', sa.Integer(), nullable=False),
        sa.Column('present', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('finalized', sa.Boolean(), nullable=False, server_default='false'),
        sa.ForeignKeyConstraint(['attendee_id'], ['attendees.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['theme_id'], ['themes.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('attendee_id', 'date', 'theme_id', name='uq_attendance_attendee_session')
    )
    op.create_index('ix_attendance_session', 'attendance', ['date', 'theme_id'])

    # 5. justifications
    op.create_table(
        'justifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('attendee_id', sa.Integer(), nullable=False),
        sa.Column('theme_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('reason', sa.Text(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['attendee_id'], ['attendees.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['theme_id'], ['themes.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_justifications_attendee_id', 'justifications', ['attendee_id'])

    # 6. financial_transactions
    op.create_table(
        'financial_transactions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('type', sa.String(length=10), nullable=False),
        sa.Column('category', sa.String(length=128), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('attendee_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['attendee_id'], ['attendees.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('amount >= 0', name='ck_financial_transactions_amount_non_negative')
    )
    op.create_index('ix_financial_transactions_type', 'financial_transactions', ['type'])
    op.create_index('ix_financial_transactions_attendee_id', 'financial_transactions', ['attendee_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_financial_transactions_attendee_id', table_name='financial_transactions')
    op.drop_index('ix_financial_transactions_type', table_name='financial_transactions')
    op.drop_table('financial_transactions')
    op.drop_index('ix_justifications_attendee_id', table_name='justifications')
    op.drop_table('justifications')
    op.drop_index('ix_attendance_session', table_name='attendance')
    op.drop_table('attendance')
    op.drop_table('themes')
    op.drop_index('ix_attendees_payment_status', table_name='attendees')
    op.drop_table('attendees')
    op.drop_table('users')
