"""Create institutions, users, students and records tables

Revision ID: 20261018_000001
Revises: None
Create Date: 2026-10-18

Issuers, students and the academic records issued about them.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261018_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RECORD_TYPES = ('TRANSCRIPT', 'CERTIFICATE', 'MARKSHEET', 'DEGREE', 'OTHER')


def upgrade() -> None:
    """Create the core tables."""
    op.create_table(
        'institutions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('wallet_address', sa.String(64), nullable=True),
        sa.Column('verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code', name='uq_institutions_code'),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('role', sa.String(50), nullable=False),
        sa.Column('wallet_address', sa.String(64), nullable=True),
        sa.Column('institution_id', sa.Integer(), nullable=True),
        sa.Column('student_id', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['institution_id'],
            ['institutions.id'],
            name='fk_users_institution_id',
            ondelete='SET NULL'
        ),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_wallet_address', 'users', ['wallet_address'])

    op.create_table(
        'students',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('student_id', sa.String(100), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('course', sa.String(200), nullable=True),
        sa.Column('department', sa.String(200), nullable=True),
        sa.Column('enrollment_year', sa.Integer(), nullable=True),
        sa.Column('wallet_address', sa.String(64), nullable=True),
        sa.Column('institution_id', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(50), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['institution_id'],
            ['institutions.id'],
            name='fk_students_institution_id',
            ondelete='SET NULL'
        ),
    )
    op.create_index('ix_students_student_id', 'students', ['student_id'], unique=True)
    op.create_index('ix_students_wallet_address', 'students', ['wallet_address'])

    op.create_table(
        'records',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('subject_entity_id', sa.String(100), nullable=False),
        sa.Column('type', sa.Enum(*RECORD_TYPES, name='record_type'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('issued_title', sa.String(255), nullable=False),
        sa.Column('payload', sa.JSON(), nullable=True),
        sa.Column('content_hash', sa.String(128), nullable=False),
        sa.Column('issued_by', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_records_subject_entity_id', 'records', ['subject_entity_id'])
    op.create_index('ix_records_type', 'records', ['type'])
    op.create_index('ix_records_content_hash', 'records', ['content_hash'])


def downgrade() -> None:
    """Drop the core tables."""
    op.drop_index('ix_records_content_hash', table_name='records')
    op.drop_index('ix_records_type', table_name='records')
    op.drop_index('ix_records_subject_entity_id', table_name='records')
    op.drop_table('records')
    op.drop_index('ix_students_wallet_address', table_name='students')
    op.drop_index('ix_students_student_id', table_name='students')
    op.drop_table('students')
    op.drop_index('ix_users_wallet_address', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    op.drop_table('institutions')

    # Drop the enum type
    op.execute("DROP TYPE IF EXISTS record_type")
