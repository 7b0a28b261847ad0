"""Wallet-only accounts, institution updated_at, system_logs table

Revision ID: 20261018_000003
Revises: 20261018_000002
Create Date: 2026-10-18

Wallet login creates users without email or password. Administrative
actions are recorded in system_logs.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261018_000003"
down_revision: Union[str, None] = "20261018_000002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SYSTEM_ACTIONS = (
    "PASSWORD_CHANGED",
    "PROFILE_UPDATED",
    "USER_UPDATED",
    "USER_DELETED",
    "PASSWORD_RESET",
    "INSTITUTION_UPDATED",
    "INSTITUTION_DELETED",
)


def upgrade() -> None:
    # MS SQL treats NULLs as equal in unique indexes; only index real emails there
    op.drop_index("ix_users_email", table_name="users")
    with op.batch_alter_table("users") as batch_op:
        batch_op.alter_column("email", existing_type=sa.String(255), nullable=True)
        batch_op.alter_column("password", existing_type=sa.String(255), nullable=True)
    op.create_index(
        "ix_users_email",
        "users",
        ["email"],
        unique=True,
        mssql_where=sa.text("email IS NOT NULL"),
    )

    with op.batch_alter_table("institutions") as batch_op:
        batch_op.add_column(sa.Column("updated_at", sa.DateTime(), nullable=True))

    op.create_table(
        "system_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("action", sa.Enum(*SYSTEM_ACTIONS, name="system_action"), nullable=False),
        sa.Column("performed_by", sa.Integer(), nullable=True),
        sa.Column("target_user_id", sa.Integer(), nullable=True),
        sa.Column("target_email", sa.String(255), nullable=True),
        sa.Column("target_institution_id", sa.Integer(), nullable=True),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_system_logs_action", "system_logs", ["action"])
    op.create_index("ix_system_logs_created_at", "system_logs", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_system_logs_created_at", table_name="system_logs")
    op.drop_index("ix_system_logs_action", table_name="system_logs")
    op.drop_table("system_logs")
    op.execute("DROP TYPE IF EXISTS system_action")

    with op.batch_alter_table("institutions") as batch_op:
        batch_op.drop_column("updated_at")

    op.drop_index("ix_users_email", table_name="users")
    with op.batch_alter_table("users") as batch_op:
        batch_op.alter_column("password", existing_type=sa.String(255), nullable=False)
        batch_op.alter_column("email", existing_type=sa.String(255), nullable=False)
    op.create_index("ix_users_email", "users", ["email"], unique=True)
