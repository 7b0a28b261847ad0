"""Create ledger_entries and payments tables

Revision ID: 20261018_000002
Revises: 20261018_000001
Create Date: 2026-10-18

Append-only ledger of anchored hashes, and the fee payments anchored on it.
ledger_entries.record_id is deliberately not a foreign key.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261018_000002"
down_revision: Union[str, None] = "20261018_000001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "ledger_entries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("transaction_id", sa.String(66), nullable=False),
        sa.Column("record_id", sa.Integer(), nullable=True),
        sa.Column("content_hash", sa.String(128), nullable=False),
        sa.Column(
            "action",
            sa.Enum("STORE_RECORD", "STORE_HASH", "PAYMENT_RECORDED", name="ledger_action"),
            nullable=False,
        ),
        sa.Column("actor_address", sa.String(255), nullable=True),
        sa.Column("record_type", sa.String(50), nullable=False, server_default="generic"),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("block_number", sa.Integer(), nullable=False),
        sa.Column("appended_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("transaction_id", name="uq_ledger_entries_transaction_id"),
    )
    op.create_index("ix_ledger_entries_transaction_id", "ledger_entries", ["transaction_id"])
    op.create_index("ix_ledger_entries_record_id", "ledger_entries", ["record_id"])
    op.create_index("ix_ledger_entries_content_hash", "ledger_entries", ["content_hash"])
    op.create_index("ix_ledger_entries_action", "ledger_entries", ["action"])

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("student_id", sa.String(100), nullable=True),
        sa.Column("type", sa.String(100), nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False, server_default="USD"),
        sa.Column(
            "status",
            sa.Enum("PENDING", "COMPLETED", name="payment_status"),
            nullable=False,
            server_default="PENDING",
        ),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("payment_method", sa.String(50), nullable=True),
        sa.Column("transaction_id", sa.String(66), nullable=True),
        sa.Column("paid_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_payments_user_id",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_payments_user_id", "payments", ["user_id"])
    op.create_index("ix_payments_student_id", "payments", ["student_id"])
    op.create_index("ix_payments_status", "payments", ["status"])


def downgrade() -> None:
    op.drop_index("ix_payments_status", table_name="payments")
    op.drop_index("ix_payments_student_id", table_name="payments")
    op.drop_index("ix_payments_user_id", table_name="payments")
    op.drop_table("payments")
    op.drop_index("ix_ledger_entries_action", table_name="ledger_entries")
    op.drop_index("ix_ledger_entries_content_hash", table_name="ledger_entries")
    op.drop_index("ix_ledger_entries_record_id", table_name="ledger_entries")
    op.drop_index("ix_ledger_entries_transaction_id", table_name="ledger_entries")
    op.drop_table("ledger_entries")
    op.execute("DROP TYPE IF EXISTS payment_status")
    op.execute("DROP TYPE IF EXISTS ledger_action")
