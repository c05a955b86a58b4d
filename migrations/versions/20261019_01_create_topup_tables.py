"""create users, transactions and balance_logs

Revision ID: 5c1e7a9b2d40
Revises:
Create Date: 2026-10-19 09:30:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5c1e7a9b2d40"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=128), primary_key=True),
        sa.Column("email", sa.String(length=255)),
        sa.Column("display_name", sa.String(length=100)),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="user"),
        sa.Column("balance", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("balance_version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.CheckConstraint("balance >= 0", name="ck_users_balance_non_negative"),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "transactions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("order_id", sa.String(length=100), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("service_id", sa.String(length=100)),
        sa.Column("service_name", sa.String(length=255)),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("gateway_response_payload", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_transactions_order_id", "transactions", ["order_id"], unique=True)
    op.create_index("ix_transactions_user_id", "transactions", ["user_id"])

    op.create_table(
        "balance_logs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=128), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("action", sa.String(length=20), nullable=False),
        sa.Column("reason", sa.String(length=255)),
        sa.Column("order_id", sa.String(length=100)),
        sa.Column("previous_balance", sa.BigInteger(), nullable=False),
        sa.Column("new_balance", sa.BigInteger(), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_balance_logs_user_id", "balance_logs", ["user_id"])
    op.create_index("ix_balance_logs_order_id", "balance_logs", ["order_id"])


def downgrade() -> None:
    op.drop_index("ix_balance_logs_order_id", table_name="balance_logs")
    op.drop_index("ix_balance_logs_user_id", table_name="balance_logs")
    op.drop_table("balance_logs")

    op.drop_index("ix_transactions_user_id", table_name="transactions")
    op.drop_index("ix_transactions_order_id", table_name="transactions")
    op.drop_table("transactions")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
