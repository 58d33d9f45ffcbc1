"""Outlet history table — one row per saved calculation.

Revision ID: 001_outlet_history
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_outlet_history"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "outlet_history",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("memo", sa.Text, nullable=True),
        sa.Column("base_price", sa.Integer, nullable=False),
        sa.Column("discount_mode", sa.String(10), nullable=False, server_default="amount"),
        sa.Column("base_discount_amount", sa.Integer, nullable=True),
        sa.Column("base_discount_percent", sa.Integer, nullable=True),
        sa.Column("extra", sa.Integer, nullable=False, server_default="0"),
        sa.Column("final", sa.Float, nullable=False),
        sa.Column("refund10", sa.Float, nullable=False),
        sa.Column("kream_price", sa.Float, nullable=True),
        sa.Column("kream_net", sa.Float, nullable=True),
        sa.Column("poizon_price", sa.Float, nullable=True),
        sa.Column("poizon_net", sa.Float, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "discount_mode IN ('amount', 'percent')", name="ck_outlet_history_discount_mode",
        ),
    )
    op.create_index(
        "ix_outlet_history_created_at", "outlet_history", ["created_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_outlet_history_created_at", table_name="outlet_history")
    op.drop_table("outlet_history")
