"""OutletHistory ORM — one saved calculation per row.

Invariants:
    - id is a UUID primary key chosen by the caller (re-inserting the same id is a no-op)
    - Nullable price/net/discount columns store None for absent values, never 0
    - created_at is server-assigned and drives newest-first ordering
    - Rows are never updated: insert and delete only

Design Decisions:
    - Column names match the Supabase table so both backends share core/history_row.py
    - Fees are not stored: price - net rebuilds them
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Text, Integer, Float, DateTime, CheckConstraint, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from outlet_calc.db.base import Base
from outlet_calc.core.domain_types import HISTORY_TABLE


class OutletHistory(Base):
    """Persisted HistoryRecord."""
    __tablename__ = HISTORY_TABLE
    __table_args__ = (
        CheckConstraint(
            "discount_mode IN ('amount', 'percent')",
            name="ck_outlet_history_discount_mode",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    memo: Mapped[str | None] = mapped_column(Text, nullable=True)
    base_price: Mapped[int] = mapped_column(Integer, nullable=False)
    discount_mode: Mapped[str] = mapped_column(
        String(10), nullable=False, default="amount",
    )
    base_discount_amount: Mapped[int | None] = mapped_column(Integer, nullable=True)
    base_discount_percent: Mapped[int | None] = mapped_column(Integer, nullable=True)
    extra: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    final: Mapped[float] = mapped_column(Float, nullable=False)
    refund10: Mapped[float] = mapped_column(Float, nullable=False)
    kream_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    kream_net: Mapped[float | None] = mapped_column(Float, nullable=True)
    poizon_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    poizon_net: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )

    def to_row(self) -> dict:
        """Plain dict in the shared row shape (see core/history_row.py)."""
        return {
            column.name: getattr(self, column.key)
            for column in self.__table__.columns
        }
