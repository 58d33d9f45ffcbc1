"""SQL History Store — `outlet_history` table through SQLAlchemy async sessions.

Invariants:
    - Implements core.repository_protocols.HistoryStore; never raises
    - insert checks the primary key first: retrying the same id is a no-op
    - Each call uses its own session (calls run as background tasks after the request)
    - DatabaseError from the session manager maps to HistoryStoreError

Design Decisions:
    - Session factory injected (DatabaseSessionManager.session or a test factory)
      so the store does not reach for the db_manager singleton
"""

import logging
from contextlib import AbstractAsyncContextManager
from typing import Callable
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from outlet_calc.core.errors import (
    DatabaseError, HistoryStoreError, ErrorContext,
)
from outlet_calc.core.history_ledger import HistoryRecord
from outlet_calc.core.history_row import record_to_row, record_from_row
from outlet_calc.core.repository_protocols import StoreResult
from outlet_calc.models.outlet_history import OutletHistory

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


def _row_kwargs(record: HistoryRecord) -> dict:
    row = record_to_row(record)
    row["id"] = record.id
    return row


class SqlHistoryStore:
    """History persistence in the application database."""

    def __init__(self, session_factory: SessionFactory):
        self._session = session_factory

    @property
    def configured(self) -> bool:
        return True

    async def insert(self, record: HistoryRecord) -> StoreResult[None]:
        try:
            async with self._session() as db:
                if await db.get(OutletHistory, record.id) is None:
                    db.add(OutletHistory(**_row_kwargs(record)))
                    await db.commit()
        except DatabaseError as e:
            return StoreResult(error=HistoryStoreError(
                e.message, "insert", ErrorContext(record_id=str(record.id)),
            ))
        return StoreResult()

    async def list(self, limit: int = 50) -> StoreResult[list[HistoryRecord]]:
        try:
            async with self._session() as db:
                result = await db.execute(
                    select(OutletHistory)
                    .order_by(OutletHistory.created_at.desc())
                    .limit(limit),
                )
                rows = [r.to_row() for r in result.scalars().all()]
        except DatabaseError as e:
            return StoreResult(data=[], error=HistoryStoreError(e.message, "list"))
        try:
            records = [record_from_row(row) for row in rows]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Unreadable history row in database: {e}")
            return StoreResult(data=[], error=HistoryStoreError(str(e), "list"))
        return StoreResult(data=records)

    async def delete(self, record_id: UUID) -> StoreResult[None]:
        try:
            async with self._session() as db:
                await db.execute(
                    delete(OutletHistory).where(OutletHistory.id == record_id),
                )
                await db.commit()
        except DatabaseError as e:
            return StoreResult(error=HistoryStoreError(
                e.message, "delete", ErrorContext(record_id=str(record_id)),
            ))
        return StoreResult()
