"""Supabase History Store — `outlet_history` table over the Supabase REST client.

Invariants:
    - Implements core.repository_protocols.HistoryStore; never raises
    - insert is an upsert that ignores duplicates: retrying the same id is harmless
    - list orders by created_at descending and caps at `limit`
    - PostgREST and transport errors map to HistoryStoreError (core/errors.py)

Design Decisions:
    - supabase-py sync client run via asyncio.to_thread: keeps the event loop free
      without depending on the async client's API surface
    - Client injected: tests pass a mock, the factory builds the real one
"""

import asyncio
import logging
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from outlet_calc.core.errors import HistoryStoreError, ErrorContext
from outlet_calc.core.history_ledger import HistoryRecord
from outlet_calc.core.history_row import record_to_row, record_from_row
from outlet_calc.core.repository_protocols import StoreResult
from outlet_calc.core.domain_types import HISTORY_TABLE

logger = logging.getLogger(__name__)

_STORE_ERRORS = (APIError, httpx.HTTPError, OSError)


def _describe(e: Exception) -> str:
    return getattr(e, "message", None) or str(e) or type(e).__name__


class SupabaseHistoryStore:
    """History persistence in a Supabase (PostgREST) table."""

    def __init__(self, client: Client, table: str = HISTORY_TABLE):
        self.client = client
        self.table = table

    @classmethod
    def from_credentials(
        cls, url: str, anon_key: str, table: str = HISTORY_TABLE,
    ) -> "SupabaseHistoryStore":
        return cls(create_client(url, anon_key), table)

    @property
    def configured(self) -> bool:
        return True

    async def insert(self, record: HistoryRecord) -> StoreResult[None]:
        query = self.client.table(self.table).upsert(
            record_to_row(record), on_conflict="id", ignore_duplicates=True,
        )
        try:
            await asyncio.to_thread(query.execute)
        except _STORE_ERRORS as e:
            return StoreResult(error=HistoryStoreError(
                _describe(e), "insert",
                ErrorContext(record_id=str(record.id)),
            ))
        return StoreResult()

    async def list(self, limit: int = 50) -> StoreResult[list[HistoryRecord]]:
        query = (
            self.client.table(self.table)
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
        )
        try:
            response = await asyncio.to_thread(query.execute)
        except _STORE_ERRORS as e:
            return StoreResult(data=[], error=HistoryStoreError(_describe(e), "list"))
        try:
            records = [record_from_row(row) for row in (response.data or [])]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Unreadable history row from Supabase: {e}")
            return StoreResult(data=[], error=HistoryStoreError(str(e), "list"))
        return StoreResult(data=records)

    async def delete(self, record_id: UUID) -> StoreResult[None]:
        query = self.client.table(self.table).delete().eq("id", str(record_id))
        try:
            await asyncio.to_thread(query.execute)
        except _STORE_ERRORS as e:
            return StoreResult(error=HistoryStoreError(
                _describe(e), "delete",
                ErrorContext(record_id=str(record_id)),
            ))
        return StoreResult()
