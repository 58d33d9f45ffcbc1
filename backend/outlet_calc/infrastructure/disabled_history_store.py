"""Disabled History Store — stand-in when persistence credentials are absent.

Invariants:
    - Every call short-circuits with HistoryStoreNotConfiguredError (no IO)
    - list() returns empty data, so workspaces start with an empty history
"""

from uuid import UUID

from outlet_calc.core.errors import HistoryStoreNotConfiguredError, ErrorContext
from outlet_calc.core.history_ledger import HistoryRecord
from outlet_calc.core.repository_protocols import StoreResult


class DisabledHistoryStore:
    """No-op store; the calculator runs local-only."""

    def __init__(self, missing: list[str] | None = None):
        self.missing = missing or []

    @property
    def configured(self) -> bool:
        return False

    def _not_configured(self, operation: str, **ctx: str) -> HistoryStoreNotConfiguredError:
        return HistoryStoreNotConfiguredError(
            self.missing, ErrorContext(operation=operation, **ctx),
        )

    async def insert(self, record: HistoryRecord) -> StoreResult[None]:
        return StoreResult(error=self._not_configured("insert", record_id=str(record.id)))

    async def list(self, limit: int = 50) -> StoreResult[list[HistoryRecord]]:
        return StoreResult(data=[], error=self._not_configured("list"))

    async def delete(self, record_id: UUID) -> StoreResult[None]:
        return StoreResult(error=self._not_configured("delete", record_id=str(record_id)))
