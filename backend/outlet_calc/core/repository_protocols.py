"""Boundary Protocols — the History Store port between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Store methods never raise: every failure comes back as StoreResult.error
    - list() failure yields empty data alongside the error
    - insert() is idempotent by record id; delete() of a missing id is not an error

Design Decisions:
    - Protocol over ABC: structural subtyping, adapters need no common base
    - Async in Protocol: implementations do IO, but pricing never awaits them —
      the shell schedules store calls after local state is already updated
    - StoreResult over exceptions: the store is a best-effort mirror, callers
      log the error and carry on
"""

from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar
from uuid import UUID

from outlet_calc.core.errors import OutletCalcError
from outlet_calc.core.history_ledger import HistoryRecord

T = TypeVar("T")


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Outcome of one store call: data on success, error otherwise."""
    data: T | None = None
    error: OutletCalcError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class HistoryStore(Protocol):
    """Contract for history persistence — implemented by infrastructure/."""

    @property
    def configured(self) -> bool: ...

    async def insert(self, record: HistoryRecord) -> StoreResult[None]: ...

    async def list(self, limit: int = 50) -> StoreResult[list[HistoryRecord]]: ...

    async def delete(self, record_id: UUID) -> StoreResult[None]: ...
