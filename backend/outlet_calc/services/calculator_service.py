"""Calculator Service — in-memory workspaces: pricing state plus history list.

Invariants:
    - A workspace's history tuple is the source of truth for display
    - History is replaced wholesale (prepend / filter), never mutated in place
    - Saving with an empty memo raises before anything changes
    - The store is read once, when the workspace is created

Design Decisions:
    - Registry is an in-process dict: single-process uvicorn, state lost on
      restart (history survives in the store and is reloaded on next create)
    - Store writes are NOT awaited here: routes schedule services/history_sync.py
      coroutines as background tasks after the local update
"""

import logging
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID, uuid4

from outlet_calc.core.errors import ResourceNotFoundError, ErrorContext
from outlet_calc.core.history_ledger import (
    HistoryRecord, build_history_record, prepend_record, remove_record, find_record,
)
from outlet_calc.core.pricing import PricingResult
from outlet_calc.core.pricing_state import PricingState
from outlet_calc.core.repository_protocols import HistoryStore

logger = logging.getLogger(__name__)


@dataclass
class CalculatorWorkspace:
    """One calculator: current input/result and its saved history."""
    id: UUID = field(default_factory=uuid4)
    state: PricingState = field(default_factory=PricingState)
    history: tuple[HistoryRecord, ...] = ()

    def update_input(self, **changes: Any) -> PricingResult:
        return self.state.update(**changes)

    def save_history(self, memo: str | None, record_id: UUID | None = None) -> HistoryRecord:
        """Snapshot the current calculation and prepend it. Raises EmptyLabelError."""
        record = build_history_record(
            record_id or uuid4(), memo, self.state.input, self.state.result,
            ErrorContext(workspace_id=str(self.id)),
        )
        self.history = prepend_record(self.history, record)
        logger.info(
            "History record saved",
            extra={"workspace_id": str(self.id), "record_id": str(record.id)},
        )
        return record

    def delete_history(self, record_id: UUID) -> HistoryRecord:
        record = find_record(self.history, record_id)
        if record is None:
            raise ResourceNotFoundError(
                "HistoryRecord", str(record_id),
                ErrorContext(workspace_id=str(self.id), record_id=str(record_id)),
            )
        self.history = remove_record(self.history, record_id)
        return record

    def clear_history(self) -> int:
        """Local-only clear; stored rows are left alone."""
        count = len(self.history)
        self.history = ()
        return count


class CalculatorRegistry:
    """Process-wide map of live workspaces."""

    def __init__(self) -> None:
        self._workspaces: dict[UUID, CalculatorWorkspace] = {}

    async def create(
        self, store: HistoryStore, initial_limit: int = 100,
    ) -> CalculatorWorkspace:
        """New workspace, seeded with the store's most recent records."""
        workspace = CalculatorWorkspace()
        loaded = await store.list(initial_limit)
        if loaded.error is not None:
            logger.warning(
                f"Initial history load skipped: {loaded.error.message}",
                extra={
                    "workspace_id": str(workspace.id),
                    "error_code": loaded.error.code,
                },
            )
        workspace.history = tuple(loaded.data or ())
        self._workspaces[workspace.id] = workspace
        return workspace

    def get(self, workspace_id: UUID) -> CalculatorWorkspace:
        workspace = self._workspaces.get(workspace_id)
        if workspace is None:
            raise ResourceNotFoundError("Calculator", str(workspace_id))
        return workspace

    def remove(self, workspace_id: UUID) -> None:
        if self._workspaces.pop(workspace_id, None) is None:
            raise ResourceNotFoundError("Calculator", str(workspace_id))

    def __len__(self) -> int:
        return len(self._workspaces)

    def clear(self) -> None:
        self._workspaces.clear()
