"""Calculator Routes — workspace lifecycle, input updates and saved history.

Invariants:
    - Local history changes before the store is called; store calls run as
      background tasks after the response and never roll local state back
    - Empty memo → 400 EMPTY_LABEL with history untouched
    - DELETE of one record returns 202: local removal is immediate, remote is deferred
    - Clearing all history is local-only (stored rows are kept)

Design Decisions:
    - Workspace state in an in-process registry (single-process uvicorn)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import BaseModel

from outlet_calc.api.dependencies import get_history_store, get_registry, get_app_settings
from outlet_calc.config import Settings
from outlet_calc.core.repository_protocols import HistoryStore
from outlet_calc.schemas.pricing import (
    PricingInputBody, PricingInputPatch, PricingResultOut,
    HistorySaveRequest, HistoryRecordOut,
)
from outlet_calc.services.calculator_service import CalculatorRegistry, CalculatorWorkspace
from outlet_calc.services.history_sync import persist_record, remove_record

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/calculators", tags=["calculators"])


class CalculatorResponse(BaseModel):
    id: UUID
    input: PricingInputBody
    result: PricingResultOut
    history_count: int
    persistence_enabled: bool


class HistoryListResponse(BaseModel):
    records: list[HistoryRecordOut]
    count: int


def _calculator_response(
    workspace: CalculatorWorkspace, store: HistoryStore,
) -> CalculatorResponse:
    return CalculatorResponse(
        id=workspace.id,
        input=PricingInputBody.from_domain(workspace.state.input),
        result=PricingResultOut.from_domain(workspace.state.result),
        history_count=len(workspace.history),
        persistence_enabled=store.configured,
    )


@router.post(
    "", response_model=CalculatorResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_calculator(
    store: HistoryStore = Depends(get_history_store),
    registry: CalculatorRegistry = Depends(get_registry),
    settings: Settings = Depends(get_app_settings),
):
    """Open a calculator; its history starts from the store's latest records."""
    workspace = await registry.create(store, settings.history_initial_load_limit)
    logger.info(
        f"Calculator created with {len(workspace.history)} history record(s)",
        extra={"workspace_id": str(workspace.id)},
    )
    return _calculator_response(workspace, store)


@router.get("/{workspace_id}", response_model=CalculatorResponse)
async def get_calculator(
    workspace_id: UUID,
    store: HistoryStore = Depends(get_history_store),
    registry: CalculatorRegistry = Depends(get_registry),
):
    return _calculator_response(registry.get(workspace_id), store)


@router.patch("/{workspace_id}", response_model=CalculatorResponse)
async def update_calculator(
    workspace_id: UUID,
    body: PricingInputPatch,
    store: HistoryStore = Depends(get_history_store),
    registry: CalculatorRegistry = Depends(get_registry),
):
    """Change any subset of inputs; every derived value is recomputed."""
    workspace = registry.get(workspace_id)
    workspace.update_input(**body.changes())
    return _calculator_response(workspace, store)


@router.post("/{workspace_id}/reset", response_model=CalculatorResponse)
async def reset_calculator(
    workspace_id: UUID,
    store: HistoryStore = Depends(get_history_store),
    registry: CalculatorRegistry = Depends(get_registry),
):
    """Clear all inputs; history is kept."""
    workspace = registry.get(workspace_id)
    workspace.state.reset()
    return _calculator_response(workspace, store)


@router.delete("/{workspace_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_calculator(
    workspace_id: UUID,
    registry: CalculatorRegistry = Depends(get_registry),
):
    registry.remove(workspace_id)


# ─── History ────────────────────────────────────────────────────

@router.get("/{workspace_id}/history", response_model=HistoryListResponse)
async def list_history(
    workspace_id: UUID,
    registry: CalculatorRegistry = Depends(get_registry),
):
    """Saved calculations, newest first (in-memory list)."""
    workspace = registry.get(workspace_id)
    records = [HistoryRecordOut.from_domain(r) for r in workspace.history]
    return HistoryListResponse(records=records, count=len(records))


@router.post(
    "/{workspace_id}/history", response_model=HistoryRecordOut,
    status_code=status.HTTP_201_CREATED,
)
async def save_history(
    workspace_id: UUID,
    body: HistorySaveRequest,
    background_tasks: BackgroundTasks,
    store: HistoryStore = Depends(get_history_store),
    registry: CalculatorRegistry = Depends(get_registry),
):
    """Save the current calculation under a memo, then mirror it to the store."""
    workspace = registry.get(workspace_id)
    record = workspace.save_history(body.memo)
    background_tasks.add_task(persist_record, store, record)
    return HistoryRecordOut.from_domain(record)


@router.delete(
    "/{workspace_id}/history/{record_id}",
    status_code=status.HTTP_202_ACCEPTED,
)
async def delete_history(
    workspace_id: UUID,
    record_id: UUID,
    background_tasks: BackgroundTasks,
    store: HistoryStore = Depends(get_history_store),
    registry: CalculatorRegistry = Depends(get_registry),
):
    """Remove locally now; the stored row is deleted in the background."""
    workspace = registry.get(workspace_id)
    workspace.delete_history(record_id)
    background_tasks.add_task(remove_record, store, record_id)
    return {"id": str(record_id), "history_count": len(workspace.history)}


@router.delete("/{workspace_id}/history")
async def clear_history(
    workspace_id: UUID,
    registry: CalculatorRegistry = Depends(get_registry),
):
    """Local-only clear; stored rows stay and reload with the next calculator."""
    workspace = registry.get(workspace_id)
    removed = workspace.clear_history()
    return {"cleared": removed, "history_count": 0}
