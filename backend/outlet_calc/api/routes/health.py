"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 200 even with persistence disabled: the
      calculator works local-only, so a missing store does not remove it from service
    - With HISTORY_BACKEND=database, an unreachable database reports 503
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from outlet_calc.api.dependencies import get_history_store
from outlet_calc.core.repository_protocols import HistoryStore
from outlet_calc.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "outlet-calc-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(store: HistoryStore = Depends(get_history_store)):
    """Readiness probe — reports history store status."""
    checks = {"history_store": "enabled" if store.configured else "disabled"}
    if database.db_manager is not None:
        db_ok = await database.db_manager.health_check()
        checks["database"] = "healthy" if db_ok else "unavailable"
        if not db_ok:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "not_ready",
                    "reason": "database_unavailable",
                    "checks": checks,
                },
            )
    return {"status": "ready", "checks": checks}
