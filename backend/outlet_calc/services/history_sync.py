"""History Sync — fire-and-forget mirroring of local history changes to the store.

Invariants:
    - Runs after the local list is already updated; never touches workspace state
    - Store failures are logged (WARNING; INFO when persistence is not configured),
      never raised and never rolled back
    - Safe to run late or twice: insert is idempotent by id, delete by id

Design Decisions:
    - Plain coroutines scheduled with FastAPI BackgroundTasks: no queue, no retry
"""

import logging
from uuid import UUID

from outlet_calc.core.errors import HistoryStoreNotConfiguredError, OutletCalcError
from outlet_calc.core.history_ledger import HistoryRecord
from outlet_calc.core.repository_protocols import HistoryStore

logger = logging.getLogger(__name__)


def _log_store_error(error: OutletCalcError, operation: str, record_id: UUID) -> None:
    level = (
        logging.INFO if isinstance(error, HistoryStoreNotConfiguredError)
        else logging.WARNING
    )
    logger.log(
        level,
        f"History {operation} not mirrored: {error.message}",
        extra={
            "record_id": str(record_id),
            "error_code": error.code,
            "operation": operation,
        },
    )


async def persist_record(store: HistoryStore, record: HistoryRecord) -> bool:
    """Background task: insert one record. Returns True when stored."""
    result = await store.insert(record)
    if result.error is not None:
        _log_store_error(result.error, "insert", record.id)
        return False
    logger.info("History record stored", extra={"record_id": str(record.id)})
    return True


async def remove_record(store: HistoryStore, record_id: UUID) -> bool:
    """Background task: delete one record. Returns True when deleted."""
    result = await store.delete(record_id)
    if result.error is not None:
        _log_store_error(result.error, "delete", record_id)
        return False
    logger.info("History record deleted", extra={"record_id": str(record_id)})
    return True
