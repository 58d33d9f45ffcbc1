"""History Store Factory — picks the adapter for the configured backend.

Invariants:
    - Missing Supabase url or key → DisabledHistoryStore (never a half-built client)
    - A client that fails to initialize degrades to DisabledHistoryStore, logged
    - HISTORY_BACKEND=database initializes the db_manager singleton first

Design Decisions:
    - Called once from the FastAPI lifespan; the result is held on app.state and
      injected into routes, so no module holds a global client
"""

import logging

from outlet_calc.config import Settings
from outlet_calc.core.domain_types import HistoryBackend
from outlet_calc.core.repository_protocols import HistoryStore
from outlet_calc.infrastructure.database import init_db
from outlet_calc.infrastructure.disabled_history_store import DisabledHistoryStore
from outlet_calc.infrastructure.sql_history_store import SqlHistoryStore
from outlet_calc.infrastructure.supabase_history_store import SupabaseHistoryStore

logger = logging.getLogger(__name__)


def build_history_store(settings: Settings) -> HistoryStore:
    """Build the History Store described by settings."""
    if settings.history_backend == HistoryBackend.NONE:
        logger.info("History persistence disabled (HISTORY_BACKEND=none)")
        return DisabledHistoryStore(["HISTORY_BACKEND"])

    if settings.history_backend == HistoryBackend.DATABASE:
        manager = init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        logger.info("History persistence: database")
        return SqlHistoryStore(manager.session)

    missing = settings.missing_supabase_settings
    if missing:
        logger.warning(
            f"History persistence disabled: missing {', '.join(missing)}",
        )
        return DisabledHistoryStore(missing)
    try:
        store = SupabaseHistoryStore.from_credentials(
            settings.supabase_url, settings.supabase_anon_key,
            settings.history_table,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Supabase client: {e}")
        return DisabledHistoryStore(["SUPABASE_URL"])
    logger.info("History persistence: supabase")
    return store
