"""History Store Factory — backend selection from settings."""

from unittest.mock import MagicMock

import pytest

from outlet_calc.config import Settings
from outlet_calc.infrastructure import database, supabase_history_store
from outlet_calc.infrastructure.disabled_history_store import DisabledHistoryStore
from outlet_calc.infrastructure.history_store_factory import build_history_store
from outlet_calc.infrastructure.sql_history_store import SqlHistoryStore
from outlet_calc.infrastructure.supabase_history_store import SupabaseHistoryStore


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_backend_none_is_disabled():
    store = build_history_store(_settings(history_backend="none"))
    assert isinstance(store, DisabledHistoryStore)
    assert store.configured is False


@pytest.mark.parametrize("url,key,missing", [
    (None, None, ["SUPABASE_URL", "SUPABASE_ANON_KEY"]),
    ("https://abc.supabase.co", "", ["SUPABASE_ANON_KEY"]),
    ("  ", "anon-key", ["SUPABASE_URL"]),
])
def test_missing_supabase_credentials_disable_store(url, key, missing):
    store = build_history_store(_settings(
        history_backend="supabase", supabase_url=url, supabase_anon_key=key,
    ))
    assert isinstance(store, DisabledHistoryStore)
    assert store.missing == missing


def test_supabase_backend_builds_client(monkeypatch):
    create_client = MagicMock()
    monkeypatch.setattr(supabase_history_store, "create_client", create_client)
    store = build_history_store(_settings(
        history_backend="supabase",
        supabase_url="https://abc.supabase.co", supabase_anon_key="anon-key",
    ))
    assert isinstance(store, SupabaseHistoryStore)
    assert store.configured is True
    assert store.table == "outlet_history"
    create_client.assert_called_once_with("https://abc.supabase.co", "anon-key")


def test_supabase_client_failure_degrades_to_disabled(monkeypatch, caplog):
    monkeypatch.setattr(
        supabase_history_store, "create_client",
        MagicMock(side_effect=Exception("Invalid URL")),
    )
    store = build_history_store(_settings(
        history_backend="supabase",
        supabase_url="not a url", supabase_anon_key="anon-key",
    ))
    assert isinstance(store, DisabledHistoryStore)
    assert "Failed to initialize Supabase client" in caplog.text


async def test_database_backend_initializes_manager():
    store = build_history_store(_settings(
        history_backend="database", database_url="sqlite+aiosqlite:///:memory:",
    ))
    try:
        assert isinstance(store, SqlHistoryStore)
        assert database.db_manager is not None
    finally:
        await database.close_db()
    assert database.db_manager is None


def test_postgres_url_converted_for_asyncpg():
    settings = _settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"
