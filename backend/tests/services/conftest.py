"""Service test fixtures — async DB, fake History Store, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The app's store and registry are replaced on app.state for each test
    - The default store is a FakeHistoryStore (fake_history_store.py)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for store tests
    - StaticPool: one shared connection so the in-memory schema is visible to
      every session the manager opens
    - Background tasks run before the httpx response returns, so tests can
      assert the store state right after a request
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from outlet_calc.db.base import Base
from outlet_calc.infrastructure.database import DatabaseSessionManager
from outlet_calc.main import app
from outlet_calc.services.calculator_service import CalculatorRegistry
import outlet_calc.models  # noqa: F401

from tests.services.fake_history_store import FakeHistoryStore


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_manager(test_engine):
    """DatabaseSessionManager bound to the test engine (error mapping included)."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    return manager


@pytest.fixture
def fake_store():
    return FakeHistoryStore()


@pytest.fixture
async def client(fake_store):
    """FastAPI test client with a fake store and a fresh registry."""
    app.state.history_store = fake_store
    app.state.registry = CalculatorRegistry()
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
