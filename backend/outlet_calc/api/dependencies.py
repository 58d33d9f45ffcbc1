"""Route Dependencies — hand the lifespan-built store and registry to handlers.

Invariants:
    - Both objects live on app.state; routes never construct their own
"""

from fastapi import Request

from outlet_calc.config import Settings, get_settings
from outlet_calc.core.repository_protocols import HistoryStore
from outlet_calc.services.calculator_service import CalculatorRegistry


def get_history_store(request: Request) -> HistoryStore:
    return request.app.state.history_store


def get_registry(request: Request) -> CalculatorRegistry:
    return request.app.state.registry


def get_app_settings() -> Settings:
    return get_settings()
