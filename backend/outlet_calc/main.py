"""Outlet Calculator API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map OutletCalcError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - History store and workspace registry built once in lifespan, held on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - The store is injected (app.state) rather than imported as a module-level
      client: pricing code never sees transport or configuration
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from outlet_calc.api.error_handlers import register_error_handlers
from outlet_calc.api.routes import calculators, health, pricing
from outlet_calc.config import get_settings
from outlet_calc.infrastructure.database import close_db
from outlet_calc.infrastructure.history_store_factory import build_history_store
from outlet_calc.infrastructure.observability import setup_logging
from outlet_calc.services.calculator_service import CalculatorRegistry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.history_store = build_history_store(settings)
    app.state.registry = CalculatorRegistry()
    logger.info("Outlet Calculator API started")
    yield
    logger.info("Outlet Calculator API shutting down")
    await close_db()


app = FastAPI(
    title="Outlet Calculator API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(pricing.router)
app.include_router(calculators.router)

register_error_handlers(app)

# Static files: serves a frontend build when present
# mounted AFTER API routes so /api/v1/* takes precedence
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
