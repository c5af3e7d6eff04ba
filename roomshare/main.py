# roomshare/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI

from .core.config import settings
from .database import init_db
from .errors import register_error_handlers
from .routes.v1 import (
    blocked_ranges as blocked_ranges_v1,
    bookings as bookings_v1,
    health as health_v1,
    prometheus,
    recurring_rules as recurring_rules_v1,
    rooms as rooms_v1,
    settings as settings_v1,
    users as users_v1,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

API_TITLE = "roomshare API"
API_DESCRIPTION = "Shared room booking: single bookings, weekly recurring bookings and calendars."


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown."""
    logger.info("roomshare API starting up...")
    logger.info(
        f"Environment: {settings.environment}, facility timezone: {settings.facility_timezone}"
    )
    if settings.create_tables_on_startup:
        init_db()
    yield
    logger.info("roomshare API shutting down...")


def create_app() -> FastAPI:
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=health_v1.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=app_lifespan,
    )
    register_error_handlers(app)

    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(health_v1.router)
    api_v1.include_router(bookings_v1.router, prefix="/bookings")
    api_v1.include_router(recurring_rules_v1.router, prefix="/recurring-rules")
    api_v1.include_router(rooms_v1.router, prefix="/rooms")
    api_v1.include_router(blocked_ranges_v1.router, prefix="/blocked-ranges")
    api_v1.include_router(settings_v1.router, prefix="/settings")
    api_v1.include_router(users_v1.router, prefix="/users")
    app.include_router(api_v1)

    # Standard /metrics/prometheus path for Prometheus scraping
    app.include_router(prometheus.router, prefix="/metrics")
    return app


app = create_app()
