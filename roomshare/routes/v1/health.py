# roomshare/routes/v1/health.py
"""
Health check endpoint for monitoring and load balancer probes.
"""

from datetime import datetime, timezone
import logging

from fastapi import APIRouter
from pydantic import BaseModel

from ...core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    environment: str
    timestamp: str


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        service="roomshare-api",
        version=API_VERSION,
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )
