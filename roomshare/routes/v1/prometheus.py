"""
Prometheus metrics endpoint for monitoring infrastructure.

Public endpoint, as is standard for Prometheus scrapes. It exposes the
metrics collected by the @measure_operation decorators.
"""

from fastapi import APIRouter, Response

from ...monitoring.prometheus_metrics import prometheus_metrics

router = APIRouter(tags=["monitoring"])


@router.get("/prometheus")
def get_prometheus_metrics() -> Response:
    return Response(
        content=prometheus_metrics.get_metrics(),
        media_type=prometheus_metrics.get_content_type(),
    )
