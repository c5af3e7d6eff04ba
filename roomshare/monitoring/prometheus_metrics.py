"""
Prometheus collectors for roomshare.

Service calls are timed by ``BaseService.measure_operation``. Requests
refused by a booking rule (conflict, quota, grid, role, ...) are counted by
error kind, so contention for rooms shows up separately from failures.
"""

from typing import Optional

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, generate_latest

# Own registry: only roomshare collectors are exported, and tests can read it directly
REGISTRY = CollectorRegistry()

OPERATION_LABELS = ("service", "operation")

service_operation_duration_seconds = Histogram(
    "roomshare_service_operation_duration_seconds",
    "Wall time of measured service calls",
    OPERATION_LABELS,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
    registry=REGISTRY,
)

service_operations_total = Counter(
    "roomshare_service_operations_total",
    "Measured service calls by outcome",
    OPERATION_LABELS + ("status",),
    registry=REGISTRY,
)

errors_total = Counter(
    "roomshare_errors_total",
    "Failed service calls by exception class",
    OPERATION_LABELS + ("error_type",),
    registry=REGISTRY,
)

booking_rejections_total = Counter(
    "roomshare_booking_rejections_total",
    "Requests refused by a booking rule, by error kind",
    ("operation", "kind"),
    registry=REGISTRY,
)


class PrometheusMetrics:
    """Entry points used by the service layer and the scrape route."""

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str,
        error_type: Optional[str] = None,
    ) -> None:
        service_operation_duration_seconds.labels(service, operation).observe(duration)
        service_operations_total.labels(service, operation, status).inc()
        if error_type is not None:
            errors_total.labels(service, operation, error_type).inc()

    @staticmethod
    def record_rejection(operation: str, kind: str) -> None:
        booking_rejections_total.labels(operation, kind).inc()

    @staticmethod
    def get_metrics() -> bytes:
        """Text exposition of ``REGISTRY``."""
        return generate_latest(REGISTRY)

    @staticmethod
    def get_content_type() -> str:
        return CONTENT_TYPE_LATEST


prometheus_metrics = PrometheusMetrics()
