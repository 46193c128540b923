"""
Prometheus metrics for dispatch monitoring.
"""

import time
from functools import wraps
from typing import Any, Callable

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Dedicated registry so tests and multiple app instances do not collide
# with the process-global default registry.
registry = CollectorRegistry()


def get_registry() -> CollectorRegistry:
    """Get the metrics registry."""
    return registry


def _get_metric(metric_class, *args, **kwargs):
    """Create a metric bound to the dispatch registry."""
    return metric_class(*args, **kwargs, registry=get_registry())


# Assignment metrics
ASSIGNMENTS_TOTAL = _get_metric(
    Counter,
    "assignments_total",
    "Total number of assignment attempts by outcome",
    ["outcome"],
)

ASSIGNMENT_DURATION = _get_metric(
    Histogram,
    "assignment_duration_seconds",
    "Time spent in the assignment coordinator",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
)

ASSIGNMENT_COMPENSATIONS = _get_metric(
    Counter,
    "assignment_compensations_total",
    "Compensating job writes issued after a failed engineer write",
    ["result"],
)

RECONCILIATION_ERRORS = _get_metric(
    Counter,
    "assignment_reconciliation_errors_total",
    "Assignments left inconsistent because compensation failed",
)

# Side-channel metrics
NOTIFICATIONS_TOTAL = _get_metric(
    Counter,
    "notifications_total",
    "Assignment notifications by channel and delivery result",
    ["channel", "delivered"],
)

REALTIME_EVENTS = _get_metric(
    Counter,
    "realtime_events_total",
    "Realtime job change events by type and publish result",
    ["event_type", "result"],
)

DISTANCE_PROVIDER_REQUESTS = _get_metric(
    Counter,
    "distance_provider_requests_total",
    "Routing provider calls by result",
    ["status"],
)

# Audit metrics
AUDIT_VIOLATIONS = _get_metric(
    Counter,
    "assignment_audit_violations_total",
    "Invariant violations found by the assignment audit",
    ["kind"],
)


def track_duration(histogram) -> Callable:
    """Decorator observing the wall time of an async function."""

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.time()
            try:
                return await func(*args, **kwargs)
            finally:
                histogram.observe(time.time() - start_time)

        return wrapper

    return decorator


def get_metrics() -> bytes:
    """Render all metrics in Prometheus text format."""
    return generate_latest(get_registry())


def get_metrics_content_type() -> str:
    """Content type for the metrics endpoint."""
    return CONTENT_TYPE_LATEST
