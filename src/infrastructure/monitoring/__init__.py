"""
Monitoring package.
"""

from .health_checks import HealthChecker
from .metrics import get_metrics, get_metrics_content_type, get_registry

__all__ = [
    "HealthChecker",
    "get_metrics",
    "get_metrics_content_type",
    "get_registry",
]
