"""
Application interfaces package.
"""

from .repositories import EngineerRepositoryInterface, JobRepositoryInterface
from .services import (
    DistanceEstimate,
    DistanceProviderInterface,
    NotificationChannelInterface,
    PermissionCheckerInterface,
    RealtimePublisherInterface,
    SessionResolverInterface,
)

__all__ = [
    "DistanceEstimate",
    "DistanceProviderInterface",
    "EngineerRepositoryInterface",
    "JobRepositoryInterface",
    "NotificationChannelInterface",
    "PermissionCheckerInterface",
    "RealtimePublisherInterface",
    "SessionResolverInterface",
]
