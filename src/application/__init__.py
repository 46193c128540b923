"""
Application layer package.

This package contains use cases, services, and interfaces that implement
the dispatch logic of the application.
"""

from .interfaces.repositories import (
    EngineerRepositoryInterface,
    JobRepositoryInterface,
)
from .interfaces.services import (
    DistanceEstimate,
    DistanceProviderInterface,
    NotificationChannelInterface,
    PermissionCheckerInterface,
    RealtimePublisherInterface,
    SessionResolverInterface,
)
from .services.distance_ranker import DistanceRanker
from .services.notification_dispatcher import NotificationDispatcher
from .services.permissions import RolePermissionChecker
from .services.realtime_broadcaster import RealtimeBroadcaster
from .use_cases.assign_engineer import AssignmentCoordinator
from .use_cases.audit_assignments import AuditAssignmentsUseCase
from .use_cases.rank_candidates import RankCandidatesUseCase

__all__ = [
    # Interfaces
    "DistanceEstimate",
    "DistanceProviderInterface",
    "EngineerRepositoryInterface",
    "JobRepositoryInterface",
    "NotificationChannelInterface",
    "PermissionCheckerInterface",
    "RealtimePublisherInterface",
    "SessionResolverInterface",
    # Services
    "DistanceRanker",
    "NotificationDispatcher",
    "RealtimeBroadcaster",
    "RolePermissionChecker",
    # Use Cases
    "AssignmentCoordinator",
    "AuditAssignmentsUseCase",
    "RankCandidatesUseCase",
]
