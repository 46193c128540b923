"""
Application services package.
"""

from .distance_ranker import DistanceRanker, RankedCandidate, RankingResult
from .notification_dispatcher import NotificationDispatcher
from .permissions import ROLE_PERMISSIONS, RolePermissionChecker
from .realtime_broadcaster import RealtimeBroadcaster

__all__ = [
    "DistanceRanker",
    "NotificationDispatcher",
    "ROLE_PERMISSIONS",
    "RankedCandidate",
    "RankingResult",
    "RealtimeBroadcaster",
    "RolePermissionChecker",
]
