"""
Service interfaces for dependency inversion.

These are the collaborators the dispatch core consumes at its boundary:
session resolution, permission checks, the routing provider, notification
channels and realtime publishers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from src.domain.value_objects.actor import Actor, UserRole
from src.domain.value_objects.geo_location import GeoPoint


@dataclass(frozen=True)
class DistanceEstimate:
    """Road distance and travel duration from one origin to a destination."""

    distance_km: float
    duration_minutes: Optional[int] = None


class SessionResolverInterface(ABC):
    """Interface for resolving the caller's session."""

    @abstractmethod
    async def resolve(self, headers: Mapping[str, str]) -> Optional[Actor]:
        """Return the acting user, or None when there is no valid session."""
        pass


class PermissionCheckerInterface(ABC):
    """Interface for role x action permission checks."""

    @abstractmethod
    def has_permission(self, role: UserRole, permission: str) -> bool:
        """Check if a role grants a permission."""
        pass

    @abstractmethod
    def assert_permission(self, role: UserRole, permission: str) -> None:
        """Raise ForbiddenError if the role does not grant the permission."""
        pass


class DistanceProviderInterface(ABC):
    """Interface for external routing/distance providers."""

    name: str = "unknown"

    @abstractmethod
    async def get_distances(
        self, origins: List[GeoPoint], destination: GeoPoint
    ) -> Optional[List[Optional[DistanceEstimate]]]:
        """Distances from each origin to the destination.

        Returns one entry per origin (None where the provider had no route),
        or None when the provider is unavailable as a whole.
        """
        pass


class NotificationChannelInterface(ABC):
    """Interface for push notification delivery channels."""

    name: str = "unknown"

    @abstractmethod
    async def send(
        self, engineer_id: str, title: str, body: str, data: Dict[str, Any]
    ) -> bool:
        """Deliver a message to an engineer. May raise on transport failure."""
        pass


class RealtimePublisherInterface(ABC):
    """Interface for realtime fan-out backends."""

    @abstractmethod
    async def publish(self, channel: str, payload: Dict[str, Any]) -> int:
        """Publish a payload to a channel; returns the number of receivers."""
        pass
