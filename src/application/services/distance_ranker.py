"""
Distance ranking of candidate engineers for a job site.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from src.application.interfaces.services import (
    DistanceEstimate,
    DistanceProviderInterface,
)
from src.config.logging import get_logger
from src.domain.entities.engineer import Engineer
from src.domain.value_objects.geo_location import GeoPoint
from src.infrastructure.monitoring.metrics import DISTANCE_PROVIDER_REQUESTS

logger = get_logger(__name__)

HAVERSINE_METHOD = "haversine"


@dataclass
class RankedCandidate:
    """An engineer with its distance to the job site."""

    engineer: Engineer
    distance_km: float
    duration_minutes: Optional[int] = None
    method: str = HAVERSINE_METHOD

    def sort_key(self) -> Tuple[float, int, float]:
        # Nearest first; ties favour higher skill, then better rating
        return (
            self.distance_km,
            -self.engineer.skill_level,
            -self.engineer.average_rating,
        )


@dataclass
class RankingResult:
    """Ordered candidates plus how the distances were obtained."""

    candidates: List[RankedCandidate]
    method: str
    unlocated_engineer_ids: List[UUID] = field(default_factory=list)

    @property
    def unlocated_count(self) -> int:
        return len(self.unlocated_engineer_ids)


class DistanceRanker:
    """Ranks engineers by road distance, falling back to great-circle distance.

    One provider call is made per ranking with every located engineer as an
    origin and the site as the single destination. When the provider is not
    configured, fails, or returns a malformed response, every candidate gets a
    haversine distance; when only some elements are missing, only those fall
    back. Engineers without a known location are excluded and reported.
    """

    def __init__(self, distance_provider: Optional[DistanceProviderInterface] = None):
        self.distance_provider = distance_provider
        self.logger = logger

    async def rank(
        self, site: GeoPoint, engineers: Sequence[Engineer]
    ) -> RankingResult:
        located = [e for e in engineers if e.has_location]
        unlocated = [e.id for e in engineers if not e.has_location]

        if unlocated:
            self.logger.info(
                "Excluding engineers without location from ranking",
                unlocated_count=len(unlocated),
            )

        if not located:
            return RankingResult(
                candidates=[],
                method=HAVERSINE_METHOD,
                unlocated_engineer_ids=unlocated,
            )

        estimates = await self._fetch_estimates(site, located)
        provider_name = self.distance_provider.name if self.distance_provider else None

        candidates = []
        provider_used = False
        for engineer, estimate in zip(located, estimates):
            if estimate is not None:
                provider_used = True
                candidates.append(
                    RankedCandidate(
                        engineer=engineer,
                        distance_km=estimate.distance_km,
                        duration_minutes=estimate.duration_minutes,
                        method=provider_name,
                    )
                )
            else:
                candidates.append(
                    RankedCandidate(
                        engineer=engineer,
                        distance_km=engineer.current_location.haversine_km(site),
                    )
                )

        candidates.sort(key=RankedCandidate.sort_key)

        return RankingResult(
            candidates=candidates,
            method=provider_name if provider_used else HAVERSINE_METHOD,
            unlocated_engineer_ids=unlocated,
        )

    async def _fetch_estimates(
        self, site: GeoPoint, engineers: List[Engineer]
    ) -> List[Optional[DistanceEstimate]]:
        """Provider estimates aligned with ``engineers``; None means fall back."""
        no_estimates: List[Optional[DistanceEstimate]] = [None] * len(engineers)

        if self.distance_provider is None:
            return no_estimates

        origins = [e.current_location for e in engineers]
        try:
            estimates = await self.distance_provider.get_distances(origins, site)
        except Exception as e:
            DISTANCE_PROVIDER_REQUESTS.labels(status="error").inc()
            self.logger.warning(
                "Distance provider failed, using haversine fallback",
                provider=self.distance_provider.name,
                error=str(e),
            )
            return no_estimates

        if estimates is None or len(estimates) != len(engineers):
            DISTANCE_PROVIDER_REQUESTS.labels(status="unusable").inc()
            self.logger.warning(
                "Distance provider returned no usable result, using haversine fallback",
                provider=self.distance_provider.name,
            )
            return no_estimates

        DISTANCE_PROVIDER_REQUESTS.labels(status="ok").inc()
        return list(estimates)
