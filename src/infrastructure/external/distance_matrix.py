"""Google Distance Matrix adapter implementing DistanceProviderInterface."""

from typing import Any, Dict, List, Optional

import httpx

from src.application.interfaces.services import (
    DistanceEstimate,
    DistanceProviderInterface,
)
from src.config.logging import get_logger
from src.domain.value_objects.geo_location import GeoPoint

from .http_client import HTTPClient

logger = get_logger(__name__)

DISTANCE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"


class GoogleDistanceMatrixProvider(DistanceProviderInterface):
    """Road distances from many origins to one destination in a single call."""

    name = "google_maps_distance_matrix"

    def __init__(
        self,
        api_key: str,
        url: str = DISTANCE_MATRIX_URL,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def get_distances(
        self, origins: List[GeoPoint], destination: GeoPoint
    ) -> Optional[List[Optional[DistanceEstimate]]]:
        if not self.api_key:
            logger.warning("Google Maps API key is not set, skipping distance matrix")
            return None
        if not origins:
            return []

        params = {
            "origins": "|".join(origin.as_query_param() for origin in origins),
            "destinations": destination.as_query_param(),
            "units": "metric",
            "key": self.api_key,
        }

        try:
            async with HTTPClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.url, params=params)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Distance matrix request failed", error=str(e))
            return None

        if data.get("status") != "OK":
            logger.warning(
                "Distance matrix returned error status",
                status=data.get("status"),
                error_message=data.get("error_message"),
            )
            return None

        rows = data.get("rows") or []
        if len(rows) != len(origins):
            logger.warning(
                "Distance matrix row count mismatch",
                expected=len(origins),
                received=len(rows),
            )
            return None

        return [self._parse_element(row) for row in rows]

    def _parse_element(self, row: Dict[str, Any]) -> Optional[DistanceEstimate]:
        """First element of a row; None when the provider found no route."""
        elements = row.get("elements") or []
        if not elements:
            return None

        element = elements[0]
        if element.get("status") != "OK":
            return None

        try:
            distance_km = element["distance"]["value"] / 1000
            duration = element.get("duration", {}).get("value")
        except (KeyError, TypeError):
            return None

        return DistanceEstimate(
            distance_km=distance_km,
            duration_minutes=round(duration / 60) if duration is not None else None,
        )
