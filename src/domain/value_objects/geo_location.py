"""
Geographic value objects.
"""

import math
from dataclasses import dataclass
from typing import Optional

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    """Immutable latitude/longitude pair."""

    latitude: float
    longitude: float

    def __post_init__(self):
        """Validate coordinate ranges."""
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError("Latitude must be between -90 and 90")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError("Longitude must be between -180 and 180")

    def haversine_km(self, other: "GeoPoint") -> float:
        """Great-circle distance in km between two points."""
        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        dlat = math.radians(other.latitude - self.latitude)
        dlon = math.radians(other.longitude - self.longitude)

        a = (
            math.sin(dlat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        return EARTH_RADIUS_KM * c

    def as_query_param(self) -> str:
        """Format as 'lat,lng' for routing providers."""
        return f"{self.latitude},{self.longitude}"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"lat": self.latitude, "lng": self.longitude}


@dataclass(frozen=True)
class SiteLocation:
    """Job site: coordinates plus a postal address."""

    point: GeoPoint
    address: str
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None

    def __post_init__(self):
        """Validate site fields."""
        if not self.address or not self.address.strip():
            raise ValueError("Site address is required")

    @property
    def full_address(self) -> str:
        """Get formatted full address."""
        parts = [self.address, self.city, self.state, self.postal_code]
        return ", ".join(part for part in parts if part)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "lat": self.point.latitude,
            "lng": self.point.longitude,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
        }
