from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from ..core.constants import EARTH_RADIUS_METERS
from ..core.exceptions import LocationRequiredError, OutsideVenueError


def haversine_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two WGS84 points."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def _to_float(value: Any) -> Optional[float]:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class VenueConfig:
    """Venue point and radius; the gate is off unless all three are set."""

    lat: Optional[float] = None
    lng: Optional[float] = None
    radius_meters: Optional[float] = None

    @property
    def enabled(self) -> bool:
        return self.lat is not None and self.lng is not None and self.radius_meters is not None

    @classmethod
    def from_values(cls, lat: Any, lng: Any, radius_meters: Any) -> "VenueConfig":
        return cls(lat=_to_float(lat), lng=_to_float(lng), radius_meters=_to_float(radius_meters))


class GeofenceCheck:
    def __init__(self, venue: VenueConfig):
        self._venue = venue

    @property
    def required(self) -> bool:
        return self._venue.enabled

    def check(self, lat: Optional[float], lng: Optional[float]) -> None:
        if not self._venue.enabled:
            return
        if lat is None or lng is None:
            raise LocationRequiredError("Location required. Please enable location access.")

        # Compared at whole-meter precision.
        distance = round(haversine_meters(lat, lng, self._venue.lat, self._venue.lng))
        if distance > self._venue.radius_meters:
            raise OutsideVenueError("You must be at the venue to mark attendance.")
