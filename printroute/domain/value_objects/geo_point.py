"""GeoPoint value object — immutable (lat, lon) pair."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    @classmethod
    def from_nullable(cls, latitude: float | None, longitude: float | None) -> GeoPoint | None:
        """Build a point only when both coordinates are present."""
        if latitude is None or longitude is None:
            return None
        return cls(latitude=latitude, longitude=longitude)


# Cairo city center
DEFAULT_CITY_CENTER = GeoPoint(latitude=30.0444, longitude=31.2357)
