"""Circular service zones and ring lookup by name."""

from pydantic import BaseModel, Field

from geo.distance import haversine_distance_km

INNER_RING_TAG = "inner ring"
OUTER_RING_TAG = "outer ring"


class Zone(BaseModel):
    """Named circular service region."""

    name: str
    center_latitude: float = Field(ge=-90.0, le=90.0)
    center_longitude: float = Field(ge=-180.0, le=180.0)
    radius_km: float = Field(ge=0.0)

    model_config = {"frozen": True}

    def distance_from_center_km(self, lat: float, lon: float) -> float:
        return haversine_distance_km(lat, lon, self.center_latitude, self.center_longitude)

    def contains(self, lat: float, lon: float) -> bool:
        return self.distance_from_center_km(lat, lon) <= self.radius_km


def find_zone_by_tag(zones: list[Zone], tag: str) -> Zone | None:
    """Return the first zone whose name contains ``tag`` (case-insensitive)."""
    needle = tag.lower()
    for zone in zones:
        if needle in zone.name.lower():
            return zone
    return None
