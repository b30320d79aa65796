from geo.distance import EARTH_RADIUS_KM, distance_between, haversine_distance_km
from geo.zones import Zone, find_zone_by_tag

__all__ = [
    "EARTH_RADIUS_KM",
    "Zone",
    "distance_between",
    "find_zone_by_tag",
    "haversine_distance_km",
]
