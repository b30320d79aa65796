"""Great-circle distances for zone membership and depot returns.

All pricing rules work in kilometers, so the haversine result is returned
in kilometers directly.
"""

from math import asin, cos, radians, sin, sqrt

from booking import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_distance_km(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Shortest distance over the Earth's surface between two points, in km.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees
    """
    phi1, phi2 = radians(lat1), radians(lat2)
    half_dphi = (phi2 - phi1) / 2
    half_dlambda = radians(lon2 - lon1) / 2

    h = sin(half_dphi) ** 2 + cos(phi1) * cos(phi2) * sin(half_dlambda) ** 2
    # Clamp float drift so antipodal points never push asin out of its domain
    return 2 * EARTH_RADIUS_KM * asin(min(1.0, sqrt(h)))


def distance_between(a: Coordinate, b: Coordinate) -> float:
    return haversine_distance_km(a.latitude, a.longitude, b.latitude, b.longitude)
