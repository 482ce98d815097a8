"""
Spherical distance helpers used by the place store.

Distances match a spherical proximity query: great-circle distance on a
sphere with the WGS84 equatorial radius.
"""
import math
from typing import Iterable, Optional, Tuple

EARTH_RADIUS_KM = 6378.1


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance in kilometers between two lat/lon points."""
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(dlon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def bounding_box(
    lat: float, lon: float, radius_km: float
) -> Tuple[float, float, Optional[float], Optional[float]]:
    """
    Return (min_lat, max_lat, min_lon, max_lon) enclosing the circle.

    The longitude bounds are None when the circle touches a pole or wraps
    the antimeridian; callers then skip the longitude prefilter.
    """
    angular = radius_km / EARTH_RADIUS_KM
    dlat = math.degrees(angular)
    min_lat = lat - dlat
    max_lat = lat + dlat
    if min_lat <= -90.0 or max_lat >= 90.0 or angular >= math.pi / 2:
        return max(min_lat, -90.0), min(max_lat, 90.0), None, None

    ratio = math.sin(angular) / math.cos(math.radians(lat))
    if ratio >= 1.0:
        return min_lat, max_lat, None, None
    dlon = math.degrees(math.asin(ratio))
    min_lon = lon - dlon
    max_lon = lon + dlon
    if min_lon < -180.0 or max_lon > 180.0:
        return min_lat, max_lat, None, None
    return min_lat, max_lat, min_lon, max_lon


def compute_centroid(points: Iterable[Tuple[float, float]]) -> Optional[Tuple[float, float]]:
    """Compute the centroid of a collection of (x, y) points."""
    pts = list(points)
    if not pts:
        return None
    x_sum = 0.0
    y_sum = 0.0
    for x, y in pts:
        x_sum += x
        y_sum += y
    return (x_sum / len(pts), y_sum / len(pts))
