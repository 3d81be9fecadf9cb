"""Geographic distance calculations for GPS-derived trip distance.

Displacement between consecutive location samples is measured with the
Haversine formula. All distances are in meters unless the function name
says otherwise.
"""

from math import atan2, cos, degrees, radians, sin, sqrt
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from taximeter.location import LocationSample

EARTH_RADIUS_M = 6_371_000  # Earth radius in meters

# Length of one degree of latitude on the sphere used by haversine_distance_m
_METERS_PER_DEGREE: float = radians(1.0) * EARTH_RADIUS_M


def haversine_distance_m(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate the great-circle distance between two points in meters.

    Uses the Haversine formula to calculate the shortest distance over
    the Earth's surface between two points specified by latitude/longitude.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Distance between the two points in meters
    """
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_M * c


def haversine_distance_km(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Great-circle distance between two points in kilometers."""
    return haversine_distance_m(lat1, lon1, lat2, lon2) / 1000.0


def sample_distance_m(a: "LocationSample", b: "LocationSample") -> float:
    """Displacement in meters between two location samples."""
    return haversine_distance_m(a.latitude, a.longitude, b.latitude, b.longitude)


def offset_position(
    lat: float,
    lon: float,
    north_m: float = 0.0,
    east_m: float = 0.0,
) -> tuple[float, float]:
    """Move a point by metric offsets along the north and east axes.

    A pure north/south offset is exact under haversine_distance_m. East/west
    offsets are scaled by cos(latitude) and are accurate for the short
    distances between consecutive GPS fixes.

    Args:
        lat: Latitude of the origin in degrees
        lon: Longitude of the origin in degrees
        north_m: Meters to move north (negative moves south)
        east_m: Meters to move east (negative moves west)

    Returns:
        (latitude, longitude) of the moved point in degrees
    """
    new_lat = lat + north_m / _METERS_PER_DEGREE
    cos_lat = cos(radians(lat))
    if abs(cos_lat) < 1e-12:
        return new_lat, lon
    new_lon = lon + degrees(east_m / (EARTH_RADIUS_M * cos_lat))
    return new_lat, new_lon
