"""Great-circle distance helpers.

Spherical earth model (haversine). Good to a few metres at the radii the
map works with; not suitable where sub-metre accuracy matters.
"""

from dataclasses import dataclass
from math import asin, atan2, cos, degrees, radians, sin, sqrt

from pickme.domain.value import GeoPoint

EARTH_RADIUS_METERS = 6_371_000


def haversine_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in meters between two points."""
    lat1 = radians(a.latitude)
    lat2 = radians(b.latitude)
    dlat = lat2 - lat1
    dlon = radians(b.longitude - a.longitude)

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h a hair past 1 for antipodal points
    h = min(1.0, h)
    return 2 * EARTH_RADIUS_METERS * atan2(sqrt(h), sqrt(1 - h))


@dataclass(frozen=True)
class BoundingBox:
    """Lat/long rectangle enclosing a search circle.

    ``min_longitude``/``max_longitude`` are None when the circle touches a
    pole or wraps the antimeridian; callers then skip the longitude filter.
    """

    min_latitude: float
    max_latitude: float
    min_longitude: float | None
    max_longitude: float | None


def bounding_box(origin: GeoPoint, radius_meters: float) -> BoundingBox:
    """Coarse prefilter rectangle for a radius query.

    Every point within ``radius_meters`` of ``origin`` lies inside the box;
    the converse does not hold, so results still need an exact distance check.
    """
    angular = radius_meters / EARTH_RADIUS_METERS
    lat = radians(origin.latitude)

    min_lat = lat - angular
    max_lat = lat + angular

    if min_lat <= -radians(90) or max_lat >= radians(90):
        return BoundingBox(
            min_latitude=max(-90.0, degrees(min_lat)),
            max_latitude=min(90.0, degrees(max_lat)),
            min_longitude=None,
            max_longitude=None,
        )

    ratio = sin(angular) / cos(lat)
    if ratio >= 1.0:
        return BoundingBox(
            min_latitude=degrees(min_lat),
            max_latitude=degrees(max_lat),
            min_longitude=None,
            max_longitude=None,
        )

    delta_lon = degrees(asin(ratio))
    min_lon = origin.longitude - delta_lon
    max_lon = origin.longitude + delta_lon
    if min_lon < -180.0 or max_lon > 180.0:
        min_lon_opt: float | None = None
        max_lon_opt: float | None = None
    else:
        min_lon_opt, max_lon_opt = min_lon, max_lon

    return BoundingBox(
        min_latitude=degrees(min_lat),
        max_latitude=degrees(max_lat),
        min_longitude=min_lon_opt,
        max_longitude=max_lon_opt,
    )
