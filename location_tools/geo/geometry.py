"""
Offline Geometry

Great-circle distance, continent bucketing and longitude-based UTC offset
estimates. No network access; these are the degraded answers used when a
Nominatim lookup fails.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple

from ..config import (
    EARTH_RADIUS_KM,
    KM_TO_MILES,
    DEGREES_PER_TIMEZONE,
    UNKNOWN_REGION,
)
from ..exceptions import InvalidCoordinateError


@dataclass
class AreaBoundary:
    """Represents the boundary of a geographic area"""
    name: str
    north: float
    south: float
    east: float
    west: float


@dataclass
class Distance:
    """Great-circle distance between two points"""
    kilometers: float
    miles: float


# Rough continent boxes. Order matters: first match wins, and the boxes
# overlap (the 35th parallel belongs to both Europe and Africa).
CONTINENT_BOUNDARIES: List[AreaBoundary] = [
    AreaBoundary(name="Europe", north=70, south=35, east=45, west=-25),
    AreaBoundary(name="Africa", north=35, south=-35, east=55, west=-20),
    AreaBoundary(name="Asia", north=55, south=5, east=140, west=60),
    AreaBoundary(name="North America", north=70, south=10, east=-50, west=-170),
    AreaBoundary(name="South America", north=15, south=-55, east=-35, west=-85),
    AreaBoundary(name="Australia/Oceania", north=-10, south=-45, east=155, west=110),
]


def is_in_boundary(lat: float, lng: float, boundary: AreaBoundary) -> bool:
    """
    Check if a point is within the boundary.

    Args:
        lat: Latitude
        lng: Longitude
        boundary: The boundary to check against

    Returns:
        True if the point is within the boundary
    """
    return (boundary.south <= lat <= boundary.north and
            boundary.west <= lng <= boundary.east)


def validate_coordinate(lat: float, lng: float) -> Tuple[float, float]:
    """
    Check that a coordinate pair is numeric, finite and in range.

    Returns:
        The pair as floats

    Raises:
        InvalidCoordinateError: If either value is unusable
    """
    try:
        lat = float(lat)
        lng = float(lng)
    except (TypeError, ValueError):
        raise InvalidCoordinateError(f"Coordinates must be numeric, got ({lat!r}, {lng!r})")

    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise InvalidCoordinateError(f"Coordinates must be finite, got ({lat}, {lng})")
    if not -90.0 <= lat <= 90.0:
        raise InvalidCoordinateError(f"Latitude {lat} is outside [-90, 90]")
    if not -180.0 <= lng <= 180.0:
        raise InvalidCoordinateError(f"Longitude {lng} is outside [-180, 180]")
    return lat, lng


def haversine(lat1: float, lng1: float, lat2: float, lng2: float) -> Distance:
    """
    Great-circle distance between two points on a sphere of radius EARTH_RADIUS_KM.

    Args:
        lat1: Latitude of the first point
        lng1: Longitude of the first point
        lat2: Latitude of the second point
        lng2: Longitude of the second point

    Returns:
        Distance in kilometers and miles
    """
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)

    a = (math.sin(d_lat / 2) ** 2 +
         math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) *
         math.sin(d_lng / 2) ** 2)
    # Rounding can push `a` just past 1 for antipodal points
    a = min(1.0, max(0.0, a))

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    km = EARTH_RADIUS_KM * c
    return Distance(kilometers=km, miles=km * KM_TO_MILES)


def estimate_continent(lat: float, lng: float) -> str:
    """Return the first continent box containing the point, or "Unknown Region"."""
    for boundary in CONTINENT_BOUNDARIES:
        if is_in_boundary(lat, lng, boundary):
            return boundary.name
    return UNKNOWN_REGION


def hemisphere_labels(lat: float, lng: float) -> Tuple[str, str]:
    """Return ("Northern"|"Southern", "Eastern"|"Western"). The equator and prime meridian count as N/E."""
    north_south = "Northern" if lat >= 0 else "Southern"
    east_west = "Eastern" if lng >= 0 else "Western"
    return north_south, east_west


def estimate_utc_offset(lng: float) -> int:
    """
    Estimate a UTC offset in whole hours from longitude alone.

    One hour per 15 degrees, halves rounded towards +inf (7.5 -> +1,
    -7.5 -> 0). No daylight saving or political boundaries.
    """
    return int(math.floor(lng / DEGREES_PER_TIMEZONE + 0.5))


def format_utc_offset(offset: int) -> str:
    """Format an hour offset with an explicit sign: 5 -> "+5", -5 -> "-5", 0 -> "+0"."""
    return f"+{offset}" if offset >= 0 else str(offset)
