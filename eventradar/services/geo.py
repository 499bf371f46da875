"""Great-circle distance helpers."""
import math
from dataclasses import dataclass
from typing import Optional

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    """A requester location in decimal degrees."""
    latitude: float
    longitude: float


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Calculate the great-circle distance between two points.
    
    Args:
        lat1: Latitude of the first point in degrees
        lng1: Longitude of the first point in degrees
        lat2: Latitude of the second point in degrees
        lng2: Longitude of the second point in degrees
        
    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(
    origin: Optional[GeoPoint],
    latitude: Optional[float],
    longitude: Optional[float],
) -> Optional[float]:
    """Distance from ``origin`` to a coordinate pair, or None if either side is missing."""
    if origin is None or latitude is None or longitude is None:
        return None
    return haversine_km(origin.latitude, origin.longitude, float(latitude), float(longitude))
