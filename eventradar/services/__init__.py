from .geo import GeoPoint, haversine_km, distance_between
from .event_query import EventQueryService, ListingParams, parse_listing_params, parse_location
from .geocoding import ReverseGeocodingService

__all__ = [
    "GeoPoint",
    "haversine_km",
    "distance_between",
    "EventQueryService",
    "ListingParams",
    "parse_listing_params",
    "parse_location",
    "ReverseGeocodingService",
]
