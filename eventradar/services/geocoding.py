"""Reverse geocoding service for turning the caller's coordinates into a place name."""
from cachetools import LRUCache
from geopy.adapters import AioHTTPAdapter
from geopy.exc import GeocoderServiceError, GeocoderTimedOut, GeocoderUnavailable
from geopy.geocoders import Nominatim
from tenacity import (
    RetryError,
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from eventradar.config import Settings
from eventradar.exceptions import NotFoundError, UpstreamError
from eventradar.logging_config import get_logger
from eventradar.schemas.common import ReverseGeocodeResponse
from eventradar.services.geo import GeoPoint

logger = get_logger("services.geocoding")

# Only transient failures are retried; other service errors fail straight away
RETRYABLE_ERRORS = (GeocoderTimedOut, GeocoderUnavailable)


class ReverseGeocodingService:
    """Service for resolving coordinates to an address via Nominatim."""
    
    def __init__(self, settings: Settings):
        self.user_agent = settings.GEOCODING_USER_AGENT
        self.timeout = settings.GEOCODING_TIMEOUT
        self.max_retries = max(1, settings.GEOCODING_RETRIES)
        
        # Keys are caller-supplied coordinates rounded to ~1m, so the cache is bounded
        self._cache: LRUCache = LRUCache(maxsize=max(1, settings.GEOCODING_CACHE_SIZE))

    def _make_geocoder(self) -> Nominatim:
        return Nominatim(
            user_agent=self.user_agent,
            timeout=self.timeout,
            adapter_factory=AioHTTPAdapter,
        )

    async def _reverse_once(self, point: GeoPoint):
        async with self._make_geocoder() as geocoder:
            return await geocoder.reverse((point.latitude, point.longitude), exactly_one=True)

    async def reverse(self, point: GeoPoint) -> ReverseGeocodeResponse:
        """
        Reverse geocode a coordinate pair.
        
        Args:
            point: Coordinates to resolve
            
        Returns:
            Display name and structured address
            
        Raises:
            NotFoundError: If the provider has no address for the point
            UpstreamError: If the provider keeps failing after retries
        """
        key = (round(point.latitude, 5), round(point.longitude, 5))
        if key in self._cache:
            logger.debug(f"Returning cached address for {key}")
            return self._cache[key]
        
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries),
                wait=wait_exponential(multiplier=1, min=2, max=10),
                retry=retry_if_exception_type(RETRYABLE_ERRORS),
            ):
                with attempt:
                    location = await self._reverse_once(point)
        except (RetryError, GeocoderServiceError) as e:
            logger.error(f"Reverse geocoding failed for {key}: {e}")
            raise UpstreamError("Failed to fetch address from OpenStreetMap") from e
        
        if location is None:
            logger.warning(f"No address found for coordinates {key}")
            raise NotFoundError("No address found for these coordinates")
        
        raw = location.raw or {}
        result = ReverseGeocodeResponse(
            display_name=raw.get("display_name", location.address),
            address=raw.get("address", {}),
        )
        self._cache[key] = result
        logger.info(f"Reverse geocoded {key} to '{result.display_name}'")
        return result

    def clear_cache(self) -> None:
        """Clear the address cache."""
        self._cache.clear()
