from typing import Optional

from fastapi import APIRouter, Depends, Query

from eventradar.api.deps import get_geocoding_service
from eventradar.exceptions import InvalidParameterError
from eventradar.schemas.common import ErrorResponse, ReverseGeocodeResponse
from eventradar.services.event_query import parse_location
from eventradar.services.geocoding import ReverseGeocodingService

router = APIRouter()


@router.get(
    "/reverse-geocode",
    response_model=ReverseGeocodeResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def reverse_geocode(
    lat: Optional[str] = Query(None, description="Latitude"),
    lon: Optional[str] = Query(None, description="Longitude"),
    geocoder: ReverseGeocodingService = Depends(get_geocoding_service),
):
    """
    Resolve coordinates to a display name and structured address.
    """
    point = parse_location(lat, lon)
    if point is None:
        raise InvalidParameterError("Latitude and Longitude are required")
    return await geocoder.reverse(point)
