from typing import Optional

from fastapi import APIRouter, Depends, Query

from eventradar.api.deps import get_event_query_service
from eventradar.auth import Caller, get_app_settings, get_current_caller
from eventradar.config import Settings
from eventradar.logging_config import get_logger
from eventradar.schemas.common import ErrorResponse
from eventradar.schemas.event import EventListResponse, EventResponse
from eventradar.services.event_query import EventQueryService, parse_listing_params, parse_location

router = APIRouter()
logger = get_logger("api.events")

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Malformed query parameters"},
    403: {"model": ErrorResponse, "description": "Caller lacks the required capability"},
    500: {"model": ErrorResponse, "description": "Backend failure"},
}


@router.get("", response_model=EventListResponse, responses=ERROR_RESPONSES)
async def read_events(
    status: Optional[str] = Query(None, description="'pending' or 'rejected' (admin only), or 'approved'"),
    limit: Optional[str] = Query(None, description="Page size, default 10"),
    offset: Optional[str] = Query(None, description="Events to skip, default 0"),
    lat: Optional[str] = Query(None, description="Requester latitude"),
    lng: Optional[str] = Query(None, description="Requester longitude"),
    radius: Optional[str] = Query(None, description="Search radius in km, requires lat and lng"),
    categories: Optional[str] = Query(None, description="Comma-separated category ids"),
    q: Optional[str] = Query(None, description="Search in name, description, address and organizer"),
    price_filter: Optional[str] = Query(None, alias="priceFilter", description="'free' or 'paid'"),
    caller: Optional[Caller] = Depends(get_current_caller),
    settings: Settings = Depends(get_app_settings),
    service: EventQueryService = Depends(get_event_query_service),
):
    """
    List events with search, category, price and distance filters.
    """
    params = parse_listing_params(
        status=status,
        limit=limit,
        offset=offset,
        lat=lat,
        lng=lng,
        radius=radius,
        categories=categories,
        q=q,
        price_filter=price_filter,
        default_limit=settings.DEFAULT_PAGE_LIMIT,
    )
    return await service.list_events(params, caller)


@router.get("/nearby", response_model=EventListResponse, responses=ERROR_RESPONSES)
async def read_nearby_events(
    status: Optional[str] = Query(None, description="'pending' requires admin capability"),
    limit: Optional[str] = Query(None, description="Page size, default 10"),
    offset: Optional[str] = Query(None, description="Events to skip, default 0"),
    lat: Optional[str] = Query(None, description="Requester latitude"),
    lng: Optional[str] = Query(None, description="Requester longitude"),
    radius: Optional[str] = Query(None, description="Search radius in km, requires lat and lng"),
    categories: Optional[str] = Query(None, description="Comma-separated category ids"),
    caller: Optional[Caller] = Depends(get_current_caller),
    settings: Settings = Depends(get_app_settings),
    service: EventQueryService = Depends(get_event_query_service),
):
    """
    Events starting today or later, annotated with distance from the requester.
    """
    params = parse_listing_params(
        status=status,
        limit=limit,
        offset=offset,
        lat=lat,
        lng=lng,
        radius=radius,
        categories=categories,
        default_limit=settings.DEFAULT_PAGE_LIMIT,
    )
    return await service.find_nearby(params, caller)


@router.get(
    "/{event_id}",
    response_model=EventResponse,
    responses={404: {"model": ErrorResponse, "description": "Event not found or not approved"}},
)
async def read_event(
    event_id: str,
    lat: Optional[str] = Query(None, description="Requester latitude"),
    lng: Optional[str] = Query(None, description="Requester longitude"),
    caller: Optional[Caller] = Depends(get_current_caller),
    service: EventQueryService = Depends(get_event_query_service),
):
    """
    Get a specific event by ID.
    """
    origin = parse_location(lat, lng)
    return await service.get_event(event_id, caller, origin)
