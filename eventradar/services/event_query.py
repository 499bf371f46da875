"""
Event discovery queries.

Both listing endpoints run the same pipeline: load every event matching the
store-side predicate (newest first), annotate distances, drop events outside
the radius, count, then cut the requested page. Counting after the radius
filter keeps ``total`` consistent with what the caller can actually page
through.
"""
import math
from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Callable, List, Optional, Sequence

from eventradar.auth import Caller
from eventradar.crud.event import EventFilters, EventRepository
from eventradar.exceptions import ForbiddenError, InvalidParameterError, NotFoundError
from eventradar.logging_config import get_logger
from eventradar.models.event import Event, EventStatus
from eventradar.schemas.event import (
    ApproverSummary,
    CategorySummary,
    CreatorSummary,
    EventListResponse,
    EventResponse,
    PriceFilter,
    TemporalStatus,
)
from eventradar.services.geo import GeoPoint, distance_between

logger = get_logger("services.event_query")

DEFAULT_LIMIT = 10

# =====================================================================
# Parameter parsing
# =====================================================================

@dataclass
class ListingParams:
    """Validated query parameters shared by the listing endpoints."""
    status: Optional[str] = None
    limit: int = DEFAULT_LIMIT
    offset: int = 0
    origin: Optional[GeoPoint] = None
    radius_km: Optional[float] = None
    category_ids: List[str] = field(default_factory=list)
    search: Optional[str] = None
    price_filter: Optional[PriceFilter] = None


def _present(raw: Optional[str]) -> bool:
    return raw is not None and raw.strip() != ""


def _parse_float(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise InvalidParameterError(f"Invalid {name} value: {raw!r} is not a number.")
    if not math.isfinite(value):
        raise InvalidParameterError(f"Invalid {name} value: {raw!r} is not a finite number.")
    return value


def _parse_int(name: str, raw: Optional[str], default: int) -> int:
    if not _present(raw):
        return default
    try:
        value = int(raw)
    except ValueError:
        raise InvalidParameterError(f"Invalid {name} value: {raw!r} is not an integer.")
    if value < 0:
        raise InvalidParameterError(f"Invalid {name} value: must not be negative.")
    return value


def parse_location(lat: Optional[str], lng: Optional[str]) -> Optional[GeoPoint]:
    """
    Parse the requester's coordinates.
    
    Args:
        lat: Raw latitude parameter
        lng: Raw longitude parameter
        
    Returns:
        GeoPoint, or None if neither coordinate was supplied
        
    Raises:
        InvalidParameterError: If only one coordinate is given or either is malformed
    """
    has_lat, has_lng = _present(lat), _present(lng)
    if not has_lat and not has_lng:
        return None
    if has_lat != has_lng:
        raise InvalidParameterError("Latitude and longitude must be provided together.")
    
    latitude = _parse_float("latitude", lat)
    longitude = _parse_float("longitude", lng)
    if not -90 <= latitude <= 90:
        raise InvalidParameterError("Latitude must be between -90 and 90.")
    if not -180 <= longitude <= 180:
        raise InvalidParameterError("Longitude must be between -180 and 180.")
    return GeoPoint(latitude, longitude)


def parse_listing_params(
    status: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    lat: Optional[str] = None,
    lng: Optional[str] = None,
    radius: Optional[str] = None,
    categories: Optional[str] = None,
    q: Optional[str] = None,
    price_filter: Optional[str] = None,
    default_limit: int = DEFAULT_LIMIT,
) -> ListingParams:
    """
    Validate raw query-string values into ListingParams.
    
    Runs before any store access so malformed requests never reach the database.
    
    Raises:
        InvalidParameterError: On any malformed value or invalid combination
    """
    origin = parse_location(lat, lng)
    
    radius_km = None
    if _present(radius):
        if origin is None:
            raise InvalidParameterError("Radius requires both latitude and longitude.")
        radius_km = _parse_float("radius", radius)
        if radius_km <= 0:
            raise InvalidParameterError("Invalid radius value: must be greater than 0.")
    
    parsed_limit = _parse_int("limit", limit, default_limit)
    parsed_offset = _parse_int("offset", offset, 0)
    
    category_ids = []
    if categories:
        category_ids = [c.strip() for c in categories.split(",") if c.strip()]
    
    parsed_price = None
    if price_filter:
        try:
            parsed_price = PriceFilter(price_filter.lower())
        except ValueError:
            # Unknown price filters leave prices unfiltered
            logger.debug(f"Ignoring unknown price filter: {price_filter}")
    
    return ListingParams(
        status=status.lower() if status else None,
        limit=parsed_limit,
        offset=parsed_offset,
        origin=origin,
        radius_km=radius_km,
        category_ids=category_ids,
        search=q.strip() if q and q.strip() else None,
        price_filter=parsed_price,
    )

# =====================================================================
# Annotation helpers
# =====================================================================

def start_of_day(now: datetime) -> datetime:
    return datetime.combine(now.date(), time.min)


def temporal_status(start_date: datetime, end_date: datetime, now: datetime) -> TemporalStatus:
    """Classify an event as coming, ongoing or ended relative to ``now``."""
    if now < start_date:
        return TemporalStatus.COMING
    if now <= end_date:
        return TemporalStatus.ONGOING
    return TemporalStatus.ENDED


def annotate_event(event: Event, distance_km: Optional[float], now: datetime) -> EventResponse:
    """Build the response payload for one event."""
    return EventResponse(
        id=event.id,
        slug=event.slug,
        name=event.name,
        description=event.description,
        address=event.address,
        location=event.location,
        start_date=event.start_date,
        end_date=event.end_date,
        latitude=event.latitude,
        longitude=event.longitude,
        price=event.price if event.price is not None else 0,
        is_paid=bool(event.is_paid),
        tags=list(event.tags or []),
        organizer_name=event.organizer_name,
        anonymous_name=event.anonymous_name,
        images=list(event.images or []),
        approval_status=event.status,
        created_at=event.created_at,
        updated_at=event.updated_at,
        categories=[CategorySummary.model_validate(c) for c in event.categories],
        approved_by=ApproverSummary.model_validate(event.approved_by) if event.approved_by else None,
        created_by=CreatorSummary.model_validate(event.created_by) if event.created_by else None,
        distance_km=distance_km,
        status=temporal_status(event.start_date, event.end_date, now),
    )

# =====================================================================
# Query service
# =====================================================================

class EventQueryService:
    """Runs the discovery queries against an injected repository."""

    def __init__(self, repository: EventRepository, clock: Callable[[], datetime] = datetime.now):
        self.repository = repository
        self.clock = clock

    async def find_nearby(self, params: ListingParams, caller: Optional[Caller]) -> EventListResponse:
        """
        Nearby events for the discovery map.
        
        Only APPROVED events (PENDING for admins asking for them) starting
        today or later are considered.
        
        Raises:
            ForbiddenError: If pending events are requested by a non-admin
            InternalError: If the store query fails
        """
        if params.status == "pending":
            if caller is None or not caller.is_admin:
                raise ForbiddenError("Forbidden: Not authorized to view pending events")
            statuses = (EventStatus.PENDING,)
        else:
            statuses = (EventStatus.APPROVED,)
        
        now = self.clock()
        filters = EventFilters(
            statuses=statuses,
            starts_from=start_of_day(now),
            category_ids=params.category_ids,
        )
        return await self._run(filters, params, now)

    async def list_events(self, params: ListingParams, caller: Optional[Caller]) -> EventListResponse:
        """
        General event listing with search and price filters.
        
        Admins see every moderation state unless they ask for one; everyone
        else sees APPROVED events starting today or later.
        
        Raises:
            ForbiddenError: If pending or rejected events are requested by a non-admin
            InternalError: If the store query fails
        """
        is_admin = caller is not None and caller.is_admin
        statuses: Optional[Sequence[EventStatus]]
        if params.status in ("pending", "rejected"):
            if not is_admin:
                raise ForbiddenError(f"Forbidden: Not authorized to view {params.status} events.")
            statuses = (EventStatus(params.status.upper()),)
        elif params.status == "approved" or not is_admin:
            statuses = (EventStatus.APPROVED,)
        else:
            statuses = None
        
        now = self.clock()
        filters = EventFilters(
            statuses=statuses,
            starts_from=start_of_day(now) if statuses == (EventStatus.APPROVED,) else None,
            category_ids=params.category_ids,
            search=params.search,
            price_filter=params.price_filter,
        )
        return await self._run(filters, params, now)

    async def get_event(
        self,
        event_id: str,
        caller: Optional[Caller],
        origin: Optional[GeoPoint] = None,
    ) -> EventResponse:
        """
        One event by id, visible to the public only once approved.
        
        Raises:
            NotFoundError: If the event does not exist or is not visible to the caller
        """
        statuses = None if caller is not None and caller.is_admin else (EventStatus.APPROVED,)
        event = await self.repository.get_event(event_id, statuses=statuses)
        if event is None:
            raise NotFoundError("Event not found or not approved")
        distance = distance_between(origin, event.latitude, event.longitude)
        return annotate_event(event, distance, self.clock())

    async def _run(self, filters: EventFilters, params: ListingParams, now: datetime) -> EventListResponse:
        events = await self.repository.list_events(filters)
        
        with_distance = [
            (event, distance_between(params.origin, event.latitude, event.longitude))
            for event in events
        ]
        
        if params.radius_km is not None:
            with_distance = [
                (event, distance)
                for event, distance in with_distance
                if distance is not None and distance <= params.radius_km
            ]
        
        total = len(with_distance)
        page = with_distance[params.offset:params.offset + params.limit]
        
        logger.info(
            f"Event query matched {len(events)} events, {total} within radius, "
            f"returning {len(page)} (offset={params.offset}, limit={params.limit})"
        )
        return EventListResponse(
            events=[annotate_event(event, distance, now) for event, distance in page],
            total=total,
        )
