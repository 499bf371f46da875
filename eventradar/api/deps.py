from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from eventradar.crud import CategoryRepository, EventRepository
from eventradar.database import get_db
from eventradar.services.event_query import EventQueryService
from eventradar.services.geocoding import ReverseGeocodingService


def get_event_query_service(db: AsyncSession = Depends(get_db)) -> EventQueryService:
    return EventQueryService(EventRepository(db))


def get_category_repository(db: AsyncSession = Depends(get_db)) -> CategoryRepository:
    return CategoryRepository(db)


def get_geocoding_service(request: Request) -> ReverseGeocodingService:
    return request.app.state.geocoder
