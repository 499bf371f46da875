from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import select, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventradar.exceptions import InternalError
from eventradar.logging_config import get_logger
from eventradar.models.event import Category, Event, EventStatus
from eventradar.schemas.event import PriceFilter

logger = get_logger("crud.event")


@dataclass
class EventFilters:
    """Store-side predicate for event listings.

    ``statuses`` of None means every moderation state is allowed.
    """
    statuses: Optional[Sequence[EventStatus]] = (EventStatus.APPROVED,)
    starts_from: Optional[datetime] = None
    category_ids: List[str] = field(default_factory=list)
    search: Optional[str] = None
    price_filter: Optional[PriceFilter] = None


class EventRepository:
    """Read access to events for one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _with_relations(query):
        return query.options(
            selectinload(Event.categories),
            selectinload(Event.approved_by),
            selectinload(Event.created_by),
        )

    async def list_events(self, filters: EventFilters) -> List[Event]:
        """
        Get every event matching the filters, newest first.
        
        No offset or limit is applied here: distance filtering happens in
        memory afterwards and pagination must see the complete set.
        
        Args:
            filters: Predicate to apply
            
        Returns:
            List of events with categories and users loaded
            
        Raises:
            InternalError: If the query fails
        """
        query = self._with_relations(select(Event))
        
        if filters.statuses is not None:
            query = query.where(Event.status.in_(list(filters.statuses)))
        
        if filters.starts_from is not None:
            query = query.where(Event.start_date >= filters.starts_from)
        
        if filters.category_ids:
            query = query.where(Event.categories.any(Category.id.in_(filters.category_ids)))
        
        if filters.search:
            # Literal substring match: % and _ in the term are escaped
            term = filters.search
            query = query.where(
                or_(
                    Event.name.icontains(term, autoescape=True),
                    Event.description.icontains(term, autoescape=True),
                    Event.address.icontains(term, autoescape=True),
                    Event.organizer_name.icontains(term, autoescape=True),
                )
            )
        
        if filters.price_filter == PriceFilter.FREE:
            query = query.where(Event.price == 0)
        elif filters.price_filter == PriceFilter.PAID:
            query = query.where(Event.price > 0)
        
        # id breaks created_at ties so consecutive pages never overlap
        query = query.order_by(Event.created_at.desc(), Event.id)
        
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Error listing events: {e}")
            raise InternalError("Failed to list events") from e
        
        events = list(result.scalars().all())
        logger.debug(f"Loaded {len(events)} events matching {filters}")
        return events

    async def get_event(
        self,
        event_id: str,
        statuses: Optional[Sequence[EventStatus]] = (EventStatus.APPROVED,),
    ) -> Optional[Event]:
        """
        Get a specific event by ID.
        
        Args:
            event_id: ID of the event to retrieve
            statuses: Moderation states the event may be in, None for any
            
        Returns:
            Event or None if not found
        """
        query = self._with_relations(select(Event).where(Event.id == event_id))
        if statuses is not None:
            query = query.where(Event.status.in_(list(statuses)))
        
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving event {event_id}: {e}")
            raise InternalError("Failed to fetch event details") from e
        return result.scalars().first()
