from .event import EventFilters, EventRepository
from .category import CategoryRepository

__all__ = ["EventFilters", "EventRepository", "CategoryRepository"]
