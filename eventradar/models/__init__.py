from .base import Base
from .user import User, UserRole
from .event import Event, EventStatus, Category, event_categories

__all__ = [
    "Base",
    "User",
    "UserRole",
    "Event",
    "EventStatus",
    "Category",
    "event_categories",
]
