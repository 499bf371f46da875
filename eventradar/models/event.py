import enum
import uuid

from sqlalchemy import (
    Column,
    String,
    Float,
    DateTime,
    Text,
    ForeignKey,
    Boolean,
    JSON,
    Numeric,
    Enum,
    Table,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .base import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class EventStatus(str, enum.Enum):
    """Moderation state of an event."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


event_categories = Table(
    "event_categories",
    Base.metadata,
    Column("event_id", String(36), ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", String(36), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Category(Base):
    __tablename__ = "categories"
    
    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(100), unique=True, nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)

    events = relationship("Event", secondary=event_categories, back_populates="categories")

    def __repr__(self):
        return f"<Category {self.slug}>"


class Event(Base):
    __tablename__ = "events"
    
    id = Column(String(36), primary_key=True, default=_uuid)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text)
    address = Column(String(255))
    location = Column(String(255))  # Place name shown next to the address
    start_date = Column(DateTime, nullable=False, index=True)
    end_date = Column(DateTime, nullable=False)
    latitude = Column(Float)
    longitude = Column(Float)
    
    # Ticketing
    price = Column(Numeric(12, 2), nullable=False, default=0)
    is_paid = Column(Boolean, nullable=False, default=False)
    
    tags = Column(JSON, nullable=False, default=list)
    organizer_name = Column(String(255))
    anonymous_name = Column(String(255))
    images = Column(JSON, nullable=False, default=list)  # Opaque object-storage URLs
    
    # Moderation
    status = Column(
        Enum(EventStatus, name="event_status"),
        nullable=False,
        default=EventStatus.PENDING,
        index=True,
    )
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    approved_by_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    
    # Timestamps
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime, onupdate=func.now(), nullable=True)
    
    # Relationships
    categories = relationship("Category", secondary=event_categories, back_populates="events")
    created_by = relationship("User", foreign_keys=[created_by_id])
    approved_by = relationship("User", foreign_keys=[approved_by_id])

    def __repr__(self):
        return f"<Event {self.id}: {self.name}>"
