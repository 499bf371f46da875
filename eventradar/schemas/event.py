"""
Event schema definitions for the EventRadar API.

Response payloads use camelCase keys (``startDate``, ``distanceKm``) because the
web client consumes them directly. Models accept either the Python field name
or the alias when constructed.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from eventradar.models.event import EventStatus

# =====================================================================
# Enums and Constants
# =====================================================================

class TemporalStatus(str, Enum):
    """Where "now" falls relative to an event's start and end."""
    COMING = "coming"
    ONGOING = "ongoing"
    ENDED = "ended"

class PriceFilter(str, Enum):
    FREE = "free"
    PAID = "paid"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

# =====================================================================
# Related entity schemas
# =====================================================================

class CategorySummary(CamelModel):
    """Category as embedded in event payloads and the category listing."""
    id: str
    name: str
    slug: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"id": "c1a7e5", "name": "Music", "slug": "music"}
        }
    )

class ApproverSummary(CamelModel):
    id: str
    email: str
    name: Optional[str] = None
    username: Optional[str] = None

class CreatorSummary(CamelModel):
    name: Optional[str] = None
    image: Optional[str] = None

# =====================================================================
# Event schemas
# =====================================================================

class EventResponse(CamelModel):
    """
    Event annotated for one request.

    ``status`` is the temporal status computed against the request time;
    the stored moderation state is exposed as ``approvalStatus``.
    """
    id: str
    slug: str
    name: str
    description: Optional[str] = None
    address: Optional[str] = None
    location: Optional[str] = None
    start_date: datetime
    end_date: datetime
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    price: Decimal = Decimal("0")
    is_paid: bool = False
    tags: List[str] = Field(default_factory=list)
    organizer_name: Optional[str] = None
    anonymous_name: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    approval_status: EventStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    categories: List[CategorySummary] = Field(default_factory=list)
    approved_by: Optional[ApproverSummary] = None
    created_by: Optional[CreatorSummary] = None

    distance_km: Optional[float] = None
    status: TemporalStatus

class EventListResponse(CamelModel):
    """
    Page of annotated events.

    ``total`` counts every event that passed all filters, radius included,
    before the page window was applied.
    """
    events: List[EventResponse]
    total: int
