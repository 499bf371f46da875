"""
Schema definitions for the EventRadar API.
"""

from .event import (
    TemporalStatus, PriceFilter,
    CategorySummary, ApproverSummary, CreatorSummary,
    EventResponse, EventListResponse,
)
from .common import ErrorResponse, ReverseGeocodeResponse

__all__ = [
    'TemporalStatus', 'PriceFilter',
    'CategorySummary', 'ApproverSummary', 'CreatorSummary',
    'EventResponse', 'EventListResponse',
    'ErrorResponse', 'ReverseGeocodeResponse',
]
