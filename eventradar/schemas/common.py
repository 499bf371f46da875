from typing import Any, Dict

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every error response."""
    message: str


class ReverseGeocodeResponse(BaseModel):
    display_name: str
    address: Dict[str, Any] = {}
