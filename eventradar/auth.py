"""Caller identity from session tokens issued by the auth provider."""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt, JWTError

from eventradar.config import Settings
from eventradar.logging_config import get_logger
from eventradar.models.user import UserRole

logger = get_logger("auth")

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Caller:
    """The authenticated user behind a request."""
    id: str
    role: str = UserRole.USER.value

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def decode_session_token(token: str, settings: Settings) -> Optional[Caller]:
    """
    Verify and decode a session token.
    
    Args:
        token: The JWT issued by the auth provider
        settings: Settings holding the shared secret and algorithm
        
    Returns:
        The caller if the token is valid, None otherwise
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"Rejected session token: {e}")
        return None
    
    user_id = payload.get("sub")
    if not user_id:
        logger.warning("Session token has no subject")
        return None
    return Caller(id=str(user_id), role=str(payload.get("role", UserRole.USER.value)))


async def get_current_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> Optional[Caller]:
    """Resolve the optional bearer token; anonymous callers get None."""
    if credentials is None:
        return None
    return decode_session_token(credentials.credentials, settings)
