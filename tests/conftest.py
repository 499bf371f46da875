import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, List, Optional

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from eventradar.config import Settings
from eventradar.database import Database
from eventradar.main import create_app
from eventradar.models import Category, Event, EventStatus, UserRole

TEST_JWT_SECRET = "test-secret"

# Requester location used across the distance tests (central Jakarta)
ORIGIN_LAT = -6.2000
ORIGIN_LNG = 106.8160

# Kilometers per degree of latitude for a 6371 km sphere
KM_PER_DEGREE = 111.19492664455873

logger = logging.getLogger(__name__)


def point_north_of_origin(km: float) -> tuple:
    """Coordinates ``km`` kilometers due north of the test origin."""
    return ORIGIN_LAT + km / KM_PER_DEGREE, ORIGIN_LNG


def make_token(user_id: str, role: str = UserRole.USER.value, secret: str = TEST_JWT_SECRET) -> str:
    return jwt.encode({"sub": user_id, "role": role}, secret, algorithm="HS256")


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        JWT_SECRET=TEST_JWT_SECRET,
        LOG_DIR=str(tmp_path / "logs"),
        LOG_LEVEL="WARNING",
        GEOCODING_RETRIES=1,
    )


@pytest.fixture
def database(test_settings) -> Database:
    return Database.from_settings(test_settings)


@pytest.fixture
def app(test_settings, database):
    return create_app(test_settings, database)


@pytest.fixture
def client(app):
    """Test client with the lifespan running, so tables exist."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers() -> dict:
    return auth_header(make_token("admin-1", UserRole.ADMIN.value))


@pytest.fixture
def user_headers() -> dict:
    return auth_header(make_token("user-1", UserRole.USER.value))


_counter = 0


def build_event(
    name: str,
    *,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    status: EventStatus = EventStatus.APPROVED,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    created_at: Optional[datetime] = None,
    categories: Optional[List[Category]] = None,
    price: Decimal = Decimal("0"),
    **fields,
) -> Event:
    """Build an unsaved event; dates default to tomorrow."""
    global _counter
    _counter += 1
    now = datetime.now()
    start = start or now + timedelta(days=1)
    return Event(
        slug=f"{name.lower().replace(' ', '-')}-{_counter}",
        name=name,
        start_date=start,
        end_date=end or start + timedelta(hours=3),
        status=status,
        latitude=latitude,
        longitude=longitude,
        created_at=created_at or now - timedelta(minutes=_counter),
        categories=categories or [],
        price=price,
        is_paid=price > 0,
        tags=[],
        images=[f"https://cdn.example.com/events/{_counter}.jpg"],
        **fields,
    )


@pytest.fixture
def seed(client, database) -> Callable:
    """Persist model instances through the app's own event loop."""

    async def _add_all(objects):
        async with database.session_factory() as session:
            session.add_all(objects)
            await session.commit()

    def _seed(*objects):
        client.portal.call(_add_all, list(objects))
        logger.info(f"Seeded {len(objects)} objects")
        return objects

    return _seed
