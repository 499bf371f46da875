from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from eventradar.config import Settings
from eventradar.logging_config import get_logger
from eventradar.models.base import Base

logger = get_logger("database")


class Database:
    """Owns the async engine and session factory for one application instance.

    Built by the application lifespan and stored on ``app.state.db``; request
    handlers reach it through :func:`get_db` instead of a module global.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Create a database handle for ``settings.DATABASE_URL``."""
        if settings.DATABASE_URL.startswith("sqlite"):
            # In-memory SQLite must share one connection across sessions
            engine = create_async_engine(
                settings.DATABASE_URL,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            engine = create_async_engine(
                settings.DATABASE_URL,
                pool_pre_ping=True,
            )
        return cls(engine)

    async def create_tables(self) -> None:
        """Create database tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Get a database session.
    
    The read endpoints never write, so the session is closed without a commit.
    
    Yields:
        AsyncSession: Database session
    """
    database: Database = request.app.state.db
    async with database.session_factory() as session:
        yield session
