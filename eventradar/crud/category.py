from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from eventradar.exceptions import InternalError
from eventradar.logging_config import get_logger
from eventradar.models.event import Category

logger = get_logger("crud.category")


class CategoryRepository:
    """Read access to categories for one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_categories(self) -> List[Category]:
        """Get all categories ordered by name."""
        try:
            result = await self.db.execute(select(Category).order_by(Category.name))
        except SQLAlchemyError as e:
            logger.error(f"Error listing categories: {e}")
            raise InternalError("Failed to fetch categories") from e
        return list(result.scalars().all())
