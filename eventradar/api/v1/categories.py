from typing import List

from fastapi import APIRouter, Depends

from eventradar.api.deps import get_category_repository
from eventradar.crud import CategoryRepository
from eventradar.schemas.event import CategorySummary

router = APIRouter()


@router.get("", response_model=List[CategorySummary])
async def read_categories(repository: CategoryRepository = Depends(get_category_repository)):
    """
    List all categories, ordered by name.
    """
    categories = await repository.list_categories()
    return [CategorySummary.model_validate(c) for c in categories]
