from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.cache import CacheBackend
from app.config import settings
from app.database import get_db
from app.dependencies import get_cache
from app.repositories import CategoryRepository, CoffeeRepository, IngredientRepository
from app.schemas import MetricsResponse

router = APIRouter(prefix=f"{settings.API_PREFIX}/metrics", tags=["metrics"])


@router.get("", response_model=MetricsResponse)
async def get_metrics(
    db: AsyncSession = Depends(get_db),
    cache: CacheBackend = Depends(get_cache),
):
    ingredients = IngredientRepository(db)
    return MetricsResponse(
        total_coffees=await CoffeeRepository(db).count(),
        total_categories=await CategoryRepository(db).count(),
        total_ingredients=await ingredients.count(),
        active_ingredients=await ingredients.count(is_active=True),
        cache_info=cache.stats,
    )
