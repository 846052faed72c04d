from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.cache import CacheBackend, create_cache_backend
from app.config import settings
from app.database import get_db
from app.repositories import CategoryRepository, CoffeeRepository, IngredientRepository
from app.schemas import IngredientListQuery, ListQuery
from app.services.category_service import CategoryService, build_category_service
from app.services.coffee_service import CoffeeService, build_coffee_service
from app.services.ingredient_service import IngredientService, build_ingredient_service

# Process-wide cache shared by all requests; connected in the app lifespan.
cache_backend: CacheBackend = create_cache_backend(settings)


def get_cache() -> CacheBackend:
    return cache_backend


# ---------------------------------------------------------------------------
# List query parameters
# ---------------------------------------------------------------------------

# Bounds are not enforced here: the service validates page / pageSize /
# search so out-of-range values come back as VALIDATION_ERROR results.

def list_query(
    search: str | None = Query(None, description="Case-insensitive substring match on name."),
    sort_by: str | None = Query(
        None,
        alias="sortBy",
        description="One of name, createdAt, updatedAt (ingredients also isActive).",
    ),
    sort_descending: bool = Query(False, alias="sortDescending"),
    page: int = Query(1, description="Page number (1-based)."),
    page_size: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        alias="pageSize",
        description=f"Items per page (1-{settings.MAX_PAGE_SIZE}).",
    ),
) -> ListQuery:
    return ListQuery(
        search=search,
        sort_by=sort_by,
        sort_descending=sort_descending,
        page=page,
        page_size=page_size,
    )


def ingredient_list_query(
    base: ListQuery = Depends(list_query),
    is_active: bool | None = Query(None, alias="isActive"),
) -> IngredientListQuery:
    return IngredientListQuery(**base.model_dump(), is_active=is_active)


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

def get_coffee_service(
    db: AsyncSession = Depends(get_db),
    cache: CacheBackend = Depends(get_cache),
) -> CoffeeService:
    return build_coffee_service(CoffeeRepository(db), cache)


def get_category_service(
    db: AsyncSession = Depends(get_db),
    cache: CacheBackend = Depends(get_cache),
) -> CategoryService:
    return build_category_service(CategoryRepository(db), cache)


def get_ingredient_service(
    db: AsyncSession = Depends(get_db),
    cache: CacheBackend = Depends(get_cache),
) -> IngredientService:
    return build_ingredient_service(IngredientRepository(db), cache)
