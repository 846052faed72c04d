"""Category service: the generic catalogue service bound to the Category entity."""
from app.cache import CacheBackend
from app.models import Category
from app.repositories import CategoryRepository
from app.schemas import CategoryResponse
from app.services.base import EntityMapper, EntityService
from app.validators import category_validator

category_mapper = EntityMapper(Category, CategoryResponse, fields=("name", "description"))


class CategoryService(EntityService[Category, CategoryResponse]):
    entity = "category"
    label = "Category"


def build_category_service(repository: CategoryRepository, cache: CacheBackend) -> CategoryService:
    return CategoryService(repository, cache, category_validator, category_mapper)
