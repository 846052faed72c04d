"""
Ingredient service: the generic catalogue service bound to the
Ingredient entity.  Lists additionally filter on ``is_active``, which is
part of the list cache key via ``IngredientListQuery``.
"""
from app.cache import CacheBackend
from app.models import Ingredient
from app.repositories import IngredientRepository
from app.schemas import IngredientResponse
from app.services.base import EntityMapper, EntityService
from app.validators import ingredient_validator

ingredient_mapper = EntityMapper(
    Ingredient, IngredientResponse, fields=("name", "description", "is_active")
)


class IngredientService(EntityService[Ingredient, IngredientResponse]):
    entity = "ingredient"
    label = "Ingredient"


def build_ingredient_service(repository: IngredientRepository, cache: CacheBackend) -> IngredientService:
    return IngredientService(repository, cache, ingredient_validator, ingredient_mapper)
