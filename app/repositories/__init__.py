# Repositories package.
#
#   base         : generic SQLAlchemyRepository (CRUD + filtered/paged query)
#   catalog      : Coffee / Category / Ingredient repositories
#   unit_of_work : explicit multi-repository transaction scope
from app.repositories.base import SQLAlchemyRepository
from app.repositories.catalog import CategoryRepository, CoffeeRepository, IngredientRepository
from app.repositories.unit_of_work import UnitOfWork

__all__ = [
    "SQLAlchemyRepository",
    "CoffeeRepository",
    "CategoryRepository",
    "IngredientRepository",
    "UnitOfWork",
]
