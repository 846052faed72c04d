from app.models import Category, Coffee, Ingredient
from app.repositories.base import SQLAlchemyRepository
from app.schemas import IngredientListQuery, ListQuery


class CoffeeRepository(SQLAlchemyRepository[Coffee]):
    model = Coffee


class CategoryRepository(SQLAlchemyRepository[Category]):
    model = Category


class IngredientRepository(SQLAlchemyRepository[Ingredient]):
    model = Ingredient
    sortable_columns = {
        **SQLAlchemyRepository.sortable_columns,
        "isactive": "is_active",
    }

    def _apply_filters(self, stmt, query: ListQuery):
        stmt = super()._apply_filters(stmt, query)
        if isinstance(query, IngredientListQuery) and query.is_active is not None:
            stmt = stmt.where(Ingredient.is_active.is_(query.is_active))
        return stmt
