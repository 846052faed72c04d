from app.dependencies import get_ingredient_service, ingredient_list_query
from app.routers.base import crud_router
from app.schemas import IngredientCreate, IngredientResponse, IngredientUpdate

# List endpoint additionally accepts ?isActive=true|false.
router = crud_router(
    entity="ingredient",
    service_dependency=get_ingredient_service,
    query_dependency=ingredient_list_query,
    create_schema=IngredientCreate,
    update_schema=IngredientUpdate,
    response_schema=IngredientResponse,
)
