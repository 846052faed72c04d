from app.dependencies import get_category_service, list_query
from app.routers.base import crud_router
from app.schemas import CategoryCreate, CategoryResponse, CategoryUpdate

router = crud_router(
    entity="category",
    service_dependency=get_category_service,
    query_dependency=list_query,
    create_schema=CategoryCreate,
    update_schema=CategoryUpdate,
    response_schema=CategoryResponse,
)
