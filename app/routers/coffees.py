from app.dependencies import get_coffee_service, list_query
from app.routers.base import crud_router
from app.schemas import CoffeeCreate, CoffeeResponse, CoffeeUpdate

router = crud_router(
    entity="coffee",
    service_dependency=get_coffee_service,
    query_dependency=list_query,
    create_schema=CoffeeCreate,
    update_schema=CoffeeUpdate,
    response_schema=CoffeeResponse,
)
