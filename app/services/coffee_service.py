"""Coffee service: the generic catalogue service bound to the Coffee entity."""
from app.cache import CacheBackend
from app.models import Coffee
from app.repositories import CoffeeRepository
from app.schemas import CoffeeResponse
from app.services.base import EntityMapper, EntityService
from app.validators import coffee_validator

coffee_mapper = EntityMapper(Coffee, CoffeeResponse, fields=("name",))


class CoffeeService(EntityService[Coffee, CoffeeResponse]):
    entity = "coffee"
    label = "Coffee"


def build_coffee_service(repository: CoffeeRepository, cache: CacheBackend) -> CoffeeService:
    return CoffeeService(repository, cache, coffee_validator, coffee_mapper)
