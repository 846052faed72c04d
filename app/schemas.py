import math
import uuid
from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire; both accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Coffee ---

# Request bodies are deliberately loose: field rules (lengths, character
# set) are enforced by the service validators so violations come back
# as VALIDATION_ERROR results rather than framework errors.

class CoffeeCreate(CamelModel):
    name: str = ""


class CoffeeUpdate(CoffeeCreate):
    pass


class CoffeeResponse(CamelModel):
    id: uuid.UUID
    name: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Category ---

class CategoryCreate(CamelModel):
    name: str = ""
    description: str | None = None


class CategoryUpdate(CategoryCreate):
    pass


class CategoryResponse(CamelModel):
    id: uuid.UUID
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Ingredient ---

class IngredientCreate(CamelModel):
    name: str = ""
    description: str | None = None
    is_active: bool = True


class IngredientUpdate(IngredientCreate):
    pass


class IngredientResponse(CamelModel):
    id: uuid.UUID
    name: str
    description: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Queries ---

class ListQuery(CamelModel):
    search: str | None = None
    sort_by: str | None = None
    sort_descending: bool = False
    page: int = 1
    page_size: int = 10

    @property
    def offset(self) -> int:
        """SQL OFFSET value computed from the current page and page size."""
        return (self.page - 1) * self.page_size


class IngredientListQuery(ListQuery):
    is_active: bool | None = None


# --- Pagination ---

class PagedResponse(CamelModel, Generic[T]):
    items: list[T]
    total_count: int
    page: int
    page_size: int

    @computed_field
    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @computed_field
    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @computed_field
    @property
    def has_previous_page(self) -> bool:
        return self.page > 1


# --- Errors ---

class ErrorResponse(BaseModel):
    error: str
    code: str


# --- Health / metrics ---

class HealthResponse(BaseModel):
    status: str
    database: str
    cache: dict = {}


class MetricsResponse(CamelModel):
    total_coffees: int
    total_categories: int
    total_ingredients: int
    active_ingredients: int
    cache_info: dict = {}
