"""
Field rules for request bodies and list queries.

Validators return a list of human-readable messages (empty when the
input is valid); the service joins them with ``"; "`` into a single
VALIDATION_ERROR result.  Each field reports at most one violation.
"""
import re
from dataclasses import dataclass

from pydantic import BaseModel

from app.config import settings
from app.schemas import ListQuery

_NAME_RE = re.compile(r"[a-zA-Z0-9\s\-']+")

NAME_MIN_LENGTH = 2
DESCRIPTION_MAX_LENGTH = 200
SEARCH_MAX_LENGTH = 50


@dataclass(frozen=True)
class EntityValidator:
    """
    Rules shared by every catalogue entity, parameterised by the label
    used in messages and the maximum name length.
    """

    label: str
    name_max_length: int = 50

    def validate(self, data: BaseModel) -> list[str]:
        """Validate a create/update body.  ``description`` is checked when present."""
        errors: list[str] = []

        name = data.name
        if name is None or not name.strip():
            errors.append(f"{self.label} name is required")
        elif len(name) < NAME_MIN_LENGTH:
            errors.append(f"Name must be at least {NAME_MIN_LENGTH} characters")
        elif len(name) > self.name_max_length:
            errors.append(f"Name must not exceed {self.name_max_length} characters")
        elif not _NAME_RE.fullmatch(name):
            errors.append("Name may only contain letters, digits, spaces, hyphens and apostrophes")

        description = getattr(data, "description", None)
        if description and len(description) > DESCRIPTION_MAX_LENGTH:
            errors.append(f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters")

        return errors

    def validate_query(self, query: ListQuery) -> list[str]:
        errors: list[str] = []
        if query.page < 1:
            errors.append("Page must be greater than 0")
        if not 1 <= query.page_size <= settings.MAX_PAGE_SIZE:
            errors.append(f"Page size must be between 1 and {settings.MAX_PAGE_SIZE}")
        if query.search and len(query.search) > SEARCH_MAX_LENGTH:
            errors.append(f"Search must not exceed {SEARCH_MAX_LENGTH} characters")
        return errors


coffee_validator = EntityValidator(label="Coffee", name_max_length=100)
category_validator = EntityValidator(label="Category", name_max_length=50)
ingredient_validator = EntityValidator(label="Ingredient", name_max_length=50)
