from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, String, TypeDecorator, Uuid, func, true
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware datetime that always comes back in UTC.

    Some backends (SQLite) drop the offset on storage; naive values read
    back are therefore interpreted as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class TimestampMixin:
    # The service layer stamps both on create and refreshes updated_at on
    # every mutation; the server defaults only cover raw inserts.
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), server_default=func.now(), nullable=False
    )


# ---------------------------------------------------------------------------
# Coffee
# ---------------------------------------------------------------------------
class Coffee(TimestampMixin, Base):
    __tablename__ = "coffees"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------
class Category(TimestampMixin, Base):
    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)


# ---------------------------------------------------------------------------
# Ingredient
# ---------------------------------------------------------------------------
class Ingredient(TimestampMixin, Base):
    __tablename__ = "ingredients"

    __table_args__ = (
        Index("ix_ingredients_is_active", "is_active"),
        Index("ix_ingredients_created_at", "created_at"),
        Index("ix_ingredients_updated_at", "updated_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), nullable=False
    )


# ---------------------------------------------------------------------------
# Case-insensitive name uniqueness (backs up the service-level check)
# ---------------------------------------------------------------------------
Index("uq_coffees_name_lower", func.lower(Coffee.name), unique=True)
Index("uq_categories_name_lower", func.lower(Category.name), unique=True)
Index("uq_ingredients_name_lower", func.lower(Ingredient.name), unique=True)
