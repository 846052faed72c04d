"""
Generic SQLAlchemy repository for the catalogue entities.

Pure persistence access: no uniqueness or validation rules live here.
Writes ``flush`` inside the caller's transaction.  ``save`` commits them;
the service calls it before touching the cache.  Inside a ``UnitOfWork``
the unit of work commits instead.
"""
import uuid
from typing import Any, ClassVar, Generic, Iterable, TypeVar

from sqlalchemy import asc, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.schemas import ListQuery

ModelT = TypeVar("ModelT", bound=Base)


class SQLAlchemyRepository(Generic[ModelT]):
    """
    CRUD plus a filtered, sorted and paged query for one mapped model.

    Subclasses set ``model`` and may extend ``sortable_columns`` (keys
    are normalised: lower-case, underscores removed, so ``createdAt``,
    ``created_at`` and ``CREATEDAT`` all resolve the same) and override
    ``_apply_filters`` for entity-specific filters.
    """

    model: ClassVar[type]
    sortable_columns: ClassVar[dict[str, str]] = {
        "name": "name",
        "createdat": "created_at",
        "updatedat": "updated_at",
    }

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_all(self) -> list[ModelT]:
        result = await self.session.execute(select(self.model).order_by(self.model.name))
        return list(result.scalars().all())

    async def get_by_id(self, entity_id: uuid.UUID) -> ModelT | None:
        return await self.session.get(self.model, entity_id)

    async def get_by_ids(self, ids: Iterable[uuid.UUID]) -> list[ModelT]:
        ids = list(ids)
        if not ids:
            return []
        result = await self.session.execute(select(self.model).where(self.model.id.in_(ids)))
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> ModelT | None:
        """Case-insensitive exact match on ``name``."""
        if not name or not name.strip():
            return None
        q = select(self.model).where(func.lower(self.model.name) == name.lower())
        result = await self.session.execute(q)
        return result.scalars().first()

    async def count(self, **filters: Any) -> int:
        q = select(func.count()).select_from(self.model)
        for field, value in filters.items():
            q = q.where(getattr(self.model, field) == value)
        return (await self.session.execute(q)).scalar_one()

    async def get_by_filter_with_count(self, query: ListQuery) -> tuple[list[ModelT], int]:
        """
        Return one page of rows matching *query* plus the total match count.

        Two statements are issued: a COUNT over the filtered set and the
        page SELECT with ORDER BY / OFFSET / LIMIT.
        """
        base = self._apply_filters(select(self.model), query)

        count_q = select(func.count()).select_from(base.subquery())
        total: int = (await self.session.execute(count_q)).scalar_one()

        page_q = (
            base.order_by(*self._order_by(query))
            .offset(query.offset)
            .limit(query.page_size)
        )
        result = await self.session.execute(page_q)
        return list(result.scalars().all()), total

    def _apply_filters(self, stmt, query: ListQuery):
        if query.search and query.search.strip():
            term = query.search.strip().lower()
            stmt = stmt.where(func.lower(self.model.name).contains(term, autoescape=True))
        return stmt

    def _order_by(self, query: ListQuery) -> list:
        """
        Resolve the ORDER BY clause.

        Unknown or missing ``sort_by`` falls back to name ascending.  The
        primary key is appended so pages are stable when the sort column
        has ties.
        """
        key = (query.sort_by or "").replace("_", "").lower()
        column_name = self.sortable_columns.get(key)
        if column_name is None:
            return [asc(self.model.name), asc(self.model.id)]
        column = getattr(self.model, column_name)
        direction = desc if query.sort_descending else asc
        return [direction(column), asc(self.model.id)]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def update(self, entity: ModelT) -> ModelT:
        if entity not in self.session:
            entity = await self.session.merge(entity)
        await self.session.flush()
        return entity

    async def delete(self, entity_id: uuid.UUID) -> None:
        """Delete the row with *entity_id*; no-op when it does not exist."""
        entity = await self.session.get(self.model, entity_id)
        if entity is None:
            return
        await self.session.delete(entity)
        await self.session.flush()

    async def save(self) -> None:
        """Commit pending writes.  A failed commit is rolled back and re-raised."""
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def discard(self) -> None:
        """Roll back pending writes so a later commit cannot persist them."""
        await self.session.rollback()
