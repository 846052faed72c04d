"""
Generic catalogue service: validation, uniqueness, cache-aside reads and
cache invalidation on writes, with every outcome returned as a ``Result``.

Design notes
------------
- Failure checks run in a fixed order and short-circuit: id validity,
  field validation, existence, name uniqueness.  Id and field checks
  never touch the repository.
- Reads go through the cache-aside pattern (cache, then repository on a
  miss, then populate).  Detail keys are per id; list keys encode every
  query parameter so distinct query shapes never collide.
- Every write is committed through ``repository.save()`` before any
  cache key is touched.  Only then are the entity's list keys (and, for
  update/delete, the detail key) dropped, so a read racing the write
  cannot re-cache the old row after invalidation.  A write that fails,
  commit included, is rolled back and reported as INTERNAL_ERROR with
  the cache left alone.
- Unexpected errors (database, driver) are logged with context and
  surfaced as INTERNAL_ERROR; the technical message never reaches the
  caller.  Only ``Exception`` is caught, so request cancellation still
  propagates.
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from app.cache import CacheBackend
from app.config import settings
from app.repositories.base import SQLAlchemyRepository
from app.result import ErrorCode, Result, failure, success
from app.schemas import ListQuery, PagedResponse
from app.validators import EntityValidator

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
ResponseT = TypeVar("ResponseT", bound=BaseModel)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class EntityMapper(Generic[ModelT, ResponseT]):
    """
    Converts between request bodies, ORM rows and response schemas for
    one entity.  *fields* lists the client-writable attributes.
    """

    def __init__(self, model: type[ModelT], response_schema: type[ResponseT], fields: tuple[str, ...]):
        self.model = model
        self.response_schema = response_schema
        self.fields = fields

    def to_entity(self, data: BaseModel) -> ModelT:
        return self.model(**{f: getattr(data, f) for f in self.fields})

    def apply(self, entity: ModelT, data: BaseModel) -> None:
        for field in self.fields:
            setattr(entity, field, getattr(data, field))

    def to_response(self, entity: ModelT) -> ResponseT:
        return self.response_schema.model_validate(entity)


class EntityService(Generic[ModelT, ResponseT]):
    """
    CRUD service for one catalogue entity.

    Collaborators are passed in explicitly; nothing is resolved from
    module state.  ``entity`` names the cache namespace and ``label``
    is used in messages.
    """

    entity: str = "entity"
    label: str = "Entity"

    def __init__(
        self,
        repository: SQLAlchemyRepository,
        cache: CacheBackend,
        validator: EntityValidator,
        mapper: EntityMapper[ModelT, ResponseT],
        list_ttl: int = settings.CACHE_TTL_LIST,
        detail_ttl: int = settings.CACHE_TTL_DETAIL,
    ) -> None:
        self.repository = repository
        self.cache = cache
        self.validator = validator
        self.mapper = mapper
        self.list_ttl = list_ttl
        self.detail_ttl = detail_ttl
        self.paged_schema = PagedResponse[mapper.response_schema]

    # ------------------------------------------------------------------
    # Cache keys
    # ------------------------------------------------------------------

    def detail_key(self, entity_id: uuid.UUID) -> str:
        return self.cache.build_key(self.entity, str(entity_id))

    def list_key(self, query: ListQuery) -> str:
        return self.cache.build_key(self.entity, "list", **query.model_dump())

    async def invalidate_list_caches(self) -> None:
        pattern = self.cache.build_key(self.entity, "list") + ":*"
        removed = await self.cache.remove_pattern(pattern)
        logger.debug("Invalidated %d %s list cache entries", removed, self.entity)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _parse_id(self, entity_id: Any) -> uuid.UUID | None:
        """Return a UUID for *entity_id*, or None when malformed or nil."""
        if isinstance(entity_id, uuid.UUID):
            parsed = entity_id
        else:
            try:
                parsed = uuid.UUID(str(entity_id))
            except (TypeError, ValueError):
                return None
        return None if parsed.int == 0 else parsed

    async def _discard(self) -> None:
        """Drop the failed write's pending changes; a broken session is only logged."""
        try:
            await self.repository.discard()
        except Exception:
            logger.exception("Rollback of failed %s write also failed", self.entity)

    def _invalid_id(self) -> Result:
        return failure(f"Invalid {self.entity} ID", ErrorCode.INVALID_ID)

    def _not_found(self, entity_id: uuid.UUID) -> Result:
        return failure(f"{self.label} '{entity_id}' not found", ErrorCode.NOT_FOUND)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def get_all(self, query: ListQuery) -> Result[PagedResponse[ResponseT]]:
        errors = self.validator.validate_query(query)
        if errors:
            return failure("; ".join(errors), ErrorCode.VALIDATION_ERROR)

        try:
            cache_key = self.list_key(query)
            cached = await self.cache.get(cache_key)
            if cached is not None:
                logger.debug("Cache hit for %s list with key %s", self.entity, cache_key)
                return success(self.paged_schema.model_validate(cached))

            entities, total = await self.repository.get_by_filter_with_count(query)
            page = self.paged_schema(
                items=[self.mapper.to_response(e) for e in entities],
                total_count=total,
                page=query.page,
                page_size=query.page_size,
            )
            await self.cache.set(cache_key, page.model_dump(mode="json"), ttl=self.list_ttl)
            return success(page)
        except Exception:
            logger.exception("Error retrieving %s list with query %r", self.entity, query)
            return failure(
                f"An error occurred while retrieving the {self.entity} list",
                ErrorCode.INTERNAL_ERROR,
            )

    async def get_by_id(self, entity_id: Any) -> Result[ResponseT]:
        parsed = self._parse_id(entity_id)
        if parsed is None:
            return self._invalid_id()

        try:
            cache_key = self.detail_key(parsed)
            cached = await self.cache.get(cache_key)
            if cached is not None:
                logger.debug("Cache hit for %s %s", self.entity, parsed)
                return success(self.mapper.response_schema.model_validate(cached))

            entity = await self.repository.get_by_id(parsed)
            if entity is None:
                logger.warning("%s not found: %s", self.label, parsed)
                return self._not_found(parsed)

            response = self.mapper.to_response(entity)
            await self.cache.set(cache_key, response.model_dump(mode="json"), ttl=self.detail_ttl)
            return success(response)
        except Exception:
            logger.exception("Error retrieving %s %s", self.entity, parsed)
            return failure(
                f"An error occurred while retrieving the {self.entity}",
                ErrorCode.INTERNAL_ERROR,
            )

    async def create(self, data: BaseModel) -> Result[ResponseT]:
        errors = self.validator.validate(data)
        if errors:
            return failure("; ".join(errors), ErrorCode.VALIDATION_ERROR)

        try:
            existing = await self.repository.get_by_name(data.name)
            if existing is not None:
                return failure(
                    f"{self.label} with name '{data.name}' already exists",
                    ErrorCode.DUPLICATE_NAME,
                )

            entity = self.mapper.to_entity(data)
            now = utcnow()
            entity.id = uuid.uuid4()
            entity.created_at = now
            entity.updated_at = now

            created = await self.repository.create(entity)
            await self.repository.save()
            response = self.mapper.to_response(created)
            logger.info("Created %s %s with name %r", self.entity, created.id, created.name)

            await self.invalidate_list_caches()
            return success(response)
        except Exception:
            logger.exception("Error creating %s with name %r", self.entity, data.name)
            await self._discard()
            return failure(
                f"An error occurred while creating the {self.entity}",
                ErrorCode.INTERNAL_ERROR,
            )

    async def update(self, entity_id: Any, data: BaseModel) -> Result[ResponseT]:
        parsed = self._parse_id(entity_id)
        if parsed is None:
            return self._invalid_id()

        errors = self.validator.validate(data)
        if errors:
            return failure("; ".join(errors), ErrorCode.VALIDATION_ERROR)

        try:
            existing = await self.repository.get_by_id(parsed)
            if existing is None:
                return self._not_found(parsed)

            duplicate = await self.repository.get_by_name(data.name)
            if duplicate is not None and duplicate.id != parsed:
                return failure(
                    f"Another {self.entity} with name '{data.name}' already exists",
                    ErrorCode.DUPLICATE_NAME,
                )

            self.mapper.apply(existing, data)
            # updated_at must strictly advance even when two writes land
            # within the clock's resolution.
            now = utcnow()
            previous = _as_utc(existing.updated_at)
            if previous is not None and now <= previous:
                now = previous + timedelta(microseconds=1)
            existing.updated_at = now

            updated = await self.repository.update(existing)
            await self.repository.save()
            response = self.mapper.to_response(updated)

            await self.cache.remove(self.detail_key(parsed))
            await self.invalidate_list_caches()

            logger.info("Updated %s %s", self.entity, parsed)
            return success(response)
        except Exception:
            logger.exception("Error updating %s %s", self.entity, parsed)
            await self._discard()
            return failure(
                f"An error occurred while updating the {self.entity}",
                ErrorCode.INTERNAL_ERROR,
            )

    async def delete(self, entity_id: Any) -> Result[None]:
        parsed = self._parse_id(entity_id)
        if parsed is None:
            return self._invalid_id()

        try:
            existing = await self.repository.get_by_id(parsed)
            if existing is None:
                return self._not_found(parsed)

            await self.repository.delete(parsed)
            await self.repository.save()

            await self.cache.remove(self.detail_key(parsed))
            await self.invalidate_list_caches()

            logger.info("Deleted %s %s", self.entity, parsed)
            return success()
        except Exception:
            logger.exception("Error deleting %s %s", self.entity, parsed)
            await self._discard()
            return failure(
                f"An error occurred while deleting the {self.entity}",
                ErrorCode.INTERNAL_ERROR,
            )
