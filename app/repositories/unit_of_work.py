import logging

from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction

from app.repositories.catalog import CategoryRepository, CoffeeRepository, IngredientRepository

logger = logging.getLogger(__name__)


class UnitOfWork:
    """
    Explicit transaction scope spanning several repositories.

    Single-entity CRUD does not need it (the service commits each write
    through ``repository.save()``); it is for operations that must change
    more than one aggregate atomically::

        async with UnitOfWork(session) as uow:
            await uow.categories.create(Category(...))
            await uow.ingredients.create(Ingredient(...))

    Leaving the block normally commits; leaving it with an exception
    rolls back and re-raises.  A failed commit is rolled back before the
    error propagates.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.coffees = CoffeeRepository(session)
        self.categories = CategoryRepository(session)
        self.ingredients = IngredientRepository(session)
        self._transaction: AsyncSessionTransaction | None = None

    @property
    def in_transaction(self) -> bool:
        return self._transaction is not None

    async def begin(self) -> None:
        if self._transaction is not None:
            raise RuntimeError("A transaction is already in progress")
        self._transaction = await self.session.begin()

    async def commit(self) -> None:
        if self._transaction is None:
            raise RuntimeError("No transaction in progress")
        try:
            await self.session.flush()
            await self._transaction.commit()
        except Exception:
            logger.exception("Commit failed; rolling back")
            await self.rollback()
            raise
        finally:
            self._transaction = None

    async def rollback(self) -> None:
        if self._transaction is None:
            return
        transaction, self._transaction = self._transaction, None
        await transaction.rollback()

    async def __aenter__(self) -> "UnitOfWork":
        await self.begin()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            await self.rollback()
        elif self._transaction is not None:
            await self.commit()
