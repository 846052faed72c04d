"""UnitOfWork transaction scope."""
import uuid
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from app.models import Category, Coffee, Ingredient
from app.repositories import UnitOfWork


def _new(model, **fields):
    now = datetime.now(timezone.utc)
    return model(id=uuid.uuid4(), created_at=now, updated_at=now, **fields)


async def _counts(session_factory) -> tuple[int, int, int]:
    async with session_factory() as session:
        uow = UnitOfWork(session)
        return (
            await uow.coffees.count(),
            await uow.categories.count(),
            await uow.ingredients.count(),
        )


@pytest.mark.asyncio
async def test_commit_on_clean_exit_spans_repositories(session_factory):
    async with session_factory() as session:
        async with UnitOfWork(session) as uow:
            await uow.coffees.create(_new(Coffee, name="Latte"))
            await uow.categories.create(_new(Category, name="Milk Based"))
            await uow.ingredients.create(_new(Ingredient, name="Oat Milk", is_active=True))
        assert not uow.in_transaction

    assert await _counts(session_factory) == (1, 1, 1)


@pytest.mark.asyncio
async def test_exception_rolls_back_everything(session_factory):
    with pytest.raises(RuntimeError):
        async with session_factory() as session:
            async with UnitOfWork(session) as uow:
                await uow.coffees.create(_new(Coffee, name="Latte"))
                await uow.categories.create(_new(Category, name="Milk Based"))
                raise RuntimeError("abort")

    assert await _counts(session_factory) == (0, 0, 0)


@pytest.mark.asyncio
async def test_explicit_rollback(session_factory):
    async with session_factory() as session:
        uow = UnitOfWork(session)
        await uow.begin()
        await uow.coffees.create(_new(Coffee, name="Latte"))
        await uow.rollback()
        assert not uow.in_transaction
        await uow.rollback()  # nothing in progress: no-op

    assert await _counts(session_factory) == (0, 0, 0)


@pytest.mark.asyncio
async def test_begin_twice_is_rejected(session_factory):
    async with session_factory() as session:
        uow = UnitOfWork(session)
        await uow.begin()
        with pytest.raises(RuntimeError, match="already in progress"):
            await uow.begin()
        await uow.rollback()


@pytest.mark.asyncio
async def test_commit_without_begin_is_rejected(session_factory):
    async with session_factory() as session:
        with pytest.raises(RuntimeError, match="No transaction"):
            await UnitOfWork(session).commit()


@pytest.mark.asyncio
async def test_failed_commit_rolls_back_and_reraises(session_factory):
    async with session_factory() as session:
        uow = UnitOfWork(session)
        await uow.begin()
        session.add(_new(Category, name="Filter"))
        # Same name in another case: the lower(name) unique index rejects it at flush.
        session.add(_new(Category, name="FILTER"))
        with pytest.raises(IntegrityError):
            await uow.commit()
        assert not uow.in_transaction

    assert await _counts(session_factory) == (0, 0, 0)
