"""Seed the catalogue with sample coffees, categories and ingredients."""
import argparse
import asyncio
import time
import uuid
from datetime import datetime, timezone

from app.database import Base, async_session, engine
from app.models import Category, Coffee, Ingredient
from app.repositories import UnitOfWork

COFFEES = ["Americano", "Latte", "Cappuccino", "Flat White", "Cortado", "Macchiato", "Mocha", "Affogato"]
CATEGORIES = {
    "Espresso": "Short, concentrated shots",
    "Milk Based": "Espresso topped with steamed or foamed milk",
    "Filter": "Drip, pour-over and batch brew",
    "Cold": "Iced and cold-brew drinks",
}
INGREDIENTS = {
    "Whole Milk": True,
    "Oat Milk": True,
    "Vanilla Syrup": True,
    "Caramel Sauce": True,
    "Cocoa Powder": True,
    "Hazelnut Syrup": False,
}


async def seed(reset: bool = False, extra: int = 0):
    start = time.perf_counter()

    if reset:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)

    now = datetime.now(timezone.utc)

    def stamp(entity):
        entity.id = uuid.uuid4()
        entity.created_at = now
        entity.updated_at = now
        return entity

    # All three aggregates go in together or not at all.
    async with async_session() as session:
        async with UnitOfWork(session) as uow:
            for name in COFFEES:
                if await uow.coffees.get_by_name(name) is None:
                    await uow.coffees.create(stamp(Coffee(name=name)))
            for i in range(extra):
                name = f"House Blend {i:04d}"
                if await uow.coffees.get_by_name(name) is None:
                    await uow.coffees.create(stamp(Coffee(name=name)))

            for name, description in CATEGORIES.items():
                if await uow.categories.get_by_name(name) is None:
                    await uow.categories.create(stamp(Category(name=name, description=description)))

            for name, active in INGREDIENTS.items():
                if await uow.ingredients.get_by_name(name) is None:
                    await uow.ingredients.create(stamp(Ingredient(name=name, is_active=active)))

            totals = (
                await uow.coffees.count(),
                await uow.categories.count(),
                await uow.ingredients.count(),
            )

    elapsed = time.perf_counter() - start
    print(f"Seeding complete in {elapsed:.1f}s")
    print(f"  Coffees: {totals[0]}")
    print(f"  Categories: {totals[1]}")
    print(f"  Ingredients: {totals[2]}")


def main():
    parser = argparse.ArgumentParser(description="Seed the coffee catalogue")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate all tables first")
    parser.add_argument("--extra", type=int, default=0, help="Additional generated coffees")
    args = parser.parse_args()
    asyncio.run(seed(reset=args.reset, extra=args.extra))


if __name__ == "__main__":
    main()
