"""
Seed functions for the fixed city lookup table.

Seeding is idempotent: names that already exist are skipped, and a concurrent
seeder inserting the same name first is tolerated.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Cities
from ..logging import get_logger
from ..users.models import CityName
from .connection import Database

logger = get_logger(__name__)


async def ensure_city(db: AsyncSession, name: str) -> bool:
    """
    Ensure a city row exists.

    Returns:
        True if the row was inserted by this call, False if it already existed
    """
    result = await db.execute(select(Cities.id).where(Cities.name == name))
    if result.scalar_one_or_none() is not None:
        logger.debug("City already exists", city=name)
        return False

    db.add(Cities(name=name))
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        # Another seeder inserted it between our check and our insert
        logger.debug("City inserted concurrently", city=name)
        return False

    logger.info("Seeded city", city=name)
    return True


async def seed_cities(db: AsyncSession, names: Iterable[str] | None = None) -> list[str]:
    """
    Insert any missing cities.

    Args:
        db: Database session
        names: City names to seed (defaults to every ``CityName``)

    Returns:
        Names inserted by this call
    """
    if names is None:
        names = [city.value for city in CityName]

    return [name for name in names if await ensure_city(db, name)]


async def seed_initial_data(database: Database) -> list[str]:
    """Seed all initial data required for the application."""
    logger.info("Starting database seeding")
    async with database.session() as db:
        created = await seed_cities(db)
    logger.info("Database seeding completed", created=created)
    return created
