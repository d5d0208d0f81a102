"""Repository for users and the city lookup table."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..database.connection import Database
from ..dbmodels import Cities, Users
from ..errors import InternalError
from .models import CityRecord, NewUser, UserChanges, UserRecord


class UserRepository(Protocol):
    """Storage operations the user service depends on."""

    async def list_users(self) -> list[UserRecord]: ...

    async def get_user(self, user_id: int) -> UserRecord | None: ...

    async def find_city(self, name: str) -> CityRecord | None: ...

    async def list_cities(self) -> list[CityRecord]: ...

    async def add_user(self, new_user: NewUser) -> UserRecord: ...

    async def update_user(self, user_id: int, changes: UserChanges) -> UserRecord | None: ...

    async def delete_user(self, user_id: int) -> bool: ...


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps returned by drivers without tz support."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_user_record(row: Users) -> UserRecord:
    return UserRecord(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        birth_date=row.birth_date,
        city=row.city.name,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def next_updated_at(previous: datetime | None) -> datetime:
    """Current time, nudged forward so ``updated_at`` always advances."""
    now = datetime.now(UTC)
    if previous is None:
        return now
    floor = as_utc(previous) + timedelta(microseconds=1)
    return max(now, floor)


class SqlUserRepository:
    """SQLAlchemy-backed ``UserRepository``; one transaction per call."""

    def __init__(self, database: Database):
        self._database = database

    @staticmethod
    async def _load_user(session: AsyncSession, user_id: int) -> Users | None:
        stmt = (
            select(Users)
            .where(Users.id == user_id)
            .options(selectinload(Users.city))
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_users(self) -> list[UserRecord]:
        async with self._database.session() as session:
            stmt = (
                select(Users)
                .options(selectinload(Users.city))
                .order_by(Users.created_at.desc(), Users.id.desc())
            )
            result = await session.execute(stmt)
            return [to_user_record(row) for row in result.scalars().all()]

    async def get_user(self, user_id: int) -> UserRecord | None:
        async with self._database.session() as session:
            row = await self._load_user(session, user_id)
            return to_user_record(row) if row else None

    async def find_city(self, name: str) -> CityRecord | None:
        async with self._database.session() as session:
            result = await session.execute(select(Cities).where(Cities.name == name))
            city = result.scalar_one_or_none()
            return CityRecord.model_validate(city) if city else None

    async def list_cities(self) -> list[CityRecord]:
        async with self._database.session() as session:
            result = await session.execute(select(Cities).order_by(Cities.id))
            return [CityRecord.model_validate(city) for city in result.scalars().all()]

    async def add_user(self, new_user: NewUser) -> UserRecord:
        async with self._database.session() as session:
            now = datetime.now(UTC)
            row = Users(
                first_name=new_user.first_name,
                last_name=new_user.last_name,
                birth_date=new_user.birth_date,
                city_id=new_user.city_id,
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            await session.flush()

            # Re-read so the caller sees what the store holds, city included
            saved = await self._load_user(session, row.id)
            if saved is None:
                raise InternalError("Saved user could not be read back")
            return to_user_record(saved)

    async def update_user(self, user_id: int, changes: UserChanges) -> UserRecord | None:
        async with self._database.session() as session:
            row = await self._load_user(session, user_id)
            if row is None:
                return None

            for field, value in changes.model_dump(exclude_none=True).items():
                setattr(row, field, value)
            row.updated_at = next_updated_at(row.updated_at)
            await session.flush()

            saved = await self._load_user(session, user_id)
            if saved is None:
                raise InternalError("Saved user could not be read back")
            return to_user_record(saved)

    async def delete_user(self, user_id: int) -> bool:
        async with self._database.session() as session:
            row = await session.get(Users, user_id)
            if row is None:
                return False
            await session.delete(row)
            await session.flush()
            return True
