"""User operations: validation, city resolution and partial updates."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any

from strawberry import UNSET

from ..errors import InvalidInputError, NotFoundError
from ..logging import get_logger
from ..validation import parse_birth_date, validate_names
from .models import CityRecord, NewUser, UserChanges, UserRecord
from .repository import UserRepository

logger = get_logger(__name__)

USER_ID_PATTERN = re.compile(r"-?\d+", re.ASCII)

# Range of the INTEGER primary key
MIN_USER_ID = -(2**31)
MAX_USER_ID = 2**31 - 1


@dataclass
class CreateUserData:
    first_name: Any
    last_name: Any
    birth_date: Any
    city: Any


@dataclass
class UpdateUserData:
    """Fields left ``UNSET`` are not changed; an explicit ``None`` is validated."""

    first_name: Any = UNSET
    last_name: Any = UNSET
    birth_date: Any = UNSET
    city: Any = UNSET


def parse_user_id(user_id: int | str) -> int:
    """Turn an API id into a row id; anything that cannot name a row is not found."""
    text = str(user_id)
    if USER_ID_PATTERN.fullmatch(text):
        row_id = int(text)
        if MIN_USER_ID <= row_id <= MAX_USER_ID:
            return row_id
    raise NotFoundError(f"User with ID {user_id} not found")
class UserService:
    """The five user operations over an injected ``UserRepository``."""

    def __init__(self, repository: UserRepository, *, today: date | None = None):
        self.repository = repository
        self._today = today

    async def _resolve_city(self, name: Any) -> CityRecord:
        if name is None:
            raise InvalidInputError("City null not found")
        city_name = getattr(name, "value", name)
        city = await self.repository.find_city(str(city_name))
        if city is None:
            raise InvalidInputError(f"City {city_name} not found")
        return city

    async def list_users(self) -> list[UserRecord]:
        return await self.repository.list_users()

    async def get_user(self, user_id: int | str) -> UserRecord:
        row_id = parse_user_id(user_id)
        user = await self.repository.get_user(row_id)
        if user is None:
            raise NotFoundError(f"User with ID {user_id} not found")
        return user

    async def create_user(self, data: CreateUserData) -> UserRecord:
        birth_date = parse_birth_date(data.birth_date, today=self._today)
        city = await self._resolve_city(data.city)
        names = validate_names(data.first_name, data.last_name, required=True)

        user = await self.repository.add_user(
            NewUser(
                first_name=names["first_name"],
                last_name=names["last_name"],
                birth_date=birth_date,
                city_id=city.id,
            )
        )
        logger.info("Created user", user_id=user.id, city=user.city)
        return user

    async def update_user(self, user_id: int | str, data: UpdateUserData) -> UserRecord:
        row_id = parse_user_id(user_id)
        if await self.repository.get_user(row_id) is None:
            raise NotFoundError(f"User with ID {user_id} not found")

        changes: dict[str, Any] = {}
        if data.birth_date is not UNSET:
            changes["birth_date"] = parse_birth_date(data.birth_date, today=self._today)
        if data.city is not UNSET:
            changes["city_id"] = (await self._resolve_city(data.city)).id
        changes.update(validate_names(data.first_name, data.last_name))

        user = await self.repository.update_user(row_id, UserChanges(**changes))
        if user is None:
            # Deleted between the existence check and the write
            raise NotFoundError(f"User with ID {user_id} not found")

        logger.info("Updated user", user_id=user.id, fields=sorted(changes))
        return user

    async def delete_user(self, user_id: int | str) -> bool:
        row_id = parse_user_id(user_id)
        if not await self.repository.delete_user(row_id):
            raise NotFoundError(f"User with ID {user_id} not found")

        logger.info("Deleted user", user_id=row_id)
        return True
