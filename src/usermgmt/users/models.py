"""Plain data records for cities and users, independent of the ORM."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class CityName(str, Enum):
    """The closed set of cities a user can live in."""

    TEL_AVIV = "TEL_AVIV"
    JERUSALEM = "JERUSALEM"
    HAIFA = "HAIFA"
    BEER_SHEVA = "BEER_SHEVA"
    NETANYA = "NETANYA"


class CityRecord(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    name: str


class UserRecord(BaseModel):
    """A stored user with its city resolved to a name."""

    model_config = ConfigDict(frozen=True)

    id: int
    first_name: str
    last_name: str
    birth_date: date
    city: str
    created_at: datetime
    updated_at: datetime


class NewUser(BaseModel):
    """Validated input for a user that does not exist yet."""

    model_config = ConfigDict(frozen=True)

    first_name: str
    last_name: str
    birth_date: date
    city_id: int


class UserChanges(BaseModel):
    """Validated partial update; ``None`` means leave the field unchanged."""

    model_config = ConfigDict(frozen=True)

    first_name: str | None = None
    last_name: str | None = None
    birth_date: date | None = None
    city_id: int | None = None

    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())
