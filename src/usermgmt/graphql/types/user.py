"""
User GraphQL type definitions
"""

from __future__ import annotations

import strawberry

from ...users.models import CityName, UserRecord

CityEnum = strawberry.enum(CityName, name="CityEnum", description="Cities a user can live in")


@strawberry.type
class User:
    """User type for GraphQL API."""

    id: strawberry.ID
    first_name: str
    last_name: str
    birth_date: str
    city: CityEnum
    created_at: str
    updated_at: str

    @classmethod
    def from_record(cls, record: UserRecord) -> User:
        return cls(
            id=strawberry.ID(str(record.id)),
            first_name=record.first_name,
            last_name=record.last_name,
            birth_date=record.birth_date.isoformat(),
            city=CityName(record.city),
            created_at=record.created_at.isoformat(),
            updated_at=record.updated_at.isoformat(),
        )
