"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.user import CityEnum, User


# Input types for mutations
@strawberry.input
class CreateUserInput:
    """Input for creating a new user."""

    first_name: str
    last_name: str
    birth_date: str = strawberry.field(description="Date in YYYY-MM-DD format")
    city: CityEnum


@strawberry.input
class UpdateUserInput:
    """Input for updating a user; omitted fields keep their current value."""

    first_name: str | None = strawberry.UNSET
    last_name: str | None = strawberry.UNSET
    birth_date: str | None = strawberry.field(
        default=strawberry.UNSET, description="Date in YYYY-MM-DD format"
    )
    city: CityEnum | None = strawberry.UNSET


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="createUser")
    async def create_user(self, info: strawberry.Info, data: CreateUserInput) -> User:
        """Create a new user."""
        from ..resolvers.user import create_user

        return await create_user(info, data)

    @strawberry.mutation(name="updateUser")
    async def update_user(
        self, info: strawberry.Info, id: strawberry.ID, data: UpdateUserInput
    ) -> User:
        """Update an existing user."""
        from ..resolvers.user import update_user

        return await update_user(info, id, data)

    @strawberry.mutation(name="deleteUser")
    async def delete_user(self, info: strawberry.Info, id: strawberry.ID) -> bool:
        """Delete a user."""
        from ..resolvers.user import delete_user

        return await delete_user(info, id)
