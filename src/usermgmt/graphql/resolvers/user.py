from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import strawberry
from graphql import GraphQLError

from ...errors import ErrorCode, UserServiceError
from ...logging import get_logger
from ...users.service import CreateUserData, UpdateUserData, UserService
from ..types.user import User

if TYPE_CHECKING:
    from ..mutations.root import CreateUserInput, UpdateUserInput

logger = get_logger(__name__)

HEALTH_MESSAGE = "Server is running and healthy!"


def get_user_service(info: strawberry.Info) -> UserService:
    service = info.context.get("users")
    if service is None:
        raise RuntimeError("User service missing from GraphQL context")
    return service


@contextmanager
def api_errors(failure_message: str, **log_context: Any) -> Iterator[None]:
    """Surface domain errors with their code and mask everything else."""
    try:
        yield
    except UserServiceError as e:
        raise GraphQLError(e.message, extensions={"code": e.code.value}) from e
    except GraphQLError:
        raise
    except Exception as e:
        logger.exception(failure_message, error=str(e), **log_context)
        raise GraphQLError(
            failure_message, extensions={"code": ErrorCode.INTERNAL_ERROR.value}
        ) from e


# Query resolvers
async def resolve_users(info: strawberry.Info) -> list[User]:
    with api_errors("Failed to fetch users"):
        records = await get_user_service(info).list_users()
        return [User.from_record(record) for record in records]


async def resolve_user_by_id(info: strawberry.Info, id: strawberry.ID) -> User | None:
    with api_errors("Failed to fetch user", user_id=str(id)):
        record = await get_user_service(info).get_user(id)
        return User.from_record(record)


def resolve_health() -> str:
    return HEALTH_MESSAGE


# Mutation resolvers
async def create_user(info: strawberry.Info, data: CreateUserInput) -> User:
    with api_errors("Failed to create user"):
        record = await get_user_service(info).create_user(
            CreateUserData(
                first_name=data.first_name,
                last_name=data.last_name,
                birth_date=data.birth_date,
                city=data.city,
            )
        )
        return User.from_record(record)


async def update_user(info: strawberry.Info, id: strawberry.ID, data: UpdateUserInput) -> User:
    with api_errors("Failed to update user", user_id=str(id)):
        record = await get_user_service(info).update_user(
            id,
            UpdateUserData(
                first_name=data.first_name,
                last_name=data.last_name,
                birth_date=data.birth_date,
                city=data.city,
            ),
        )
        return User.from_record(record)


async def delete_user(info: strawberry.Info, id: strawberry.ID) -> bool:
    with api_errors("Failed to delete user", user_id=str(id)):
        return await get_user_service(info).delete_user(id)
