"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

from usermgmt.database import Database
from usermgmt.database.seed_data import seed_initial_data
from usermgmt.users import CreateUserData, SqlUserRepository, UserService


@pytest.fixture(scope="function")
def database_url(tmp_path: Path) -> str:
    """URL of a throwaway SQLite database file for this test."""
    return f"sqlite:///{tmp_path / 'usermgmt-test.db'}"


@pytest_asyncio.fixture(scope="function")
async def database(database_url: str) -> AsyncGenerator[Database, None]:
    """Database handle with the schema created from the ORM metadata."""
    db = Database(database_url)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture(scope="function")
async def seeded_database(database: Database) -> Database:
    """Database with the fixed cities already seeded."""
    await seed_initial_data(database)
    return database


@pytest.fixture
def repository(seeded_database: Database) -> SqlUserRepository:
    return SqlUserRepository(seeded_database)


@pytest.fixture
def service(repository: SqlUserRepository) -> UserService:
    return UserService(repository)


@pytest.fixture
def john_doe() -> CreateUserData:
    return CreateUserData(
        first_name="John", last_name="Doe", birth_date="1990-01-01", city="TEL_AVIV"
    )


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
