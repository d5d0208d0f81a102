"""
Tests for the Alembic migrations and the usermgmt-migrate CLI.
"""

import asyncio
from datetime import date

import pytest
from alembic import command
from click.testing import CliRunner
from sqlalchemy import delete, func, inspect, select
from sqlalchemy.exc import IntegrityError

from usermgmt import config as config_module
from usermgmt.config import Settings
from usermgmt.database import Database
from usermgmt.database import cli as migrate_cli
from usermgmt.dbmodels import Cities, Users

pytestmark = pytest.mark.integration


@pytest.fixture
def alembic_config(database_url, monkeypatch):
    monkeypatch.setenv("USERMGMT_DATABASE_URL", database_url)
    return migrate_cli.get_alembic_config()


def inspect_schema(database_url: str) -> dict:
    async def run():
        database = Database(database_url)
        try:
            async with database.engine.connect() as conn:
                return await conn.run_sync(describe_tables)
        finally:
            await database.dispose()

    return asyncio.run(run())


def describe_tables(sync_conn) -> dict:
    inspector = inspect(sync_conn)
    return {
        table: {
            "columns": {column["name"] for column in inspector.get_columns(table)},
            "indexes": {index["name"] for index in inspector.get_indexes(table)},
        }
        for table in inspector.get_table_names()
    }


def test_upgrade_creates_schema_matching_models(alembic_config, database_url):
    command.upgrade(alembic_config, "head")

    schema = inspect_schema(database_url)

    assert {"cities", "users", "alembic_version"} <= set(schema)
    for model in (Cities, Users):
        assert schema[model.__tablename__]["columns"] == set(model.__table__.columns.keys())
        assert schema[model.__tablename__]["indexes"] == {
            index.name for index in model.__table__.indexes
        }


def test_migrated_constraints(alembic_config, database_url):
    command.upgrade(alembic_config, "head")

    async def exercise():
        database = Database(database_url)
        try:
            async with database.session() as session:
                session.add(Cities(name="HAIFA"))

            async with database.session() as session:
                city_id = await session.scalar(select(Cities.id))
                session.add(
                    Users(
                        first_name="John",
                        last_name="Doe",
                        birth_date=date(1990, 1, 1),
                        city_id=city_id,
                    )
                )

            with pytest.raises(IntegrityError):
                async with database.session() as session:
                    session.add(Cities(name="HAIFA"))

            with pytest.raises(IntegrityError):
                async with database.session() as session:
                    await session.execute(delete(Cities))

            async with database.session() as session:
                return await session.scalar(select(func.count()).select_from(Cities))
        finally:
            await database.dispose()

    assert asyncio.run(exercise()) == 1


def test_downgrade_to_base_drops_tables(alembic_config, database_url):
    command.upgrade(alembic_config, "head")
    command.downgrade(alembic_config, "base")

    schema = inspect_schema(database_url)

    assert "cities" not in schema
    assert "users" not in schema


def test_cli_upgrade_seeds_cities(database_url, monkeypatch):
    monkeypatch.setenv("USERMGMT_DATABASE_URL", database_url)
    monkeypatch.setattr(config_module, "settings", Settings(database_url=database_url))
    runner = CliRunner()

    result = runner.invoke(migrate_cli.main, ["upgrade", "--seed"])
    assert result.exit_code == 0, result.output

    current = runner.invoke(migrate_cli.main, ["current"])
    assert current.exit_code == 0, current.output

    async def count_cities():
        database = Database(database_url)
        try:
            async with database.session() as session:
                return await session.scalar(select(func.count()).select_from(Cities))
        finally:
            await database.dispose()

    assert asyncio.run(count_cities()) == 5
