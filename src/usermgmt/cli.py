#!/usr/bin/env python3
"""
Main CLI entry point for the usermgmt backend.
"""

import asyncio
import os
import sys

import click
import uvicorn

from usermgmt import __version__
from usermgmt.config import settings
from usermgmt.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="usermgmt")
def cli() -> None:
    """usermgmt CLI - run the API server and manage seed data."""
    pass


@cli.command()
@click.option("--host", default=settings.api_host, help="Host to bind to")
@click.option("--port", default=settings.api_port, type=int, help="Port to bind to")
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the usermgmt API server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info("Starting usermgmt API server", host=host, port=port, reload=reload)

    # The factory re-reads settings from the environment, including under --reload
    if log_level == "debug":
        os.environ["USERMGMT_DEBUG"] = "true"
    else:
        os.environ.setdefault("USERMGMT_DEBUG", "false")
    os.environ["USERMGMT_LOG_LEVEL"] = log_level

    try:
        uvicorn.run(
            "usermgmt.api.app:create_app_from_env",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command()
def seed() -> None:
    """Seed the city lookup table."""
    from usermgmt.database import Database
    from usermgmt.database.seed_data import seed_initial_data

    configure_logging()

    async def do_seed():
        database = Database.from_settings(settings)
        try:
            created = await seed_initial_data(database)
        finally:
            await database.dispose()
        click.echo(f"✓ Database seeded ({len(created)} new cities)")

    try:
        asyncio.run(do_seed())
    except Exception as e:
        logger.error("Failed to seed database", error=str(e))
        click.echo(f"✗ Error seeding database: {e}", err=True)
        sys.exit(1)


@cli.command("cities")
def list_cities() -> None:
    """List the seeded cities."""
    from usermgmt.database import Database
    from usermgmt.users import SqlUserRepository

    configure_logging()

    async def do_list():
        database = Database.from_settings(settings)
        try:
            cities = await SqlUserRepository(database).list_cities()
        finally:
            await database.dispose()

        if not cities:
            click.echo("No cities found. Run `usermgmt seed` first.")
            return
        click.echo(f"Found {len(cities)} city(ies):")
        for city in cities:
            click.echo(f"  {city.id}: {city.name}")

    try:
        asyncio.run(do_list())
    except Exception as e:
        logger.error("Failed to list cities", error=str(e))
        click.echo(f"✗ Error listing cities: {e}", err=True)
        sys.exit(1)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
