"""
Main FastAPI application for the usermgmt backend
"""

import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import Settings
from ..config import settings as default_settings
from ..database import Database
from ..database.seed_data import seed_initial_data
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

logger = get_logger(__name__)


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; defaults to the environment-derived settings.
        database: Database handle to use; built from ``settings`` when omitted
            and then disposed on shutdown.
    """
    settings = settings or default_settings
    owns_database = database is None
    database = database or Database.from_settings(settings)
    started_at = time.monotonic()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting usermgmt API...", environment=settings.environment)

        ok, error = await database.check_connection()
        if not ok:
            logger.error("Database connection check failed", error=error)

        if settings.seed_on_startup:
            try:
                await seed_initial_data(database)
            except Exception as e:
                # Startup continues; requests needing cities will fail individually
                logger.error("Failed to seed cities", error=str(e))

        yield

        logger.info("Shutting down usermgmt API...")
        if owns_database:
            await database.dispose()

    app = FastAPI(
        title="usermgmt API",
        description="User management service",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.database = database
    app.state.settings = settings

    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "uptime": round(time.monotonic() - started_at, 3),
            "environment": settings.environment,
        }

    @app.get("/")
    async def root():  # pyright: ignore [reportUnusedFunction]
        return {
            "message": "User Management Service",
            "version": __version__,
            "graphql": "/graphql",
            "health": "/health",
        }

    from ..graphql.schema import create_graphql_router, validate_schema

    try:
        validate_schema()
        app.include_router(create_graphql_router(graphiql=settings.graphiql), prefix="")
        logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        raise

    return app


def create_app_from_env() -> FastAPI:
    """uvicorn factory: configure logging from settings, then build the app."""
    configure_logging(debug=default_settings.debug, level=default_settings.log_level)
    return create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "usermgmt.api.app:create_app_from_env",
        factory=True,
        host=default_settings.api_host,
        port=default_settings.api_port,
        reload=default_settings.api_reload,
        log_level=default_settings.log_level.lower(),
    )
