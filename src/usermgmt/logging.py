"""
structlog setup and per-request logging context.

Request-scoped values (``request_id``, ``graphql_operation``) are bound with
``structlog.contextvars`` and merged into every event logged while the
request is being handled.
"""

import logging
import secrets
import sys
from typing import Any

import structlog
from structlog.contextvars import (
    bind_contextvars,
    clear_contextvars,
    get_contextvars,
    merge_contextvars,
)

REQUEST_ID_KEY = "request_id"
OPERATION_KEY = "graphql_operation"


def _resolve_level(debug: bool, level: str | None) -> int:
    if level is None:
        return logging.DEBUG if debug else logging.INFO
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def configure_logging(debug: bool = False, level: str | None = None) -> None:
    """Route structlog through stdlib logging on stdout.

    Args:
        debug: Render colored console lines instead of JSON.
        level: Level name overriding the ``debug``-derived default.
    """
    logging.basicConfig(
        level=_resolve_level(debug, level),
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    renderer: Any = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """Short URL-safe random id for requests without an ``X-Request-ID``."""
    return secrets.token_urlsafe(12)


def set_request_context(request_id: str | None = None, operation: str | None = None) -> str:
    """Bind request values for subsequent log events; returns the request id."""
    request_id = request_id or generate_request_id()
    context = {REQUEST_ID_KEY: request_id}
    if operation is not None:
        context[OPERATION_KEY] = operation
    bind_contextvars(**context)
    return request_id


def clear_request_context() -> None:
    clear_contextvars()


def get_request_id() -> str | None:
    return get_contextvars().get(REQUEST_ID_KEY)
