"""Retry reads that fail because the database dropped the connection."""
from __future__ import annotations

import time
from typing import Any, Callable

import structlog
from flask import current_app
from psycopg2 import OperationalError as Psycopg2OperationalError
from sqlalchemy.exc import DBAPIError, DisconnectionError, OperationalError

from blogapi.extensions import db

logger = structlog.get_logger(__name__)

CONNECTION_ERRORS = (OperationalError, DisconnectionError, Psycopg2OperationalError)

# Fragments of driver messages seen when PostgreSQL or a proxy drops the socket
DROPPED_CONNECTION_HINTS = (
    "server closed the connection",
    "connection reset",
    "connection closed",
    "connection timed out",
    "could not connect",
    "ssl syscall error",
    "eof detected",
    "decryption failed",
    "bad record mac",
)


def is_dropped_connection(exc: BaseException) -> bool:
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    message = str(exc).lower()
    return any(hint in message for hint in DROPPED_CONNECTION_HINTS)


def safe_db_operation(func: Callable[..., Any], *args, **kwargs) -> Any:
    """Call ``func`` and retry it while the connection keeps dropping.

    Only use this for reads: a retried write could apply twice. Attempts and
    the first delay come from ``DB_RETRY_ATTEMPTS`` and ``DB_RETRY_DELAY``;
    the delay doubles after each failure.
    """
    attempts = max(1, current_app.config.get("DB_RETRY_ATTEMPTS", 3))
    delay = current_app.config.get("DB_RETRY_DELAY", 0.5)

    for attempt in range(1, attempts + 1):
        try:
            return func(*args, **kwargs)
        except CONNECTION_ERRORS as e:
            if attempt == attempts or not is_dropped_connection(e):
                raise
            logger.warning("db_connection_retry", attempt=attempt, attempts=attempts, delay=delay, error=str(e))
            db.session.rollback()
            time.sleep(delay)
            delay *= 2
