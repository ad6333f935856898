"""Database engine setup for a single-file SQLite store.

Connecting is split in two phases. :func:`create_db_engine` only builds
the (lazy) engine and its bounded connection pool; :func:`connect` opens
the file, creates the schema, and raises :class:`StoreConnectionError` on
any failure. Whether that failure is fatal is the caller's decision.

SQLAlchemy Core (not ORM) is used because cement is a short-lived CLI
process — no benefit from session management or identity maps.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool

from cement.errors import StoreConnectionError
from cement.infrastructure.database.schema import metadata

logger = logging.getLogger(__name__)

_CONNECT_ERRORS = (SQLAlchemyError, sqlite3.Error, ValueError, OSError)


def create_db_engine(
    db_path: str | Path,
    *,
    pool_size: int = 1,
    pool_timeout: float = 30.0,
    busy_timeout: float = 5.0,
) -> Engine:
    """Create a SQLite engine with WAL mode and a bounded connection pool.

    The URL is assembled from parts so that ``?``, ``#`` and ``%`` in *db_path*
    stay part of the file name.

    At most *pool_size* connections are ever leased at once; a caller that
    finds them all in use blocks for up to *pool_timeout* seconds. A write
    that finds the file locked by another process waits *busy_timeout*
    seconds before failing with "database is locked".
    """
    if pool_size < 1:
        msg = f"pool_size must be at least 1, got {pool_size}"
        raise ValueError(msg)

    engine = create_engine(
        URL.create("sqlite", database=str(db_path)),
        echo=False,
        poolclass=QueuePool,
        pool_size=pool_size,
        max_overflow=0,
        pool_timeout=pool_timeout,
        connect_args={"timeout": busy_timeout, "check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def connect(
    db_path: str | Path,
    *,
    pool_size: int = 1,
    pool_timeout: float = 30.0,
    busy_timeout: float = 5.0,
) -> Engine:
    """Open the store at *db_path*, creating the file and table if missing.

    Idempotent — safe to call on an existing store.

    Raises:
        StoreConnectionError: If the path is unusable (embedded NUL byte,
            missing directory, not a SQLite file) or the engine rejects it.
    """
    path = str(db_path)
    try:
        engine = create_db_engine(
            path,
            pool_size=pool_size,
            pool_timeout=pool_timeout,
            busy_timeout=busy_timeout,
        )
    except _CONNECT_ERRORS as exc:
        raise StoreConnectionError(path, str(exc)) from exc

    try:
        metadata.create_all(engine)
    except _CONNECT_ERRORS as exc:
        engine.dispose()
        reason = str(getattr(exc, "orig", None) or exc)
        logger.debug("Connect failed for %s: %s", path, reason)
        raise StoreConnectionError(path, reason) from exc

    logger.debug("Connected to %s (pool_size=%d)", path, pool_size)
    return engine
