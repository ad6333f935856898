"""IdiomStore — typed insert/select/delete over the ``idioms`` table.

Each public method borrows exactly one pooled connection (a lease) for
the duration of that single statement and hands it back before
returning. Leases are never held across operations.

Every SQLAlchemy failure, including "database is locked" under contention
and pool exhaustion, surfaces as :class:`StoreError`.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from cement.domain.models import Idiom, NewIdiom
from cement.errors import StoreError
from cement.infrastructure.database.engine import connect
from cement.infrastructure.database.schema import idioms

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


def _error_message(exc: SQLAlchemyError) -> str:
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


class IdiomStore:
    """Store access for idiom records.

    Construct from an already connected engine, or use :meth:`connect` to
    run both phases at once.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @classmethod
    def connect(
        cls,
        db_path: str | Path,
        *,
        pool_size: int = 1,
        pool_timeout: float = 30.0,
        busy_timeout: float = 5.0,
    ) -> IdiomStore:
        """Open *db_path* and wrap it. Raises ``StoreConnectionError``."""
        engine = connect(
            db_path,
            pool_size=pool_size,
            pool_timeout=pool_timeout,
            busy_timeout=busy_timeout,
        )
        return cls(engine)

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def _lease(self, *, write: bool = False) -> Iterator[Connection]:
        """Borrow one pooled connection; commit on exit when *write*."""
        try:
            if write:
                with self._engine.begin() as conn:
                    yield conn
            else:
                with self._engine.connect() as conn:
                    yield conn
        except SQLAlchemyError as exc:
            message = _error_message(exc)
            logger.warning("Store operation failed: %s", message)
            raise StoreError(message) from exc

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def insert(self, new_idiom: NewIdiom) -> int:
        """Insert one row and return its store-assigned id."""
        with self._lease(write=True) as conn:
            result = conn.execute(insert(idioms).values(**new_idiom.to_row()))
            new_id = int(result.inserted_primary_key[0])
        logger.debug("Inserted idiom %d: %s", new_id, new_idiom.phrase)
        return new_id

    def find_by_phrase(self, phrase: str) -> Idiom | None:
        """Return the first row whose phrase equals *phrase*, or None."""
        stmt = select(idioms).where(idioms.c.phrase == phrase).limit(1)
        with self._lease() as conn:
            row = conn.execute(stmt).mappings().first()
        return Idiom.from_row(row) if row is not None else None

    def delete(self, phrase: str) -> int:
        """Delete every row whose phrase equals *phrase*; return the count."""
        with self._lease(write=True) as conn:
            removed = conn.execute(delete(idioms).where(idioms.c.phrase == phrase)).rowcount
        logger.debug("Deleted %d row(s) for phrase %s", removed, phrase)
        return int(removed)

    def list_all(self) -> list[Idiom]:
        """Every row in store-default order, fully materialised."""
        with self._lease() as conn:
            rows = conn.execute(select(idioms)).mappings().all()
        return [Idiom.from_row(row) for row in rows]

    def count(self) -> int:
        with self._lease() as conn:
            return int(conn.execute(select(func.count()).select_from(idioms)).scalar_one())

    def close(self) -> None:
        """Dispose of the pool and every idle connection in it."""
        self._engine.dispose()
