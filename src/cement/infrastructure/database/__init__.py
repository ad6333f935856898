"""SQLite database engine and schema via SQLAlchemy Core."""

from cement.infrastructure.database.engine import connect, create_db_engine
from cement.infrastructure.database.schema import idioms, metadata

__all__ = [
    "connect",
    "create_db_engine",
    "idioms",
    "metadata",
]
