"""SQLAlchemy Core table definitions for the cement store.

One table. ``phrase`` is indexed for destroy lookups but deliberately not
unique: the same phrase may be stored more than once. AUTOINCREMENT keeps
ids monotonic even after the newest row is deleted.
"""

from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Integer, MetaData, Table, Text, func

metadata = MetaData()

idioms = Table(
    "idioms",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("phrase", Text, nullable=False),
    Column("example", Text),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    sqlite_autoincrement=True,
)

Index("ix_idioms_phrase", idioms.c.phrase)
