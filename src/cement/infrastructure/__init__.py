"""Infrastructure layer — SQLite engine, schema, and the idiom store.

This layer depends on stdlib, SQLAlchemy, and ``cement.domain``.
It must never import from services, commands, or output.
"""
