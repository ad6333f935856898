"""Error taxonomy shared by every layer.

Only infrastructure raises ``StoreConnectionError`` and ``StoreError``;
only the command model raises ``CommandValidationError``. "Not found" is
never an error.
"""

from __future__ import annotations


class CementError(Exception):
    """Base class for all cement errors."""


class StoreConnectionError(CementError):
    """The store file could not be opened, created, or recognised."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not connect to the database at {path!r}: {reason}")
        self.path = path
        self.reason = reason


class StoreError(CementError):
    """An insert, select, or delete against an open store failed."""


class CommandValidationError(CementError):
    """Command input is incomplete or ambiguous."""
