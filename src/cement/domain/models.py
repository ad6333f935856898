"""Idiom records.

``Idiom`` mirrors one row of the ``idioms`` table. ``NewIdiom`` is the
insertable projection: it never carries ``id`` or ``created_at``, which
the store assigns.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# Field order of the external JSON representation.
IDIOM_FIELDS: tuple[str, ...] = ("id", "phrase", "example", "created_at")


class Idiom(BaseModel):
    """A stored phrase with an optional example."""

    model_config = {"frozen": True}

    id: int
    phrase: str
    example: str | None = None
    created_at: datetime

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Idiom:
        """Build an Idiom from a store row mapping."""
        return cls.model_validate({name: row[name] for name in IDIOM_FIELDS})

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping; absent examples stay as explicit ``None``."""
        return {
            "id": self.id,
            "phrase": self.phrase,
            "example": self.example,
            "created_at": self.created_at.isoformat(timespec="seconds"),
        }


class NewIdiom(BaseModel):
    """Insertion payload for a new idiom."""

    model_config = {"frozen": True, "extra": "forbid"}

    phrase: str = Field(min_length=1)
    example: str | None = None

    def to_row(self) -> dict[str, Any]:
        """Column values for an insert."""
        return {"phrase": self.phrase, "example": self.example}
