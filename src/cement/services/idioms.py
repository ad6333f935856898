"""IdiomService — turns one command into one store interaction.

Stateless per call: no caching, no retries. A store failure on add or
destroy becomes an error result prefixed with ``"Something went wrong: "``;
a destroy that finds nothing is a successful result.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cement.domain.commands import PHRASE_REQUIRED, AddCommand, DestroyCommand, ListCommand
from cement.domain.models import NewIdiom
from cement.errors import CommandValidationError, StoreError
from cement.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from cement.domain.commands import Command
    from cement.infrastructure.store import IdiomStore

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Something went wrong: "
NO_EXAMPLE = "no example found."


def _store_failure(op: str, exc: StoreError) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="STORE_ERROR", message=f"{ERROR_PREFIX}{exc}"),
    )


class IdiomService:
    """Dispatches add, list, and destroy commands against an IdiomStore."""

    def __init__(self, store: IdiomStore) -> None:
        self._store = store

    def dispatch(self, command: Command | None) -> ServiceResult:
        """Run *command* and return its result.

        Raises:
            CommandValidationError: If *command* is missing or not one of
                the known variants. The store is not touched.
        """
        if isinstance(command, ListCommand):
            return self.list_idioms()
        if isinstance(command, AddCommand):
            return self.store_idiom(command.phrase, example=command.example)
        if isinstance(command, DestroyCommand):
            return self.destroy_idiom(command.phrase)
        raise CommandValidationError(PHRASE_REQUIRED)

    def list_idioms(self) -> ServiceResult:
        """Every stored idiom, as JSON-ready dicts."""
        op = "list_idioms"
        try:
            rows = self._store.list_all()
        except StoreError as exc:
            return _store_failure(op, exc)
        items = [idiom.to_dict() for idiom in rows]
        return ServiceResult(ok=True, op=op, data={"items": items, "count": len(items)})

    def store_idiom(self, phrase: str, *, example: str | None = None) -> ServiceResult:
        op = "store_idiom"
        new_idiom = NewIdiom(phrase=phrase, example=example)
        try:
            new_id = self._store.insert(new_idiom)
        except StoreError as exc:
            return _store_failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": new_id,
                "phrase": phrase,
                "example": example,
                "message": f"Stored phrase {phrase}",
            },
        )

    def destroy_idiom(self, phrase: str) -> ServiceResult:
        """Delete every row matching *phrase*, reporting the first one found.

        A missing phrase is reported, not treated as a failure.
        """
        op = "destroy_idiom"
        try:
            existing = self._store.find_by_phrase(phrase)
            if existing is None:
                logger.debug("Nothing to destroy for %s", phrase)
                return ServiceResult(
                    ok=True,
                    op=op,
                    data={"phrase": phrase, "deleted": 0, "message": f"{phrase} doesn't exist."},
                )
            deleted = self._store.delete(phrase)
        except StoreError as exc:
            return _store_failure(op, exc)

        example = existing.example if existing.example is not None else NO_EXAMPLE
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "phrase": existing.phrase,
                "example": existing.example,
                "deleted": deleted,
                "message": f"Deleted {existing.phrase}, {example}",
            },
        )
