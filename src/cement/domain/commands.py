"""Parsed user intent: exactly one of add, list, or destroy.

The CLI collects a flat argument shape (positional phrase plus flags);
:func:`build_command` validates it into a single tagged variant so the
dispatcher never sees an illegal combination.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from cement.errors import CommandValidationError

PHRASE_REQUIRED = "Phrase is required."
LIST_DESTROY_EXCLUSIVE = "--list and --destroy are mutually exclusive."
PHRASE_WITH_DESTROY = "A phrase cannot be combined with --destroy."
EXAMPLE_ONLY_WITH_ADD = "--example is only valid when adding a phrase."


class AddCommand(BaseModel):
    """Store *phrase* with an optional *example*."""

    model_config = {"frozen": True}

    kind: Literal["add"] = "add"
    phrase: str = Field(min_length=1)
    example: str | None = None


class ListCommand(BaseModel):
    """List every stored idiom."""

    model_config = {"frozen": True}

    kind: Literal["list"] = "list"


class DestroyCommand(BaseModel):
    """Remove every idiom whose phrase equals *phrase*."""

    model_config = {"frozen": True}

    kind: Literal["destroy"] = "destroy"
    phrase: str = Field(min_length=1)


Command = Annotated[AddCommand | ListCommand | DestroyCommand, Field(discriminator="kind")]


def build_command(
    phrase: str | None = None,
    example: str | None = None,
    *,
    list_all: bool = False,
    destroy: str | None = None,
) -> AddCommand | ListCommand | DestroyCommand:
    """Validate parsed CLI arguments into exactly one command.

    ``--list`` takes precedence over a positional phrase and ``--example``,
    which are ignored when listing.

    Raises:
        CommandValidationError: If the arguments are empty or ambiguous.
    """
    if list_all and destroy is not None:
        raise CommandValidationError(LIST_DESTROY_EXCLUSIVE)
    if list_all:
        return ListCommand()

    if destroy is not None:
        if phrase:
            raise CommandValidationError(PHRASE_WITH_DESTROY)
        if example is not None:
            raise CommandValidationError(EXAMPLE_ONLY_WITH_ADD)
        if not destroy:
            raise CommandValidationError(PHRASE_REQUIRED)
        return DestroyCommand(phrase=destroy)

    if not phrase:
        raise CommandValidationError(PHRASE_REQUIRED)
    return AddCommand(phrase=phrase, example=example)
