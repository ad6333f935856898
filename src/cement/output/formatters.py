"""Rich/JSON output helpers.

The CLI renders a ServiceResult either for humans (the listing as a
pretty-printed JSON array, or a one-line status message) or, with
``--json``, as the full serialized result.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click
from pydantic import BaseModel

from cement.output.console import create_console, get_output

if TYPE_CHECKING:
    from cement.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output mode flags, frozen after construction."""

    model_config = {"frozen": True}

    json_output: bool = False
    color: bool = False


def render_listing(items: list[dict[str, Any]]) -> str:
    """Pretty-print idiom dicts as a JSON array, keeping key order."""
    return json.dumps(items, indent=2, ensure_ascii=False)


def format_message(result: ServiceResult, *, color: bool = False) -> str:
    """Return the status line of an add/destroy/error result.

    The phrase is user text and goes out byte for byte; styling only
    wraps it in ANSI codes.
    """
    text = result.message
    if not color:
        return text
    return click.style(text, fg="green" if result.ok else "red", bold=True)


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output mode; defaults to plain human output.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    if not (result.ok and result.op == "list_idioms"):
        return format_message(result, color=settings.color)

    # json.dumps escapes control characters, so the listing is safe to pass
    # through Rich.
    console = create_console(force_terminal=settings.color or None)
    console.out(render_listing(result.data.get("items", [])), highlight=settings.color)
    return get_output(console).rstrip("\n")
