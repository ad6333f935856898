"""Rich Console factory for cement output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console


def create_console(*, no_color: bool = False, force_terminal: bool | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        force_terminal: Render styles even though the buffer is not a TTY
            (set when the real destination stream is a terminal).
    """
    return Console(
        file=StringIO(),
        no_color=no_color,
        force_terminal=force_terminal,
        highlight=False,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
