"""structlog configuration for cement.

stdout carries command results only, so every log line goes to stderr:
colored key-value lines by default, one JSON object per line with
``--log-json``. Stdlib loggers (``logging.getLogger(__name__)`` in the
store and services) flow through the same renderer.

Each invocation binds the store file and the command kind into the
structlog context, so a failure line always says which database and
which operation it came from.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

CEMENT_LOGGER = "cement"

# Libraries whose INFO/DEBUG chatter never belongs on a user terminal.
_QUIET_LOGGERS = ("sqlalchemy",)


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _renderer(log_json: bool) -> Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib logging to stderr.

    Safe to call more than once; the root handler is replaced, not stacked.

    Args:
        verbose: DEBUG for ``cement.*`` loggers. When False, only WARNING+.
        log_json: Emit JSON lines instead of console lines.
    """
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger(CEMENT_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_invocation(*, database_file: str, command: str) -> None:
    """Attach the store file and command kind to every later log line."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(db=database_file, command=command)
