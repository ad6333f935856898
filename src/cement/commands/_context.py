"""AppContext — shared state for one CLI invocation.

Created once by the root command. Owns the settings, lazily opens the
store (so ``--help`` and ``--version`` never touch the database), and
centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import click

from cement.errors import StoreConnectionError
from cement.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from cement.config.settings import CementSettings
    from cement.infrastructure.store import IdiomStore
    from cement.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Per-invocation context: settings, store, and output routing."""

    def __init__(self, settings: CementSettings) -> None:
        self.settings = settings
        self._store: IdiomStore | None = None

        from cement.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def store(self) -> IdiomStore:
        """The idiom store, connected on first access.

        A store that cannot be opened is fatal for the CLI: the error is
        reported on stderr and the process exits with code 1.
        """
        if self._store is None:
            from cement.infrastructure.store import IdiomStore

            try:
                self._store = IdiomStore.connect(
                    self.settings.database_file,
                    pool_size=self.settings.pool_size,
                    pool_timeout=self.settings.pool_timeout,
                    busy_timeout=self.settings.busy_timeout,
                )
            except StoreConnectionError as exc:
                logger.error("Store unavailable: %s", exc.reason)
                raise click.ClickException(str(exc)) from exc
        return self._store

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            color=sys.stdout.isatty(),
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None
