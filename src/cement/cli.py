"""Root CLI command for cement: add, list, or destroy idioms."""

from __future__ import annotations

import click

from cement import __version__
from cement.commands._context import AppContext
from cement.config.logging import bind_invocation
from cement.config.settings import CementSettings
from cement.domain.commands import build_command
from cement.errors import CommandValidationError
from cement.services.idioms import IdiomService

_EXAMPLES = """\
  cement "hints" -e "Give the compiler some hints."
  cement "cut corners"
  cement --list
  cement --destroy "cut corners"
  cement --database ~/idioms.sqlite3 --list"""


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(_EXAMPLES)
    ctx.exit(0)


@click.command()
@click.version_option(version=__version__, prog_name="cement")
@click.option(
    "--examples",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_show_examples,
    help="Show usage examples.",
)
@click.argument("phrase", required=False, metavar="PHRASE")
@click.option(
    "-e", "--example", default=None, metavar="EXAMPLE", help="Example of the phrase in use."
)
@click.option(
    "-l",
    "--list",
    "list_all",
    is_flag=True,
    help="List all idioms as JSON. A PHRASE or --example given alongside is ignored.",
)
@click.option("-d", "--destroy", default=None, metavar="PHRASE", help="Delete the given phrase.")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON result output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--database", "database_file", default=None, help="Store file to use.")
@click.pass_context
def cli(
    ctx: click.Context,
    phrase: str | None,
    example: str | None,
    list_all: bool,
    destroy: str | None,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    database_file: str | None,
) -> None:
    """Parlance stored in a database."""
    try:
        command = build_command(phrase, example, list_all=list_all, destroy=destroy)
    except CommandValidationError as exc:
        raise click.UsageError(str(exc), ctx=ctx) from exc

    # Unset flags pass None so env vars and cement.toml still apply.
    settings = CementSettings.from_cli(
        config_path=config_path,
        database_file=database_file,
        json_output=json_output or None,
        verbose=verbose or None,
        log_json=log_json or None,
    )
    app = AppContext(settings)
    ctx.call_on_close(app.close)
    bind_invocation(database_file=settings.database_file, command=command.kind)

    app.emit(IdiomService(app.store).dispatch(command))
