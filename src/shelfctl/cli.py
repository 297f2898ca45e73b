"""Root CLI group for shelfctl with global flags and command registration."""

from __future__ import annotations

import click

from shelfctl import __version__
from shelfctl.commands import register_commands
from shelfctl.commands._base import ShelfGroup
from shelfctl.commands._context import AppContext
from shelfctl.config.settings import ShelfSettings


@click.group(
    cls=ShelfGroup,
    invoke_without_command=True,
    examples="""\
  shelfctl list
  shelfctl show chapter2 --outline
  shelfctl --root ~/notes/effective-java check""",
)
@click.version_option(version=__version__, prog_name="shelfctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--root",
    default=None,
    type=click.Path(file_okay=False),
    help="Library directory (overrides [library] path).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    root: str | None,
) -> None:
    """shelfctl — browse a shelf of study notes."""
    settings = ShelfSettings.from_cli(
        config_path=config_path,
        root=root,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
