"""Command: library content checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shelfctl.commands._base import ShelfCommand

if TYPE_CHECKING:
    from shelfctl.commands._context import AppContext


@click.command(
    cls=ShelfCommand,
    examples="""\
  shelfctl check
  shelfctl check --errors-only
  shelfctl check --min-severity error
  shelfctl --json check""",
)
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.pass_obj
def check(app: AppContext, min_severity: str, errors_only: bool) -> None:
    """Report empty sections, repeated headings, and duplicated documents."""
    from shelfctl.services.check import CheckService

    cfg = app.settings.check
    svc = CheckService(
        app.store,
        duplicate_threshold=cfg.duplicate_threshold,
        min_body_chars=cfg.min_body_chars,
    )
    threshold = "error" if errors_only else min_severity
    app.emit(svc.check(min_severity=threshold))
