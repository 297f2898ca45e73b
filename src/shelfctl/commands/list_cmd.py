"""Command: list the documents in the library."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shelfctl.commands._base import ShelfCommand
from shelfctl.services.documents import DocumentService

if TYPE_CHECKING:
    from shelfctl.commands._context import AppContext


@click.command(
    "list",
    cls=ShelfCommand,
    examples="""\
  shelfctl list
  shelfctl --root ./notes list
  shelfctl -q list
  shelfctl --json list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List document names in load order."""
    library_name = app.settings.library.name
    app.emit(DocumentService(app.store).list_documents(library_name=library_name))
