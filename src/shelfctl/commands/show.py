"""Command: print a document, one of its sections, or its outline."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shelfctl.commands._base import ShelfCommand
from shelfctl.services.documents import DocumentService

if TYPE_CHECKING:
    from shelfctl.commands._context import AppContext


@click.command(
    cls=ShelfCommand,
    examples="""\
  shelfctl show chapter2
  shelfctl show effective-java/chapter2 --section "Item 1: Static factory methods"
  shelfctl show chapter2 --outline
  shelfctl --json show chapter2""",
)
@click.argument("name")
@click.option("-s", "--section", default=None, help="Show only the section with this heading.")
@click.option("--outline", is_flag=True, help="Show the heading outline only.")
@click.pass_obj
def show(app: AppContext, name: str, section: str | None, outline: bool) -> None:
    """Show the document called NAME."""
    if outline and section is not None:
        raise click.UsageError("--outline and --section are mutually exclusive.")

    svc = DocumentService(app.store)
    if outline:
        app.emit(svc.outline(name))
    else:
        app.emit(svc.get_document(name, section=section))
