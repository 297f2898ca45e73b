"""Click classes for shelfctl commands: an eager ``--examples`` flag.

``--help`` stays short and ends with a pointer to ``--examples``; the
examples themselves print only on request, before argument parsing, so
``shelfctl show --examples`` works without a document name.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Adds ``--examples`` to any Click command that was given examples."""

    examples: str | None

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(  # type: ignore[attr-defined]
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Show usage examples.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
            ctx.exit(0)

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)  # type: ignore[misc]
        if self.examples:
            formatter.write_paragraph()
            formatter.write_text(f"Run '{ctx.command_path} --examples' for usage examples.")


class ShelfCommand(_ExamplesMixin, click.Command):
    """A command with optional ``--examples``."""


class ShelfGroup(_ExamplesMixin, click.Group):
    """A group with optional ``--examples``; its subcommands default to ShelfCommand."""

    command_class = ShelfCommand
