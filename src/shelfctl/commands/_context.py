"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy DocumentStore loading and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shelfctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from shelfctl.config.settings import ShelfSettings
    from shelfctl.infrastructure.store import DocumentStore
    from shelfctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store is loaded on first access so ``--help``, ``--version`` and
    ``--examples`` never touch the library directory.
    """

    def __init__(self, settings: ShelfSettings) -> None:
        self.settings = settings
        self._store: DocumentStore | None = None

        from shelfctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from shelfctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> DocumentStore:
        """The loaded document store.

        A library that fails to load is reported like any other error
        result and ends the command with exit code 1.
        """
        if self._store is None:
            from shelfctl.domain.errors import ShelfError
            from shelfctl.infrastructure.store import DocumentStore
            from shelfctl.services.result import ServiceResult

            root = self.settings.library_root
            try:
                self._store = DocumentStore.load(root, extensions=self.settings.library.extensions)
            except ShelfError as exc:
                self.emit(ServiceResult.failure("load_library", exc, library=str(root)))
                raise  # unreachable: emit() exits on failure
        return self._store

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
