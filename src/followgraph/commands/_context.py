"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy GraphStore initialization, per-command
deadlines, and centralized result emission (stdout/stderr + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from followgraph.config.logging import configure_logging
from followgraph.infrastructure.deadline import Deadline
from followgraph.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from followgraph.config.settings import FollowSettings
    from followgraph.infrastructure.store import GraphStore
    from followgraph.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store is lazily initialized on first use so ``--help`` and
    ``--version`` never touch the database.
    """

    def __init__(self, settings: FollowSettings) -> None:
        self.settings = settings
        self._store: GraphStore | None = None

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            echo_sql=settings.database.echo,
        )

        if settings.verbose:
            from followgraph.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> GraphStore:
        """The store instance (created lazily on first access)."""
        if self._store is None:
            from followgraph.infrastructure.store import GraphStore

            self._store = GraphStore(self.settings)
        return self._store

    def deadline(self) -> Deadline | None:
        """A fresh deadline from ``--timeout``, or None when unset."""
        if self.settings.timeout is None:
            return None
        return Deadline.after(self.settings.timeout)

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
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
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
