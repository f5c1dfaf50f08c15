"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy store/builder wiring and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from sixdegrees.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from sixdegrees.config.settings import SixSettings
    from sixdegrees.infrastructure.graph.store import GraphStore
    from sixdegrees.services.builder import GraphBuilder
    from sixdegrees.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store and builder are created on first use so ``--help`` and
    ``--version`` never touch the cache or the catalog.
    """

    def __init__(self, settings: SixSettings) -> None:
        self.settings = settings
        self._store: GraphStore | None = None
        self._builder: GraphBuilder | None = None
        self._graph_ready = False

        from sixdegrees.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose, quiet=settings.quiet, log_json=settings.log_json
        )

        if settings.verbose:
            from sixdegrees.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> GraphStore:
        """The in-memory store (empty until :meth:`graph` loads it)."""
        if self._store is None:
            from sixdegrees.infrastructure.graph.store import GraphStore

            self._store = GraphStore()
        return self._store

    @property
    def builder(self) -> GraphBuilder:
        """The builder wired to the configured catalog and cache file."""
        if self._builder is None:
            from sixdegrees.infrastructure.catalog import JsonCatalog
            from sixdegrees.infrastructure.snapshot import SnapshotFile
            from sixdegrees.services.builder import GraphBuilder

            catalog_path = self.settings.catalog_path
            self._builder = GraphBuilder(
                self.store,
                SnapshotFile(self.settings.cache_path),
                JsonCatalog(catalog_path) if catalog_path else None,
                catalog_config=self.settings.catalog,
                cache_config=self.settings.cache,
            )
        return self._builder

    def graph(self) -> GraphStore:
        """The store, populated from the cache or, failing that, a rebuild.

        A failed rebuild is emitted as the command's result (exit 1).
        """
        if not self._graph_ready:
            self._graph_ready = True
            builder = self.builder
            if not builder.load_cache():
                if builder.has_catalog:
                    result = builder.build_graph()
                    if not result.ok:
                        self.emit(result)
                else:
                    logger.warning("No usable cache and no catalog configured; graph is empty")
        return self.store

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
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
