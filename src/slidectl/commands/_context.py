"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Builds the document session, gateway, HTTP client,
action registry and controller lazily, so ``--help`` and ``--version``
never open the deck or a network client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from slidectl.output.formatters import OutputSettings, format_outcome

if TYPE_CHECKING:
    import httpx

    from slidectl.config.settings import SlideSettings
    from slidectl.domain.geometry import ShapeRef
    from slidectl.infrastructure.gateway import DocumentGateway
    from slidectl.infrastructure.pptx_host import PptxSession
    from slidectl.services.actions import ActionRegistry
    from slidectl.services.lifecycle import OperationController
    from slidectl.services.result import OperationOutcome


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: SlideSettings) -> None:
        self.settings = settings
        self._session: PptxSession | None = None
        self._gateway: DocumentGateway | None = None
        self._client: httpx.Client | None = None
        self._registry: ActionRegistry | None = None
        self._controller: OperationController | None = None

        from slidectl.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose, log_json=settings.log_json, quiet=settings.quiet
        )

        if settings.verbose:
            from slidectl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def session(self) -> PptxSession:
        if self._session is None:
            from slidectl.infrastructure.pptx_host import PptxSession

            self._session = PptxSession(self.settings.deck)
        return self._session

    @property
    def gateway(self) -> DocumentGateway:
        if self._gateway is None:
            from slidectl.infrastructure.gateway import DocumentGateway

            self._gateway = DocumentGateway(self.session)
        return self._gateway

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            from slidectl.infrastructure import http

            self._client = http.create_client(self.settings.http)
        return self._client

    @property
    def registry(self) -> ActionRegistry:
        if self._registry is None:
            from slidectl.services.actions import build_registry

            self._registry = build_registry(self.settings, self.gateway, self.client)
        return self._registry

    @property
    def controller(self) -> OperationController:
        if self._controller is None:
            from slidectl.services.lifecycle import OperationController
            from slidectl.services.placement import ImagePlacer
            from slidectl.services.targets import SlideTargetResolver

            resolver = SlideTargetResolver(self.settings.placement.geometry())
            placer = ImagePlacer(self.gateway, resolver)
            self._controller = OperationController(
                placer, reset_delay=self.settings.status.reset_delay
            )
        return self._controller

    def select(self, refs: list[ShapeRef]) -> None:
        """Set the shapes a transform action operates on."""
        self.session.selection = list(refs)

    def run_action(self, name: str, value: str | None = None) -> OperationOutcome:
        """Trigger the named action with *value* as the panel input."""
        from slidectl.output.panel import ConsolePanel

        panel = ConsolePanel(value)
        return self.controller.trigger(self.registry.get(name), panel)

    def emit(self, outcome: OperationOutcome) -> None:
        """Format and output an outcome with correct exit semantics.

        * Success: writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_outcome(outcome, settings=settings)
        if outcome.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in outcome.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def close(self) -> None:
        """Release the HTTP client if one was created."""
        if self._client is not None:
            self._client.close()
            self._client = None
