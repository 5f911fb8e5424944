"""Command: list slides and shapes of the deck."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from slidectl.commands._base import SlideCommand

if TYPE_CHECKING:
    from slidectl.commands._context import AppContext


@click.command(
    cls=SlideCommand,
    examples="""\
  slidectl shapes
  slidectl --deck pitch.pptx --json shapes""",
)
@click.pass_obj
def shapes(app: AppContext) -> None:
    """List every slide with its shapes (ids, kinds, geometry)."""
    from slidectl.output.renderers import render_shapes
    from slidectl.services.inspect import describe_deck

    outcome = describe_deck(app.gateway)
    if outcome.ok and not (app.settings.json_output or app.settings.quiet):
        click.echo(render_shapes(outcome.data["slides"]))
        return
    app.emit(outcome)
