"""Command: generate an icon from a description and add it to the deck."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from slidectl.commands._base import SlideCommand

if TYPE_CHECKING:
    from slidectl.commands._context import AppContext


@click.command(
    cls=SlideCommand,
    examples="""\
  slidectl icon a blue circle
  slidectl icon "rocket launching, flat style"
  slidectl --deck pitch.pptx --json icon lightbulb""",
)
@click.argument("prompt", nargs=-1)
@click.pass_obj
def icon(app: AppContext, prompt: tuple[str, ...]) -> None:
    """Generate an SVG icon from PROMPT and place it on the first slide."""
    app.emit(app.run_action("generate-icon", " ".join(prompt)))
