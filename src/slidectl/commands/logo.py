"""Command: fetch a company logo and add it to the deck."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from slidectl.commands._base import SlideCommand

if TYPE_CHECKING:
    from slidectl.commands._context import AppContext


@click.command(
    cls=SlideCommand,
    examples="""\
  slidectl logo Acme
  slidectl logo "Pied Piper"       # looks up piedpiper.com
  slidectl --deck pitch.pptx logo github""",
)
@click.argument("name", nargs=-1)
@click.pass_obj
def logo(app: AppContext, name: tuple[str, ...]) -> None:
    """Fetch the logo for company NAME and place it on the first slide.

    The domain is guessed as NAME lowercased, spaces removed, plus ".com".
    """
    app.emit(app.run_action("fetch-logo", " ".join(name)))
