"""Command: remove the background of a selected picture in place."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from slidectl.commands._base import SlideCommand
from slidectl.domain.geometry import ShapeRef

if TYPE_CHECKING:
    from slidectl.commands._context import AppContext


def _parse_selection(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> list[ShapeRef]:
    refs: list[ShapeRef] = []
    for raw in values:
        slide, sep, shape = raw.partition(":")
        if not sep or not slide.isdigit() or not shape.isdigit():
            msg = f"{raw!r} is not SLIDE:SHAPE_ID (e.g. 0:3)"
            raise click.BadParameter(msg)
        refs.append(ShapeRef(slide_index=int(slide), shape_id=int(shape)))
    return refs


@click.command(
    cls=SlideCommand,
    examples="""\
  slidectl shapes                  # find the picture's SLIDE:SHAPE_ID
  slidectl unbg --select 0:4
  slidectl --deck pitch.pptx --json unbg -s 2:7""",
)
@click.option(
    "-s",
    "--select",
    "selection",
    multiple=True,
    callback=_parse_selection,
    help="Shape to select as SLIDE:SHAPE_ID (repeatable).",
)
@click.pass_obj
def unbg(app: AppContext, selection: list[ShapeRef]) -> None:
    """Remove the background of the selected picture, replacing it in place."""
    app.select(selection)
    app.emit(app.run_action("remove-background"))
