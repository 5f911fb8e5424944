"""Rich theme and buffered consoles for slidectl output.

Renderers draw into a console backed by StringIO and hand back the text,
so formatters stay ``outcome -> str``.  Rich drops colour on its own when
the buffer is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

from slidectl.domain.types import ShapeKind, StatusTone

_TONE_COLOURS = {
    StatusTone.SUCCESS: ("ok", "bold green"),
    StatusTone.ERROR: ("error", "bold red"),
    StatusTone.INFO: ("info", "bold blue"),
}

_KIND_COLOURS = {
    ShapeKind.PICTURE: "magenta",
    ShapeKind.TEXT: "green",
    ShapeKind.GROUP: "yellow",
}

SLIDE_THEME = Theme(
    {
        **{f"slide.{name}": colour for name, colour in _TONE_COLOURS.values()},
        **{f"slide.kind.{kind.value}": colour for kind, colour in _KIND_COLOURS.items()},
        "slide.op": "bold cyan",
        "slide.key": "dim",
        "slide.id": "bold blue",
        "slide.busy": "dim italic",
    }
)

DEFAULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Return a themed console that writes into a fresh buffer."""
    return Console(
        file=StringIO(),
        theme=SLIDE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("console was not created by create_console()")
    return buffer.getvalue()


def style_for_tone(tone: StatusTone) -> str:
    entry = _TONE_COLOURS.get(tone)
    return f"slide.{entry[0]}" if entry else ""


def style_for_kind(kind: str) -> str:
    known = {k.value for k in _KIND_COLOURS}
    return f"slide.kind.{kind}" if kind in known else ""
