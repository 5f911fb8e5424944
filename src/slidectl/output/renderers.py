"""Rich renderers for OperationOutcome and deck listings.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.padding import Padding
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from slidectl.output.console import create_console, get_output, style_for_kind, style_for_tone

if TYPE_CHECKING:
    from rich.console import Console

    from slidectl.services.result import OperationOutcome

_OUTCOME_LABELS = {
    "success": "OK",
    "user_error": "ERROR",
    "transient_failure": "FAILED",
    "configuration_missing": "NOTE",
    "invalid_encoding": "ERROR",
}


def render_outcome(outcome: OperationOutcome, *, verbose: bool = False) -> str:
    """Render an OperationOutcome to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()
    _status_line(console, outcome)

    if outcome.ok:
        for key in ("slide_index", "shape_id", "replaced_shape_id", "created_slide"):
            if key in outcome.data:
                _field(console, key, outcome.data[key])
    elif outcome.error is not None:
        _field(console, "code", outcome.error.code)
        if verbose:
            _field(console, "reason", outcome.error.message)
            for k, v in outcome.error.detail.items():
                _field(console, k, v)

    if verbose:
        _field(console, "states", " → ".join(outcome.data.get("states", [])))
        _render_meta(console, outcome)

    return get_output(console).rstrip("\n")


def render_quiet(outcome: OperationOutcome) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if outcome.ok:
        return f"OK: {outcome.op}"
    code = outcome.error.code if outcome.error else outcome.kind.value
    return f"{_OUTCOME_LABELS[outcome.kind.value]}: {outcome.op} — {code}"


def render_shapes(slides: list[dict[str, Any]]) -> str:
    """Render a deck listing (slides with their shapes) as a table."""
    console = create_console()
    if not slides:
        console.print(Text("Deck has no slides", style="slide.key"))
        return get_output(console).rstrip("\n")

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Slide", justify="right")
    table.add_column("Shape ID", style="slide.id", justify="right")
    table.add_column("Kind")
    table.add_column("Name")
    table.add_column("Geometry (pt)", style="slide.key")

    for slide in slides:
        shapes = slide.get("shapes", [])
        if not shapes:
            table.add_row(str(slide["index"]), "", "", Text("(empty)", style="slide.key"), "")
        for shape in shapes:
            geo = shape["geometry"]
            table.add_row(
                str(slide["index"]),
                str(shape["shape_id"]),
                Text(shape["kind"], style=style_for_kind(shape["kind"])),
                Text(shape.get("name", "")),
                f"{geo['left']:g},{geo['top']:g} {geo['width']:g}x{geo['height']:g}",
            )

    console.print(table)
    return get_output(console).rstrip("\n")


def _status_line(console: Console, outcome: OperationOutcome) -> None:
    label = Text(_OUTCOME_LABELS[outcome.kind.value], style=style_for_tone(outcome.tone))
    op = Text(f"  {outcome.op}", style="slide.op")
    console.print(label, op, Text(" — "), Text(outcome.message), sep="", soft_wrap=True)


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="slide.key")
    style = "slide.id" if key.endswith("_id") else ""
    console.print(k, Text(str(value), style=style), sep="")


def _render_meta(console: Console, outcome: OperationOutcome) -> None:
    if not outcome.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for key, value in outcome.meta.items():
        if key == "telemetry":
            console.print(Padding(_span_tree(value), (0, 0, 0, 4)))
        else:
            _field(console, f"  {key}", value)


def _timing_style(duration_ms: float) -> str:
    if duration_ms > 1000:
        return "bold red"
    if duration_ms > 100:
        return "yellow"
    return "dim"


def _span_label(span: dict[str, Any]) -> Text:
    duration = span.get("duration_ms", 0.0)
    label = Text.assemble(
        (f"{duration:>8.2f}ms", _timing_style(duration)),
        "  ",
        span.get("name", "?"),
    )
    notes = span.get("annotations") or {}
    if notes:
        label.append("  (" + ", ".join(f"{k}={v}" for k, v in notes.items()) + ")", style="dim")
    return label


def _span_tree(span: dict[str, Any], tree: Tree | None = None) -> Tree:
    """Build a Rich tree of a telemetry span dict, timings colour-coded."""
    node = Tree(_span_label(span)) if tree is None else tree.add(_span_label(span))
    for child in span.get("children", []):
        _span_tree(child, node)
    return node
