"""Deck inspection — read-only listing of slides and shapes.

Used to find the ``SLIDE:SHAPE_ID`` pairs that ``unbg --select`` takes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from slidectl.domain.errors import SlideError
from slidectl.domain.types import OutcomeKind, StatusTone
from slidectl.services.result import OperationOutcome, OutcomeError
from slidectl.services.telemetry import traced

if TYPE_CHECKING:
    from slidectl.infrastructure.gateway import DocumentGateway
    from slidectl.infrastructure.host import HostContext


def _collect(ctx: HostContext) -> list[dict[str, Any]]:
    slides = ctx.load_slides()
    ctx.sync()
    shapes = [ctx.load_shapes(slide.index) for slide in slides.value]
    ctx.sync()
    return [
        {
            "index": slide.index,
            "slide_id": slide.slide_id,
            "shapes": [shape.model_dump(mode="json") for shape in pending.value],
        }
        for slide, pending in zip(slides.value, shapes, strict=True)
    ]


@traced
def describe_deck(gateway: DocumentGateway) -> OperationOutcome:
    """List every slide with its shapes."""
    op = "shapes"
    try:
        slides = gateway.run(_collect)
    except SlideError as exc:
        return OperationOutcome(
            op=op,
            kind=exc.kind,
            message=f"Could not read the deck: {exc.message}",
            tone=StatusTone.ERROR,
            error=OutcomeError(code=exc.code, message=exc.message, detail=exc.detail),
        )

    count = sum(len(s["shapes"]) for s in slides)
    return OperationOutcome(
        op=op,
        kind=OutcomeKind.SUCCESS,
        message=f"{len(slides)} slide(s), {count} shape(s)",
        tone=StatusTone.SUCCESS,
        data={"slides": slides},
    )
