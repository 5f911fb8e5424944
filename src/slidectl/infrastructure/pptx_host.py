"""python-pptx host — a ``.pptx`` file as the host document.

Each context loads the deck from disk, applies synchronized operations
to the in-memory presentation, and the session writes it back on commit.
A context that is never committed leaves the file untouched.

A file has no UI selection, so the caller supplies one as shape
references when constructing the session.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pptx import Presentation
from pptx.shapes.group import GroupShape
from pptx.shapes.picture import Picture
from pptx.util import Length, Pt

from slidectl.domain.errors import HostError
from slidectl.domain.geometry import Geometry, ShapeInfo, ShapeRef, SlideInfo
from slidectl.domain.types import ShapeKind
from slidectl.infrastructure.host import DocumentSession, HostContext

if TYPE_CHECKING:
    from pptx.presentation import Presentation as PresentationT
    from pptx.slide import Slide

logger = logging.getLogger(__name__)

_BLANK_LAYOUT_INDEX = 6
_SVG_HEADER = "data:image/svg+xml;base64"


def _to_pt(value: int | None) -> float:
    return round(Length(value or 0).pt, 2)


def _shape_kind(shape: Any) -> ShapeKind:
    if isinstance(shape, Picture):
        return ShapeKind.PICTURE
    if isinstance(shape, GroupShape):
        return ShapeKind.GROUP
    if getattr(shape, "has_text_frame", False):
        return ShapeKind.TEXT
    return ShapeKind.OTHER


def _shape_info(slide_index: int, shape: Any) -> ShapeInfo:
    return ShapeInfo(
        slide_index=slide_index,
        shape_id=shape.shape_id,
        kind=_shape_kind(shape),
        name=shape.name,
        geometry=Geometry(
            left=_to_pt(shape.left),
            top=_to_pt(shape.top),
            width=max(_to_pt(shape.width), 1.0),
            height=max(_to_pt(shape.height), 1.0),
        ),
    )


def _decode_data_uri(uri: str) -> bytes:
    header, sep, body = uri.partition(",")
    if header == _SVG_HEADER:
        raise HostError(
            "SVG images cannot be embedded in a .pptx file by this host",
            code="UNSUPPORTED_IMAGE",
        )
    if not sep or not header.startswith("data:image/") or not header.endswith(";base64"):
        raise HostError("Image source is not a base64 data URI", code="BAD_IMAGE_SOURCE")
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HostError(f"Image data is not valid base64: {exc}", code="BAD_IMAGE_SOURCE") from exc


class PptxContext(HostContext):
    """A batch over one in-memory copy of the deck."""

    def __init__(self, prs: PresentationT, selection: list[ShapeRef]) -> None:
        super().__init__()
        self.prs = prs
        self.selection = list(selection)
        self.dirty = False

    def _slide(self, index: int) -> Slide:
        slides = self.prs.slides
        if index < 0 or index >= len(slides):
            raise HostError(f"No slide at index {index}", code="NO_SUCH_SLIDE")
        return slides[index]

    def _shape(self, ref: ShapeRef) -> Any | None:
        if ref.slide_index >= len(self.prs.slides):
            return None
        for shape in self._slide(ref.slide_index).shapes:
            if shape.shape_id == ref.shape_id:
                return shape
        return None

    def _require_shape(self, ref: ShapeRef) -> Any:
        shape = self._shape(ref)
        if shape is None:
            raise HostError(
                f"No shape {ref.shape_id} on slide {ref.slide_index}", code="NO_SUCH_SHAPE"
            )
        return shape

    def _list_slides(self) -> list[SlideInfo]:
        return [
            SlideInfo(index=i, slide_id=slide.slide_id, shape_count=len(slide.shapes))
            for i, slide in enumerate(self.prs.slides)
        ]

    def _list_shapes(self, slide_index: int) -> list[ShapeInfo]:
        return [_shape_info(slide_index, shape) for shape in self._slide(slide_index).shapes]

    def _add_slide(self) -> SlideInfo:
        layouts = self.prs.slide_layouts
        layout = layouts[min(_BLANK_LAYOUT_INDEX, len(layouts) - 1)]
        slide = self.prs.slides.add_slide(layout)
        self.dirty = True
        index = len(self.prs.slides) - 1
        logger.debug("Added slide %d (layout %s)", index, layout.name)
        return SlideInfo(index=index, slide_id=slide.slide_id, shape_count=len(slide.shapes))

    def _add_image(self, slide_index: int, uri: str, geometry: Geometry) -> ShapeInfo:
        data = _decode_data_uri(uri)
        slide = self._slide(slide_index)
        picture = slide.shapes.add_picture(
            io.BytesIO(data),
            Pt(geometry.left),
            Pt(geometry.top),
            width=Pt(geometry.width),
            height=Pt(geometry.height),
        )
        self.dirty = True
        return _shape_info(slide_index, picture)

    def _selected_shapes(self) -> list[ShapeInfo]:
        found: list[ShapeInfo] = []
        for ref in self.selection:
            shape = self._shape(ref)
            if shape is not None:
                found.append(_shape_info(ref.slide_index, shape))
        return found

    def _find_shape(self, ref: ShapeRef) -> ShapeInfo | None:
        shape = self._shape(ref)
        return None if shape is None else _shape_info(ref.slide_index, shape)

    def _image_base64(self, ref: ShapeRef) -> str:
        shape = self._require_shape(ref)
        if not isinstance(shape, Picture):
            raise HostError(f"Shape {ref.shape_id} is not a picture", code="NOT_A_PICTURE")
        return base64.b64encode(shape.image.blob).decode("ascii")

    def _delete_shape(self, ref: ShapeRef) -> None:
        element = self._require_shape(ref)._element
        element.getparent().remove(element)
        self.selection = [r for r in self.selection if r != ref]
        self.dirty = True

    def _select_shapes(self, refs: list[ShapeRef]) -> None:
        self.selection = refs


class PptxSession(DocumentSession):
    """Session over a ``.pptx`` file on disk.

    A missing file is treated as an empty deck; it is created on the
    first committed mutation.
    """

    def __init__(self, path: Path, *, selection: list[ShapeRef] | None = None) -> None:
        self.path = path
        self.selection: list[ShapeRef] = list(selection or [])

    def open_context(self) -> PptxContext:
        try:
            prs = Presentation(str(self.path)) if self.path.exists() else Presentation()
        except Exception as exc:
            raise HostError(f"Cannot open deck {self.path}: {exc}", code="OPEN_FAILED") from exc
        return PptxContext(prs, self.selection)

    def commit(self, ctx: HostContext) -> None:
        assert isinstance(ctx, PptxContext)
        self.selection = list(ctx.selection)
        if not ctx.dirty:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            ctx.prs.save(str(self.path))
        except OSError as exc:
            raise HostError(f"Cannot save deck {self.path}: {exc}", code="SAVE_FAILED") from exc
        logger.debug("Saved deck %s", self.path)
