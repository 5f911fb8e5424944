"""Tests for the python-pptx host adapter."""

from __future__ import annotations

import base64
import io
from pathlib import Path

import pytest
from pptx import Presentation
from pptx.util import Pt

from slidectl.domain.errors import HostError
from slidectl.domain.geometry import Geometry, ShapeInfo, ShapeRef
from slidectl.domain.types import ShapeKind
from slidectl.infrastructure.gateway import DocumentGateway
from slidectl.infrastructure.host import HostContext
from slidectl.infrastructure.pptx_host import PptxSession
from tests.conftest import png_bytes

GEO = Geometry(left=250, top=150, width=200, height=200)


def _png_uri() -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes()).decode()


def _make_deck(path: Path) -> tuple[int, int]:
    """One blank slide with a picture and a text box. Returns their shape ids."""
    prs = Presentation()
    slide = prs.slides.add_slide(prs.slide_layouts[6])
    pic = slide.shapes.add_picture(io.BytesIO(png_bytes()), Pt(10), Pt(20), Pt(100), Pt(50))
    box = slide.shapes.add_textbox(Pt(0), Pt(0), Pt(80), Pt(20))
    box.text_frame.text = "Title"
    prs.save(str(path))
    return pic.shape_id, box.shape_id


class TestOpen:
    def test_missing_file_is_empty_deck(self, tmp_path: Path) -> None:
        gateway = DocumentGateway(PptxSession(tmp_path / "new.pptx"))

        def slides(ctx: HostContext) -> int:
            pending = ctx.load_slides()
            ctx.sync()
            return len(pending.value)

        assert gateway.run(slides) == 0

    def test_read_only_batch_does_not_write(self, tmp_path: Path) -> None:
        path = tmp_path / "new.pptx"
        DocumentGateway(PptxSession(path)).run(lambda ctx: ctx.load_slides())
        assert not path.exists()

    def test_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.pptx"
        path.write_bytes(b"not a zip")
        with pytest.raises(HostError) as exc_info:
            PptxSession(path).open_context()
        assert exc_info.value.code == "OPEN_FAILED"


class TestMutations:
    def test_add_slide_and_image_saved(self, tmp_path: Path) -> None:
        path = tmp_path / "deck.pptx"
        gateway = DocumentGateway(PptxSession(path))

        def insert(ctx: HostContext) -> int:
            ctx.add_slide()
            added = ctx.add_image(0, _png_uri(), GEO)
            ctx.sync()
            return added.value.shape_id

        shape_id = gateway.run(insert)

        prs = Presentation(str(path))
        assert len(prs.slides) == 1
        (picture,) = list(prs.slides[0].shapes)
        assert picture.shape_id == shape_id
        assert picture.left == Pt(250)
        assert picture.width == Pt(200)

    def test_added_shape_geometry_in_points(self, tmp_path: Path) -> None:
        gateway = DocumentGateway(PptxSession(tmp_path / "deck.pptx"))

        def insert(ctx: HostContext) -> ShapeInfo:
            ctx.add_slide()
            added = ctx.add_image(0, _png_uri(), GEO)
            ctx.sync()
            return added.value

        info = gateway.run(insert)
        assert info.kind == ShapeKind.PICTURE
        assert info.geometry == GEO

    def test_svg_is_unsupported(self, tmp_path: Path) -> None:
        path = tmp_path / "deck.pptx"
        _make_deck(path)
        before = path.read_bytes()
        gateway = DocumentGateway(PptxSession(path))
        svg_uri = "data:image/svg+xml;base64," + base64.b64encode(b"<svg/>").decode()

        with pytest.raises(HostError) as exc_info:
            gateway.run(lambda ctx: ctx.add_image(0, svg_uri, GEO))

        assert exc_info.value.code == "UNSUPPORTED_IMAGE"
        assert path.read_bytes() == before

    def test_bad_image_source(self, tmp_path: Path) -> None:
        gateway = DocumentGateway(PptxSession(tmp_path / "deck.pptx"))

        def insert(ctx: HostContext) -> None:
            ctx.add_slide()
            ctx.add_image(0, "https://example.com/logo.png", GEO)

        with pytest.raises(HostError) as exc_info:
            gateway.run(insert)
        assert exc_info.value.code == "BAD_IMAGE_SOURCE"

    def test_missing_slide(self, tmp_path: Path) -> None:
        gateway = DocumentGateway(PptxSession(tmp_path / "deck.pptx"))
        with pytest.raises(HostError) as exc_info:
            gateway.run(lambda ctx: ctx.add_image(0, _png_uri(), GEO))
        assert exc_info.value.code == "NO_SUCH_SLIDE"

    def test_delete_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "deck.pptx"
        pic_id, box_id = _make_deck(path)
        gateway = DocumentGateway(PptxSession(path))
        gateway.run(lambda ctx: ctx.delete_shape(ShapeRef(slide_index=0, shape_id=pic_id)))

        ids = [s.shape_id for s in Presentation(str(path)).slides[0].shapes]
        assert ids == [box_id]


class TestReads:
    def test_shape_kinds(self, tmp_path: Path) -> None:
        path = tmp_path / "deck.pptx"
        pic_id, box_id = _make_deck(path)

        def shapes(ctx: HostContext) -> dict[int, ShapeKind]:
            pending = ctx.load_shapes(0)
            ctx.sync()
            return {s.shape_id: s.kind for s in pending.value}

        kinds = DocumentGateway(PptxSession(path)).run(shapes)
        assert kinds == {pic_id: ShapeKind.PICTURE, box_id: ShapeKind.TEXT}

    def test_image_base64_matches_blob(self, tmp_path: Path) -> None:
        path = tmp_path / "deck.pptx"
        pic_id, _ = _make_deck(path)

        def read(ctx: HostContext) -> str:
            pending = ctx.get_image_base64(ShapeRef(slide_index=0, shape_id=pic_id))
            ctx.sync()
            return pending.value

        encoded = DocumentGateway(PptxSession(path)).run(read)
        assert base64.b64decode(encoded) == png_bytes()

    def test_image_of_text_box_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "deck.pptx"
        _, box_id = _make_deck(path)
        ref = ShapeRef(slide_index=0, shape_id=box_id)
        with pytest.raises(HostError) as exc_info:
            DocumentGateway(PptxSession(path)).run(lambda ctx: ctx.get_image_base64(ref))
        assert exc_info.value.code == "NOT_A_PICTURE"


class TestSelection:
    def test_selection_filters_missing_shapes(self, tmp_path: Path) -> None:
        path = tmp_path / "deck.pptx"
        pic_id, _ = _make_deck(path)
        session = PptxSession(
            path,
            selection=[
                ShapeRef(slide_index=0, shape_id=pic_id),
                ShapeRef(slide_index=0, shape_id=9999),
                ShapeRef(slide_index=5, shape_id=1),
            ],
        )

        def selected(ctx: HostContext) -> list[int]:
            pending = ctx.get_selected_shapes()
            ctx.sync()
            return [s.shape_id for s in pending.value]

        assert DocumentGateway(session).run(selected) == [pic_id]

    def test_selection_committed_to_session(self, tmp_path: Path) -> None:
        path = tmp_path / "deck.pptx"
        pic_id, box_id = _make_deck(path)
        session = PptxSession(path)
        box = ShapeRef(slide_index=0, shape_id=box_id)
        DocumentGateway(session).run(lambda ctx: ctx.set_selected_shapes([box]))
        assert session.selection == [box]
