"""Shared pytest fixtures and test helpers for slidectl tests."""

from __future__ import annotations

import copy
import io
import json
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
import pytest
from click.testing import CliRunner

from slidectl.config.settings import SlideSettings
from slidectl.domain.errors import HostError
from slidectl.domain.geometry import Geometry, ShapeInfo, ShapeRef, SlideInfo
from slidectl.domain.types import ShapeKind, StatusTone
from slidectl.infrastructure.gateway import DocumentGateway
from slidectl.infrastructure.host import DocumentSession, HostContext

# ---------------------------------------------------------------------------
# In-memory host document
# ---------------------------------------------------------------------------


@dataclass
class FakeShape:
    shape_id: int
    kind: ShapeKind
    geometry: Geometry
    name: str = ""
    image_base64: str = ""
    source_uri: str = ""


@dataclass
class FakeDocument:
    slides: list[list[FakeShape]] = field(default_factory=list)
    selection: list[ShapeRef] = field(default_factory=list)
    next_id: int = 100
    next_slide_id: int = 256


class FakeContext(HostContext):
    """HostContext over a private copy of a FakeDocument."""

    def __init__(self, doc: FakeDocument, *, fail_on: str | None = None) -> None:
        super().__init__()
        self.doc = doc
        self.fail_on = fail_on

    def _check(self, label: str) -> None:
        if self.fail_on == label:
            raise HostError(f"{label} failed", code="FAKE_FAILURE")

    def _info(self, slide_index: int, shape: FakeShape) -> ShapeInfo:
        return ShapeInfo(
            slide_index=slide_index,
            shape_id=shape.shape_id,
            kind=shape.kind,
            name=shape.name,
            geometry=shape.geometry,
        )

    def _lookup(self, ref: ShapeRef) -> FakeShape | None:
        if ref.slide_index >= len(self.doc.slides):
            return None
        for shape in self.doc.slides[ref.slide_index]:
            if shape.shape_id == ref.shape_id:
                return shape
        return None

    def _list_slides(self) -> list[SlideInfo]:
        self._check("slides")
        return [
            SlideInfo(index=i, slide_id=256 + i, shape_count=len(shapes))
            for i, shapes in enumerate(self.doc.slides)
        ]

    def _list_shapes(self, slide_index: int) -> list[ShapeInfo]:
        return [self._info(slide_index, s) for s in self.doc.slides[slide_index]]

    def _add_slide(self) -> SlideInfo:
        self._check("add_slide")
        self.doc.slides.append([])
        return SlideInfo(index=len(self.doc.slides) - 1, slide_id=self.doc.next_slide_id)

    def _add_image(self, slide_index: int, uri: str, geometry: Geometry) -> ShapeInfo:
        self._check("add_image")
        if slide_index >= len(self.doc.slides):
            raise HostError(f"No slide at index {slide_index}", code="NO_SUCH_SLIDE")
        self.doc.next_id += 1
        shape = FakeShape(
            shape_id=self.doc.next_id,
            kind=ShapeKind.PICTURE,
            geometry=geometry,
            name=f"Picture {self.doc.next_id}",
            image_base64=uri.partition(",")[2],
            source_uri=uri,
        )
        self.doc.slides[slide_index].append(shape)
        return self._info(slide_index, shape)

    def _selected_shapes(self) -> list[ShapeInfo]:
        self._check("selected_shapes")
        found = []
        for ref in self.doc.selection:
            shape = self._lookup(ref)
            if shape is not None:
                found.append(self._info(ref.slide_index, shape))
        return found

    def _find_shape(self, ref: ShapeRef) -> ShapeInfo | None:
        shape = self._lookup(ref)
        return None if shape is None else self._info(ref.slide_index, shape)

    def _image_base64(self, ref: ShapeRef) -> str:
        shape = self._lookup(ref)
        if shape is None:
            raise HostError("No such shape", code="NO_SUCH_SHAPE")
        return shape.image_base64

    def _delete_shape(self, ref: ShapeRef) -> None:
        self._check("delete_shape")
        shapes = self.doc.slides[ref.slide_index]
        self.doc.slides[ref.slide_index] = [s for s in shapes if s.shape_id != ref.shape_id]
        self.doc.selection = [r for r in self.doc.selection if r != ref]

    def _select_shapes(self, refs: list[ShapeRef]) -> None:
        self.doc.selection = refs


class FakeSession(DocumentSession):
    """DocumentSession whose committed state is ``self.document``.

    Each context works on a deep copy; only ``commit`` publishes it.
    """

    def __init__(self, slide_count: int = 0) -> None:
        self.document = FakeDocument(slides=[[] for _ in range(slide_count)])
        self.fail_on: str | None = None
        self.opened = 0
        self.commits = 0
        self.released = 0
        self.contexts: list[FakeContext] = []

    def open_context(self) -> FakeContext:
        self.opened += 1
        ctx = FakeContext(copy.deepcopy(self.document), fail_on=self.fail_on)
        self.contexts.append(ctx)
        return ctx

    def commit(self, ctx: HostContext) -> None:
        assert isinstance(ctx, FakeContext)
        self.commits += 1
        self.document = ctx.doc

    def release(self, ctx: HostContext) -> None:
        self.released += 1

    # --- fixture builders (act on committed state directly) ---

    @property
    def slides(self) -> list[list[FakeShape]]:
        return self.document.slides

    def add_shape(
        self,
        slide_index: int,
        kind: ShapeKind = ShapeKind.PICTURE,
        *,
        image_base64: str = "aW1hZ2U=",
        geometry: Geometry | None = None,
    ) -> ShapeRef:
        self.document.next_id += 1
        shape = FakeShape(
            shape_id=self.document.next_id,
            kind=kind,
            geometry=geometry or Geometry(left=10, top=20, width=300, height=150),
            name=f"{kind} {self.document.next_id}",
            image_base64=image_base64 if kind == ShapeKind.PICTURE else "",
        )
        self.document.slides[slide_index].append(shape)
        return ShapeRef(slide_index=slide_index, shape_id=shape.shape_id)

    def select(self, *refs: ShapeRef) -> None:
        self.document.selection = list(refs)


# ---------------------------------------------------------------------------
# Recording action panel
# ---------------------------------------------------------------------------


class RecordingPanel:
    """ActionPanel that records every call in order."""

    def __init__(self, value: str | None = "") -> None:
        self.value = value
        self.events: list[tuple[str, Any]] = []
        self.enabled = True
        self.status: tuple[str, StatusTone] | None = None
        self.reset_delay: float | None = None

    def read_input(self) -> str | None:
        self.events.append(("read_input", self.value))
        return self.value

    def clear_input(self) -> None:
        self.events.append(("clear_input", None))
        self.value = ""

    def set_busy(self, busy: bool) -> None:
        self.events.append(("set_busy", busy))
        self.enabled = not busy

    def show_status(self, message: str, tone: StatusTone) -> None:
        self.events.append(("show_status", tone))
        self.status = (message, tone)

    def schedule_reset(self, delay: float) -> None:
        self.events.append(("schedule_reset", delay))
        self.reset_delay = delay

    def names(self) -> list[str]:
        return [name for name, _ in self.events]


# ---------------------------------------------------------------------------
# HTTP helpers
# ---------------------------------------------------------------------------


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def messages_reply(text: str) -> httpx.Response:
    """A minimal Messages API reply whose first block carries *text*."""
    body = {"id": "msg_1", "type": "message", "content": [{"type": "text", "text": text}]}
    return httpx.Response(200, content=json.dumps(body).encode())


def png_bytes(size: tuple[int, int] = (4, 4)) -> bytes:
    """A real PNG image (python-pptx inspects image headers)."""
    from PIL import Image

    buf = io.BytesIO()
    Image.new("RGBA", size, (255, 0, 0, 255)).save(buf, format="PNG")
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def session() -> FakeSession:
    """Fake document with a single empty slide."""
    return FakeSession(slide_count=1)


@pytest.fixture
def empty_session() -> FakeSession:
    """Fake document with no slides at all."""
    return FakeSession(slide_count=0)


@pytest.fixture
def gateway(session: FakeSession) -> DocumentGateway:
    return DocumentGateway(session)


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> SlideSettings:
    """Settings isolated from the environment, with both API keys set."""
    for var in (
        "SLIDECTL_CONFIG",
        "SLIDECTL_GENERATION__API_KEY",
        "SLIDECTL_TRANSFORM__API_KEY",
        "SLIDECTL_DECK",
    ):
        monkeypatch.delenv(var, raising=False)
    return SlideSettings.from_cli(
        start=tmp_path,
        deck=tmp_path / "deck.pptx",
        generation={"api_key": "test-generation-key"},
        transform={"api_key": "test-transform-key"},
    )


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run CLI tests from an empty temp directory with a clean environment."""
    for var in (
        "SLIDECTL_CONFIG",
        "SLIDECTL_GENERATION__API_KEY",
        "SLIDECTL_TRANSFORM__API_KEY",
        "SLIDECTL_DECK",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Iterator[None]:
    """``--verbose`` runs enable telemetry for the rest of the context."""
    yield
    from slidectl.services.telemetry import _current_span, disable_telemetry

    disable_telemetry()
    _current_span.set(None)


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """CLI runs point the root handler at CliRunner's stderr; undo that."""
    import logging

    root = logging.getLogger()
    handlers = root.handlers[:]
    level = logging.getLogger("slidectl").level
    yield
    root.handlers = handlers
    logging.getLogger("slidectl").setLevel(level)


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def mock_http(monkeypatch: pytest.MonkeyPatch) -> Callable[[Handler], RecordingTransport]:
    """Route the CLI's shared httpx client through a RecordingTransport."""
    from slidectl.infrastructure import http

    real_create_client = http.create_client

    def install(handler: Handler) -> RecordingTransport:
        transport = RecordingTransport(handler)

        def create_client(config: Any, **_kwargs: Any) -> httpx.Client:
            return real_create_client(config, transport=transport)

        monkeypatch.setattr(http, "create_client", create_client)
        return transport

    return install
