"""Tests for SlideTargetResolver."""

from __future__ import annotations

from slidectl.domain.geometry import Geometry
from slidectl.infrastructure.gateway import DocumentGateway
from slidectl.services.targets import TARGET_SLIDE_INDEX, SlideTargetResolver
from tests.conftest import FakeSession

GEO = Geometry(left=250, top=150, width=200, height=200)


class TestResolve:
    def test_existing_deck_uses_first_slide(self) -> None:
        session = FakeSession(slide_count=3)
        target = DocumentGateway(session).run(SlideTargetResolver(GEO).resolve)
        assert target.slide_index == TARGET_SLIDE_INDEX == 0
        assert target.created_slide is False
        assert target.geometry == GEO
        assert len(session.slides) == 3

    def test_empty_deck_gets_a_slide(self, empty_session: FakeSession) -> None:
        target = DocumentGateway(empty_session).run(SlideTargetResolver(GEO).resolve)
        assert target.created_slide is True
        assert target.slide_index == 0
        assert len(empty_session.slides) == 1

    def test_reads_fresh_state_every_time(self, empty_session: FakeSession) -> None:
        gateway = DocumentGateway(empty_session)
        resolver = SlideTargetResolver(GEO)
        first = gateway.run(resolver.resolve)
        second = gateway.run(resolver.resolve)
        assert first.created_slide is True
        assert second.created_slide is False
        assert len(empty_session.slides) == 1

    def test_syncs_before_deciding(self, session: FakeSession) -> None:
        DocumentGateway(session).run(SlideTargetResolver(GEO).resolve)
        assert session.contexts[0].sync_count >= 1
