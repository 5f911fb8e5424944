"""Tests for the Rich console factory."""

from slidectl.domain.types import StatusTone
from slidectl.output.console import create_console, get_output, style_for_kind, style_for_tone


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console(no_color=True)
        console.print("hello")
        assert get_output(console) == "hello\n"

    def test_tone_styles(self) -> None:
        assert style_for_tone(StatusTone.SUCCESS) == "slide.ok"
        assert style_for_tone(StatusTone.ERROR) == "slide.error"
        assert style_for_tone(StatusTone.INFO) == "slide.info"

    def test_kind_styles(self) -> None:
        assert style_for_kind("picture") == "slide.kind.picture"
        assert style_for_kind("other") == ""
