"""Tests for the terminal action panel."""

from __future__ import annotations

from io import StringIO

from rich.console import Console

from slidectl.domain.types import StatusTone
from slidectl.output.panel import ConsolePanel


def _panel(value: str | None = "Acme") -> ConsolePanel:
    return ConsolePanel(value, console=Console(file=StringIO()))


class TestConsolePanel:
    def test_input_round_trip(self) -> None:
        panel = _panel()
        assert panel.read_input() == "Acme"
        panel.clear_input()
        assert panel.read_input() == ""

    def test_busy_toggles_control(self) -> None:
        panel = _panel()
        panel.set_busy(True)
        assert panel.busy
        assert panel.enabled is False
        panel.set_busy(False)
        assert not panel.busy
        assert panel.enabled is True

    def test_repeated_busy_calls_are_harmless(self) -> None:
        panel = _panel()
        panel.set_busy(False)
        panel.set_busy(True)
        panel.set_busy(True)
        panel.set_busy(False)
        assert not panel.busy

    def test_status_and_scheduled_reset(self) -> None:
        panel = _panel()
        panel.show_status("✓ Logo added to slide!", StatusTone.SUCCESS)
        panel.schedule_reset(5.0)
        assert panel.status_message == "✓ Logo added to slide!"
        assert panel.status_tone == StatusTone.SUCCESS
        assert panel.reset_after == 5.0
