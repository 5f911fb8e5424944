"""ConsolePanel — the action panel as seen from a terminal.

The typed input is the command argument; the busy indicator is a Rich
spinner on stderr so stdout stays clean for ``--json``.  The status
message itself is printed by ``AppContext.emit`` once the run ends, so
the panel only records it.  A CLI run exits right after its status is
shown, so a scheduled reset is recorded rather than timed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from slidectl.output.console import SLIDE_THEME

if TYPE_CHECKING:
    from rich.status import Status

    from slidectl.domain.types import StatusTone


class ConsolePanel:
    """Terminal implementation of the ``ActionPanel`` protocol."""

    def __init__(self, value: str | None = None, *, console: Console | None = None) -> None:
        self.value = value
        self.enabled = True
        self.status_message: str | None = None
        self.status_tone: StatusTone | None = None
        self.reset_after: float | None = None
        self._console = console or Console(stderr=True, theme=SLIDE_THEME)
        self._spinner: Status | None = None

    def read_input(self) -> str | None:
        return self.value

    def clear_input(self) -> None:
        self.value = ""

    def set_busy(self, busy: bool) -> None:
        self.enabled = not busy
        if busy and self._spinner is None:
            self._spinner = self._console.status("Processing...", spinner="dots")
            self._spinner.start()
        elif not busy and self._spinner is not None:
            self._spinner.stop()
            self._spinner = None

    @property
    def busy(self) -> bool:
        return self._spinner is not None

    def show_status(self, message: str, tone: StatusTone) -> None:
        self.status_message = message
        self.status_tone = tone

    def schedule_reset(self, delay: float) -> None:
        self.reset_after = delay
