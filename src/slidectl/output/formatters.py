"""Output-mode dispatch for OperationOutcome.

The CLI renders outcomes for humans (Rich), for scripts (--quiet), or
for machines (--json).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from slidectl.output.renderers import render_outcome, render_quiet

if TYPE_CHECKING:
    from slidectl.services.result import OperationOutcome


@dataclass(frozen=True)
class OutputSettings:
    """Which output mode the CLI was invoked with."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_outcome(outcome: OperationOutcome, *, settings: OutputSettings | None = None) -> str:
    """Format an OperationOutcome for display.

    JSON wins over quiet; quiet wins over the Rich rendering.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return outcome.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(outcome)
    return render_outcome(outcome, verbose=settings.verbose)
