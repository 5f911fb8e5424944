"""OperationController — runs one action through its full lifecycle.

Pipeline: VALIDATE → BUSY → ACQUIRE → NORMALIZE → PLACE → SIGNAL

- Blank input fails validation with an error status; no strategy runs.
- The panel is busy (control disabled, indicator shown) from the end of
  validation until the run finishes, whatever the outcome.
- Success clears the input; failure leaves it as typed.
- Success and error statuses reset after a delay; informational
  notices stay.
- No retry.  Every failure, classified or not, ends in an outcome.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from slidectl.domain.errors import (
    ConfigurationMissing,
    HostError,
    InvalidEncoding,
    SlideError,
    TransientFailure,
    UserError,
)
from slidectl.domain.images import normalize
from slidectl.domain.lifecycle import OperationState, StateTracker
from slidectl.domain.types import OutcomeKind, StatusTone
from slidectl.services.result import OperationOutcome, OutcomeError
from slidectl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from slidectl.services.actions import Action
    from slidectl.services.placement import ImagePlacer, PlacementReceipt

logger = logging.getLogger(__name__)

_AUTO_RESET_TONES = frozenset({StatusTone.SUCCESS, StatusTone.ERROR})

INVALID_ENCODING_MESSAGE = "The service returned an image that could not be prepared for the slide."


class ActionPanel(Protocol):
    """The user-facing control an action is triggered from."""

    def read_input(self) -> str | None: ...

    def clear_input(self) -> None: ...

    def set_busy(self, busy: bool) -> None: ...

    def show_status(self, message: str, tone: StatusTone) -> None: ...

    def schedule_reset(self, delay: float) -> None: ...


@dataclass
class _Draft:
    kind: OutcomeKind
    message: str
    tone: StatusTone
    data: dict[str, Any] = field(default_factory=dict)
    error: OutcomeError | None = None


class OperationController:
    """Drives actions from validation to status signal."""

    def __init__(self, placer: ImagePlacer, *, reset_delay: float = 5.0) -> None:
        self._placer = placer
        self._reset_delay = reset_delay

    @traced
    def trigger(self, action: Action, panel: ActionPanel) -> OperationOutcome:
        """Run *action* with the input currently in *panel*."""
        tracker = StateTracker()
        tracker.advance(OperationState.VALIDATING)
        try:
            value = action.strategy.validate(panel.read_input())
        except UserError as exc:
            tracker.advance(OperationState.FAILED)
            return self._finish(action, panel, tracker, self._failed(action, exc))

        tracker.advance(OperationState.BUSY)
        panel.set_busy(True)
        try:
            try:
                receipt = self._run_pipeline(action, value)
            except SlideError as exc:
                draft = self._failed(action, exc)
            except Exception as exc:
                logger.exception("Unexpected failure in %s", action.name)
                unexpected = TransientFailure(
                    f"Unexpected error: {exc}",
                    code="UNEXPECTED",
                    detail={"type": type(exc).__name__},
                )
                draft = self._failed(action, unexpected)
            else:
                draft = self._succeeded(action, receipt)

            tracker.advance(
                OperationState.SUCCEEDED
                if draft.kind == OutcomeKind.SUCCESS
                else OperationState.FAILED
            )
            outcome = self._finish(action, panel, tracker, draft)
            if outcome.ok:
                panel.clear_input()
        finally:
            panel.set_busy(False)
        return outcome

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run_pipeline(self, action: Action, value: str) -> PlacementReceipt:
        with trace_span("acquire") as span:
            payload = action.strategy.acquire(value)
            if span:
                span.annotate("encoding", payload.encoding.value)
        with trace_span("normalize"):
            reference = normalize(payload)
        with trace_span("place") as span:
            receipt = self._placer.place(reference, replaces=payload.replaces)
            if span:
                span.annotate("shape_id", receipt.shape.shape_id)
        return receipt

    def _succeeded(self, action: Action, receipt: PlacementReceipt) -> _Draft:
        data: dict[str, Any] = {
            "shape_id": receipt.shape.shape_id,
            "slide_index": receipt.shape.slide_index,
            "geometry": receipt.shape.geometry.model_dump(),
            "created_slide": receipt.created_slide,
        }
        if receipt.replaced is not None:
            data["replaced_shape_id"] = receipt.replaced.shape_id
        return _Draft(
            kind=OutcomeKind.SUCCESS,
            message=action.messages.success,
            tone=StatusTone.SUCCESS,
            data=data,
        )

    def _failed(self, action: Action, exc: SlideError) -> _Draft:
        messages = action.messages
        if isinstance(exc, UserError):
            message, tone = exc.message, StatusTone.ERROR
        elif isinstance(exc, ConfigurationMissing):
            message, tone = messages.not_configured, StatusTone.INFO
        elif isinstance(exc, InvalidEncoding):
            message, tone = INVALID_ENCODING_MESSAGE, StatusTone.ERROR
        elif isinstance(exc, HostError):
            message, tone = f"Could not update the slide: {exc.message}", StatusTone.ERROR
        else:
            message, tone = messages.failure, messages.failure_tone

        logger.info("%s failed: %s (%s)", action.name, exc.message, exc.code)
        return _Draft(
            kind=exc.kind,
            message=message,
            tone=tone,
            error=OutcomeError(code=exc.code, message=exc.message, detail=exc.detail),
        )

    def _finish(
        self,
        action: Action,
        panel: ActionPanel,
        tracker: StateTracker,
        draft: _Draft,
    ) -> OperationOutcome:
        panel.show_status(draft.message, draft.tone)
        if draft.tone in _AUTO_RESET_TONES:
            panel.schedule_reset(self._reset_delay)
        tracker.advance(OperationState.IDLE)

        return OperationOutcome(
            op=action.name,
            kind=draft.kind,
            message=draft.message,
            tone=draft.tone,
            data={**draft.data, "states": [s.value for s in tracker.history]},
            error=draft.error,
        )
