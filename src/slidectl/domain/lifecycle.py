"""Operation lifecycle states and allowed transitions.

One user-triggered action walks::

    idle -> validating -> busy -> (succeeded | failed) -> idle

Validation failures skip ``busy`` and go straight to ``failed``.
"""

from __future__ import annotations

from enum import StrEnum


class OperationState(StrEnum):
    """Lifecycle state of a single action run."""

    IDLE = "idle"
    VALIDATING = "validating"
    BUSY = "busy"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


OPERATION_TRANSITIONS: dict[str, list[str]] = {
    "idle": ["validating"],
    "validating": ["busy", "failed"],
    "busy": ["succeeded", "failed"],
    "succeeded": ["idle"],
    "failed": ["idle"],
}


def can_transition(current: OperationState, target: OperationState) -> bool:
    """Return True if *target* is reachable from *current* in one step."""
    return target.value in OPERATION_TRANSITIONS.get(current.value, [])


class StateTracker:
    """Records the walk of one operation through the lifecycle."""

    def __init__(self) -> None:
        self.history: list[OperationState] = [OperationState.IDLE]

    @property
    def current(self) -> OperationState:
        return self.history[-1]

    def advance(self, target: OperationState) -> None:
        if not can_transition(self.current, target):
            msg = f"Invalid lifecycle transition: {self.current} -> {target}"
            raise ValueError(msg)
        self.history.append(target)
