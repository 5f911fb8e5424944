"""OperationOutcome and OutcomeError — the universal action contract.

INVARIANT: Every triggered action ends in exactly one OperationOutcome.
The CLI and any other front end consume this type; it is never persisted.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, computed_field

from slidectl.domain.types import OutcomeKind, StatusTone


class OutcomeError(BaseModel):
    """Structured error payload within an OperationOutcome."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class OperationOutcome(BaseModel):
    """Terminal result of one action run.

    Attributes:
        op: Name of the action (e.g. ``"generate-icon"``).
        kind: Classification driving the status signal.
        message: User-facing status text.
        tone: How the status text is presented.
        data: Action-specific payload (inserted shape, lifecycle states).
        warnings: Non-fatal issues encountered during the run.
        error: Structured error if the run did not succeed.
        meta: Optional metadata (telemetry spans).
    """

    model_config = {"frozen": True}

    op: str
    kind: OutcomeKind
    message: str
    tone: StatusTone
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: OutcomeError | None = None
    meta: dict[str, Any] | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ok(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS
