"""Failure taxonomy for the acquisition and insertion pipeline.

Every strategy, the document gateway, and the host adapters raise only
subclasses of :class:`SlideError`.  The lifecycle controller turns them
into an :class:`~slidectl.services.result.OperationOutcome`; nothing
unclassified is expected to reach it.
"""

from __future__ import annotations

from typing import Any

from slidectl.domain.types import OutcomeKind


class SlideError(Exception):
    """Base class for classified pipeline failures."""

    kind: OutcomeKind = OutcomeKind.TRANSIENT_FAILURE
    default_code = "FAILED"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail = detail or {}


class UserError(SlideError):
    """Bad, missing or ambiguous input. The user can fix it and retry."""

    kind = OutcomeKind.USER_ERROR
    default_code = "INVALID_INPUT"


class TransientFailure(SlideError):
    """A remote or host call failed or returned a non-success status."""

    kind = OutcomeKind.TRANSIENT_FAILURE
    default_code = "SERVICE_FAILED"


class HostError(TransientFailure):
    """The host document rejected or failed a queued operation."""

    default_code = "HOST_FAILED"


class ConfigurationMissing(SlideError):
    """A feature needs a credential or setting that was not supplied."""

    kind = OutcomeKind.CONFIGURATION_MISSING
    default_code = "NOT_CONFIGURED"


class InvalidEncoding(SlideError):
    """An image payload could not be normalized. Indicates a defect."""

    kind = OutcomeKind.INVALID_ENCODING
    default_code = "INVALID_ENCODING"
