"""AcquisitionStrategy — abstract base for the three image sources.

A strategy validates its user input, then fetches image content from
one external service and returns it as an :class:`ImagePayload`.

INVARIANT: ``acquire`` raises only UserError, TransientFailure or
ConfigurationMissing.  Transport-level httpx errors are classified
here so no raw network exception escapes a strategy.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

import httpx

from slidectl.domain.errors import TransientFailure, UserError

if TYPE_CHECKING:
    from slidectl.domain.images import ImagePayload

logger = logging.getLogger(__name__)


class AcquisitionStrategy(ABC):
    """Base for generative, lookup and transform acquisition.

    Subclasses set ``name`` and ``empty_input_message``.  Strategies that
    take no typed input set ``takes_input = False`` and skip validation.
    """

    name: ClassVar[str]
    takes_input: ClassVar[bool] = True
    empty_input_message: ClassVar[str] = "Please enter a value"

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def validate(self, raw: str | None) -> str:
        """Return the trimmed input, or raise UserError if it is blank."""
        if not self.takes_input:
            return ""
        value = (raw or "").strip()
        if not value:
            raise UserError(self.empty_input_message, code="EMPTY_INPUT")
        return value

    @abstractmethod
    def acquire(self, value: str) -> ImagePayload:
        """Fetch image content for the validated *value*."""

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send one request.

        A URL httpx rejects becomes UserError; transport failures become
        TransientFailure.
        """
        logger.debug("%s %s %s", self.name, method, url)
        try:
            return self._client.request(method, url, **kwargs)
        except httpx.InvalidURL as exc:
            raise UserError(
                f"That input cannot be sent to {self.name}: {exc}",
                code="BAD_INPUT",
                detail={"url": url},
            ) from exc
        except httpx.HTTPError as exc:
            raise TransientFailure(
                f"Could not reach {url}: {exc}",
                code="UNREACHABLE",
                detail={"url": url},
            ) from exc
