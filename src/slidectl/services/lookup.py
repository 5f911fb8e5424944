"""LookupAcquisition — company or brand name to logo image.

The domain is guessed from the name (lowercase, whitespace removed,
fixed TLD appended).  A wrong guess is not retried with alternatives.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from slidectl.domain.errors import TransientFailure
from slidectl.domain.images import ImagePayload
from slidectl.domain.types import EncodingKind
from slidectl.services.strategy import AcquisitionStrategy

if TYPE_CHECKING:
    import httpx

    from slidectl.config.models import LookupConfig


def guess_domain(name: str, tld: str = ".com") -> str:
    """``"Acme Corp"`` -> ``"acmecorp.com"``."""
    return "".join(name.lower().split()) + tld


class LookupAcquisition(AcquisitionStrategy):
    """Fetches a raster logo from a public logo-lookup endpoint."""

    name = "fetch-logo"
    empty_input_message = "Please enter a company or brand name"

    def __init__(self, client: httpx.Client, config: LookupConfig) -> None:
        super().__init__(client)
        self._config = config

    def logo_url(self, value: str) -> str:
        domain = guess_domain(value, self._config.tld)
        return f"{self._config.base_url.rstrip('/')}/{domain}"

    def acquire(self, value: str) -> ImagePayload:
        url = self.logo_url(value)
        response = self._request("GET", url)

        if not response.is_success:
            raise TransientFailure(
                f"No logo found at {url}",
                code="LOGO_NOT_FOUND",
                detail={"status": response.status_code, "url": url},
            )
        if not response.content:
            raise TransientFailure(
                f"Logo lookup returned an empty body for {url}",
                code="EMPTY_RESPONSE",
                detail={"url": url},
            )

        return ImagePayload(content=response.content, encoding=EncodingKind.RAW_BINARY)
