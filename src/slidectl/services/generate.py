"""GenerativeAcquisition — text prompt to SVG icon via the Messages API.

One POST per prompt.  The reply's first content block is taken as SVG
markup as-is; malformed markup surfaces later, at normalization or
when the host tries to embed it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, ValidationError

from slidectl.domain.errors import ConfigurationMissing, TransientFailure
from slidectl.domain.images import ImagePayload
from slidectl.domain.types import EncodingKind
from slidectl.infrastructure.http import is_auth_failure
from slidectl.services.strategy import AcquisitionStrategy

if TYPE_CHECKING:
    import httpx

    from slidectl.config.models import GenerationConfig


class ContentBlock(BaseModel):
    """One content block of a Messages API reply."""

    model_config = {"extra": "ignore"}

    type: str = "text"
    text: str


class MessagesResponse(BaseModel):
    """The fields of a Messages API reply that icon generation relies on."""

    model_config = {"extra": "ignore"}

    content: list[ContentBlock] = Field(min_length=1)


def build_instruction(prompt: str, canvas_size: int) -> str:
    """Compose the user message asking for a bare SVG icon."""
    return (
        f"Create an SVG icon based on this description: {prompt}. "
        f"Return ONLY the SVG code, no explanations. "
        f"Make it {canvas_size}x{canvas_size} with a transparent background."
    )


class GenerativeAcquisition(AcquisitionStrategy):
    """Generates an icon as SVG markup from a free-text description."""

    name = "generate-icon"
    empty_input_message = "Please enter a description for the icon"

    def __init__(self, client: httpx.Client, config: GenerationConfig) -> None:
        super().__init__(client)
        self._config = config

    def acquire(self, value: str) -> ImagePayload:
        cfg = self._config
        if not cfg.api_key:
            raise ConfigurationMissing(
                "Icon generation needs an API key (SLIDECTL_GENERATION__API_KEY)",
                code="MISSING_API_KEY",
            )

        response = self._request(
            "POST",
            cfg.endpoint,
            headers={
                "x-api-key": cfg.api_key,
                "anthropic-version": cfg.anthropic_version,
                "content-type": "application/json",
            },
            json={
                "model": cfg.model,
                "max_tokens": cfg.max_tokens,
                "messages": [
                    {"role": "user", "content": build_instruction(value, cfg.canvas_size)}
                ],
            },
        )

        if is_auth_failure(response):
            raise ConfigurationMissing(
                "The generation service rejected the API key",
                code="REJECTED_API_KEY",
                detail={"status": response.status_code},
            )
        if not response.is_success:
            raise TransientFailure(
                f"Icon generation failed with status {response.status_code}",
                code="GENERATION_FAILED",
                detail={"status": response.status_code},
            )

        try:
            reply = MessagesResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise TransientFailure(
                "The generation service returned an unexpected response",
                code="MALFORMED_RESPONSE",
                detail={"errors": exc.error_count()},
            ) from exc

        return ImagePayload(content=reply.content[0].text, encoding=EncodingKind.VECTOR_MARKUP)
