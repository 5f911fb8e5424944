"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, slidectl.toml only contains
overrides.  A fresh setup needs nothing but the API keys.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from slidectl.domain.geometry import Geometry

# --- slidectl.toml sections ---


class GenerationConfig(BaseModel):
    """[generation] section — icon generation via the Messages API."""

    model_config = {"frozen": True}

    endpoint: str = "https://api.anthropic.com/v1/messages"
    model: str = "claude-3-5-sonnet-20241022"
    max_tokens: int = 1024
    anthropic_version: str = "2023-06-01"
    canvas_size: int = 512
    api_key: str | None = None


class LookupConfig(BaseModel):
    """[lookup] section — logo lookup by guessed domain."""

    model_config = {"frozen": True}

    base_url: str = "https://logo.clearbit.com"
    tld: str = ".com"


class TransformConfig(BaseModel):
    """[transform] section — background removal."""

    model_config = {"frozen": True}

    endpoint: str = "https://api.remove.bg/v1.0/removebg"
    size: str = "auto"
    api_key: str | None = None


class PlacementConfig(BaseModel):
    """[placement] section — fixed geometry for new images, in points."""

    model_config = {"frozen": True}

    left: float = 250
    top: float = 150
    width: float = Field(default=200, gt=0)
    height: float = Field(default=200, gt=0)

    def geometry(self) -> Geometry:
        return Geometry(left=self.left, top=self.top, width=self.width, height=self.height)


class StatusConfig(BaseModel):
    """[status] section."""

    model_config = {"frozen": True}

    reset_delay: float = 5.0


class HttpConfig(BaseModel):
    """[http] section. ``timeout = None`` waits indefinitely."""

    model_config = {"frozen": True}

    timeout: float | None = None
    follow_redirects: bool = True
