"""Unified settings — CLI flags, env vars, and TOML config in one object.

Sources, strongest first: CLI flags, ``SLIDECTL_*`` environment variables
(``__`` separates nested sections), the nearest ``slidectl.toml``, and
the defaults on the section models.  API keys normally come from the
environment: ``SLIDECTL_GENERATION__API_KEY`` and
``SLIDECTL_TRANSFORM__API_KEY``.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from slidectl.config.discovery import find_config
from slidectl.config.models import (
    GenerationConfig,
    HttpConfig,
    LookupConfig,
    PlacementConfig,
    StatusConfig,
    TransformConfig,
)

DEFAULT_DECK = Path("presentation.pptx")

# TOML contents handed to the source while ``from_cli`` builds an instance.
_loaded_toml: ContextVar[dict[str, Any] | None] = ContextVar("_loaded_toml", default=None)


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*; a syntax error becomes a ClickException naming the file."""
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


class TomlDataSource(PydanticBaseSettingsSource):
    """Feeds already-parsed TOML tables to pydantic-settings."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class SlideSettings(BaseSettings):
    """Settings for one slidectl invocation.

    Attributes:
        deck: The ``.pptx`` file actions operate on.
        config_path: The TOML file that was loaded, if any.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="SLIDECTL_",
        env_nested_delimiter="__",
    )

    deck: Path = DEFAULT_DECK
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    lookup: LookupConfig = Field(default_factory=LookupConfig)
    transform: TransformConfig = Field(default_factory=TransformConfig)
    placement: PlacementConfig = Field(default_factory=PlacementConfig)
    status: StatusConfig = Field(default_factory=StatusConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, TomlDataSource(settings_cls, _loaded_toml.get() or {})

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> SlideSettings:
        """Build settings for a CLI run.

        An explicit *config_path* replaces discovery; otherwise the nearest
        ``slidectl.toml`` above *start* (default: cwd) is used.  Flags left
        at ``None`` fall through to env and TOML.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(start)

        data = read_toml(toml_path) if toml_path else {}
        flags = {name: value for name, value in cli_flags.items() if value is not None}

        token = _loaded_toml.set(data)
        try:
            return cls(config_path=toml_path, **flags)
        finally:
            _loaded_toml.reset(token)
