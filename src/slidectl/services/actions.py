"""Named actions — the command objects a front end triggers.

Each :class:`Action` binds an acquisition strategy to the status
messages its panel shows.  :func:`build_registry` wires the three
built-in actions against one gateway and one HTTP client.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from slidectl.domain.types import StatusTone
from slidectl.services.generate import GenerativeAcquisition
from slidectl.services.lookup import LookupAcquisition
from slidectl.services.transform import TransformAcquisition

if TYPE_CHECKING:
    import httpx

    from slidectl.config.settings import SlideSettings
    from slidectl.infrastructure.gateway import DocumentGateway
    from slidectl.services.strategy import AcquisitionStrategy


@dataclass(frozen=True)
class ActionMessages:
    """Status texts for one action.

    ``failure`` is shown for transient failures with ``failure_tone``;
    ``not_configured`` is always informational.
    """

    success: str
    failure: str
    failure_tone: StatusTone
    not_configured: str


@dataclass(frozen=True)
class Action:
    """A named, independently triggerable action."""

    name: str
    strategy: AcquisitionStrategy
    messages: ActionMessages
    description: str = ""


GENERATE_ICON_MESSAGES = ActionMessages(
    success="✓ Icon generated and added to slide!",
    failure=(
        "Note: icon generation is unavailable right now. "
        "Check the generation API key and your internet connection."
    ),
    failure_tone=StatusTone.INFO,
    not_configured=(
        "Note: icon generation needs an API key for the generation service. "
        "Set SLIDECTL_GENERATION__API_KEY to enable it."
    ),
)

FETCH_LOGO_MESSAGES = ActionMessages(
    success="✓ Logo added to slide!",
    failure="Could not find logo. Try a different company name or ensure internet connection.",
    failure_tone=StatusTone.ERROR,
    not_configured="Note: logo lookup is not configured.",
)

REMOVE_BACKGROUND_MESSAGES = ActionMessages(
    success="✓ Background removed!",
    failure=(
        "Note: background removal is unavailable right now. "
        "Check the remove.bg (or similar service) API key and your internet connection."
    ),
    failure_tone=StatusTone.INFO,
    not_configured=(
        "Note: background removal needs an API key (remove.bg or similar service). "
        "Set SLIDECTL_TRANSFORM__API_KEY to enable it."
    ),
)


class ActionRegistry:
    """Actions keyed by name."""

    def __init__(self) -> None:
        self._actions: dict[str, Action] = {}

    def register(self, action: Action) -> None:
        if action.name in self._actions:
            msg = f"Action already registered: {action.name}"
            raise ValueError(msg)
        self._actions[action.name] = action

    def get(self, name: str) -> Action:
        try:
            return self._actions[name]
        except KeyError:
            msg = f"Unknown action: {name!r}. Known: {', '.join(self.names())}"
            raise KeyError(msg) from None

    def names(self) -> list[str]:
        return sorted(self._actions)

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions.values())

    def __len__(self) -> int:
        return len(self._actions)


def build_registry(
    settings: SlideSettings,
    gateway: DocumentGateway,
    client: httpx.Client,
) -> ActionRegistry:
    """Register the generate-icon, fetch-logo and remove-background actions."""
    registry = ActionRegistry()
    registry.register(
        Action(
            name=GenerativeAcquisition.name,
            strategy=GenerativeAcquisition(client, settings.generation),
            messages=GENERATE_ICON_MESSAGES,
            description="Generate an SVG icon from a text description.",
        )
    )
    registry.register(
        Action(
            name=LookupAcquisition.name,
            strategy=LookupAcquisition(client, settings.lookup),
            messages=FETCH_LOGO_MESSAGES,
            description="Fetch a company logo by name.",
        )
    )
    registry.register(
        Action(
            name=TransformAcquisition.name,
            strategy=TransformAcquisition(client, settings.transform, gateway),
            messages=REMOVE_BACKGROUND_MESSAGES,
            description="Remove the background of the selected picture.",
        )
    )
    return registry
