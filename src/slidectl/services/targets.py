"""SlideTargetResolver — picks the slide and position for a new image.

Always the first slide, creating one when the deck is empty, at a fixed
centered geometry.  The active slide in the host UI is not tracked.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from slidectl.domain.geometry import Geometry, SlideTarget

if TYPE_CHECKING:
    from slidectl.infrastructure.host import HostContext

logger = logging.getLogger(__name__)

TARGET_SLIDE_INDEX = 0


class SlideTargetResolver:
    """Resolves a :class:`SlideTarget` inside the caller's batch."""

    def __init__(self, geometry: Geometry) -> None:
        self._geometry = geometry

    def resolve(self, ctx: HostContext) -> SlideTarget:
        slides = ctx.load_slides()
        ctx.sync()

        created = False
        if not slides.value:
            ctx.add_slide()
            created = True
            logger.debug("Deck has no slides; queued a new one")

        return SlideTarget(
            slide_index=TARGET_SLIDE_INDEX,
            geometry=self._geometry,
            created_slide=created,
        )
