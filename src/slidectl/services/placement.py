"""ImagePlacer — puts a normalized image into the document.

Two paths, one gateway batch each:

- **Insert**: resolve the slide target and add a new picture at the fixed
  geometry.  Used for generated icons and looked-up logos.
- **Replace**: swap an existing picture for the new image.  The host has
  no way to change a picture's image source, so the replacement is
  delete-and-recreate: the new picture takes the old one's slide and
  geometry, the old one is deleted, and the new one becomes the selection.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel

from slidectl.domain.errors import UserError
from slidectl.domain.geometry import ShapeInfo, ShapeRef

if TYPE_CHECKING:
    from slidectl.domain.images import EmbeddableImageReference
    from slidectl.infrastructure.gateway import DocumentGateway
    from slidectl.infrastructure.host import HostContext
    from slidectl.services.targets import SlideTargetResolver

logger = logging.getLogger(__name__)


class PlacementReceipt(BaseModel):
    """What a placement did to the document."""

    model_config = {"frozen": True}

    shape: ShapeInfo
    created_slide: bool = False
    replaced: ShapeRef | None = None


class ImagePlacer:
    """Inserts or replaces pictures through the document gateway."""

    def __init__(self, gateway: DocumentGateway, resolver: SlideTargetResolver) -> None:
        self._gateway = gateway
        self._resolver = resolver

    def place(
        self,
        reference: EmbeddableImageReference,
        *,
        replaces: ShapeRef | None = None,
    ) -> PlacementReceipt:
        if replaces is None:
            return self._gateway.run(lambda ctx: self._insert(ctx, reference))
        return self._gateway.run(lambda ctx: self._replace(ctx, reference, replaces))

    def _insert(self, ctx: HostContext, reference: EmbeddableImageReference) -> PlacementReceipt:
        target = self._resolver.resolve(ctx)
        added = ctx.add_image(target.slide_index, reference.uri, target.geometry)
        ctx.sync()
        logger.debug(
            "Inserted %s image as shape %d on slide %d",
            reference.mime,
            added.value.shape_id,
            target.slide_index,
        )
        return PlacementReceipt(shape=added.value, created_slide=target.created_slide)

    def _replace(
        self,
        ctx: HostContext,
        reference: EmbeddableImageReference,
        original: ShapeRef,
    ) -> PlacementReceipt:
        current = ctx.get_shape(original)
        ctx.sync()
        if current.value is None:
            raise UserError(
                "The selected image was removed before it could be replaced",
                code="SHAPE_GONE",
                detail={"slide_index": original.slide_index, "shape_id": original.shape_id},
            )

        added = ctx.add_image(original.slide_index, reference.uri, current.value.geometry)
        ctx.delete_shape(original)
        ctx.sync()
        ctx.set_selected_shapes([added.value.ref()])
        logger.debug(
            "Replaced shape %d with shape %d on slide %d",
            original.shape_id,
            added.value.shape_id,
            original.slide_index,
        )
        return PlacementReceipt(shape=added.value, replaced=original)
