"""TransformAcquisition — background removal for the selected picture.

The selection is captured fresh in its own gateway batch at the start of
every run.  Exactly one picture must be selected; the checks run before
any network call.  The resulting payload carries ``replaces`` so the
placer swaps the original picture instead of adding a new shape.
"""

from __future__ import annotations

import base64
import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel

from slidectl.domain.errors import ConfigurationMissing, TransientFailure, UserError
from slidectl.domain.geometry import ShapeInfo
from slidectl.domain.images import ImagePayload
from slidectl.domain.types import EncodingKind, ShapeKind
from slidectl.infrastructure.http import is_auth_failure
from slidectl.services.strategy import AcquisitionStrategy

if TYPE_CHECKING:
    import httpx

    from slidectl.config.models import TransformConfig
    from slidectl.infrastructure.gateway import DocumentGateway
    from slidectl.infrastructure.host import HostContext

logger = logging.getLogger(__name__)


class SelectionSnapshot(BaseModel):
    """The selected picture and its encoded image at capture time."""

    model_config = {"frozen": True}

    shape_count: int
    shape: ShapeInfo
    image_base64: str

    @property
    def shape_kind(self) -> ShapeKind:
        return self.shape.kind

    @property
    def image_bytes(self) -> bytes:
        return base64.b64decode(self.image_base64)


def _capture(ctx: HostContext) -> SelectionSnapshot:
    selected = ctx.get_selected_shapes()
    ctx.sync()

    count = len(selected.value)
    if count == 0:
        raise UserError("Please select an image first", code="NO_SELECTION")
    if count > 1:
        raise UserError(
            "Please select only one image", code="MULTIPLE_SELECTION", detail={"count": count}
        )

    shape = selected.value[0]
    if shape.kind != ShapeKind.PICTURE:
        raise UserError(
            "Selected object is not an image", code="NOT_AN_IMAGE", detail={"kind": shape.kind}
        )

    encoded = ctx.get_image_base64(shape.ref())
    ctx.sync()
    return SelectionSnapshot(shape_count=count, shape=shape, image_base64=encoded.value)


class TransformAcquisition(AcquisitionStrategy):
    """Sends the selected picture to a background-removal service."""

    name = "remove-background"
    takes_input = False

    def __init__(
        self,
        client: httpx.Client,
        config: TransformConfig,
        gateway: DocumentGateway,
    ) -> None:
        super().__init__(client)
        self._config = config
        self._gateway = gateway

    def capture_selection(self) -> SelectionSnapshot:
        return self._gateway.run(_capture)

    def acquire(self, value: str) -> ImagePayload:
        snapshot = self.capture_selection()
        logger.debug(
            "Captured picture %d on slide %d (%d bytes base64)",
            snapshot.shape.shape_id,
            snapshot.shape.slide_index,
            len(snapshot.image_base64),
        )

        cfg = self._config
        if not cfg.api_key:
            raise ConfigurationMissing(
                "Background removal needs an API key (SLIDECTL_TRANSFORM__API_KEY)",
                code="MISSING_API_KEY",
            )

        response = self._request(
            "POST",
            cfg.endpoint,
            headers={"X-Api-Key": cfg.api_key},
            json={"image_file_b64": snapshot.image_base64, "size": cfg.size},
        )

        if is_auth_failure(response):
            raise ConfigurationMissing(
                "The background removal service rejected the API key",
                code="REJECTED_API_KEY",
                detail={"status": response.status_code},
            )
        if not response.is_success:
            raise TransientFailure(
                f"Background removal failed with status {response.status_code}",
                code="TRANSFORM_FAILED",
                detail={"status": response.status_code},
            )
        if not response.content:
            raise TransientFailure(
                "Background removal returned an empty body", code="EMPTY_RESPONSE"
            )

        return ImagePayload(
            content=response.content,
            encoding=EncodingKind.RAW_BINARY,
            replaces=snapshot.shape.ref(),
        )
