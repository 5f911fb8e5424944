"""Image payloads and the encoding normalizer.

Strategies hand back an :class:`ImagePayload` in whatever representation
their service produced.  :func:`normalize` turns it into the one form the
host accepts as an image source: a base64 data URI.

INVARIANT: an :class:`EmbeddableImageReference` always starts with the
canonical prefix for its MIME kind.
"""

from __future__ import annotations

import base64
import binascii

from pydantic import BaseModel, model_validator

from slidectl.domain.errors import InvalidEncoding
from slidectl.domain.geometry import ShapeRef
from slidectl.domain.types import EncodingKind, MimeKind

CANONICAL_PREFIXES: dict[MimeKind, str] = {
    MimeKind.SVG: "data:image/svg+xml;base64,",
    MimeKind.PNG: "data:image/png;base64,",
}


class ImagePayload(BaseModel):
    """Image content as acquired from a service, before normalization.

    Attributes:
        content: SVG text, raw bytes, or an already-built data URI.
        encoding: How *content* should be read.
        replaces: Shape the image replaces in place (transform only).
            ``None`` means the image is added as a new shape.
    """

    model_config = {"frozen": True}

    content: bytes | str
    encoding: EncodingKind
    replaces: ShapeRef | None = None


class EmbeddableImageReference(BaseModel):
    """Canonical embeddable image: a data URI plus its MIME kind."""

    model_config = {"frozen": True}

    uri: str
    mime: MimeKind

    @model_validator(mode="after")
    def _check_prefix(self) -> EmbeddableImageReference:
        if not self.uri.startswith(CANONICAL_PREFIXES[self.mime]):
            msg = f"uri does not start with the {self.mime} data prefix"
            raise ValueError(msg)
        return self

    @property
    def prefix(self) -> str:
        return CANONICAL_PREFIXES[self.mime]

    @property
    def base64_data(self) -> str:
        """The base64 body after the data prefix."""
        return self.uri[len(self.prefix) :]

    def decoded(self) -> bytes:
        """Decode the base64 body back to raw bytes."""
        try:
            return base64.b64decode(self.base64_data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidEncoding(f"Image data is not valid base64: {exc}") from exc


def _encode(data: bytes, mime: MimeKind) -> EmbeddableImageReference:
    body = base64.b64encode(data).decode("ascii")
    return EmbeddableImageReference(uri=CANONICAL_PREFIXES[mime] + body, mime=mime)


def _detect_mime(uri: str) -> MimeKind | None:
    for mime, prefix in CANONICAL_PREFIXES.items():
        if uri.startswith(prefix):
            return mime
    return None


def normalize(payload: ImagePayload) -> EmbeddableImageReference:
    """Convert *payload* into a canonical data URI reference.

    - vector markup: UTF-8 text is base64-encoded under the SVG prefix
    - raw binary: bytes are base64-encoded under the PNG prefix
    - already encoded: passed through if it carries a canonical prefix

    Raises:
        InvalidEncoding: the content does not match its declared encoding.
    """
    content = payload.content
    if payload.encoding == EncodingKind.VECTOR_MARKUP:
        if not isinstance(content, str):
            raise InvalidEncoding("Vector markup must be text")
        return _encode(content.encode("utf-8"), MimeKind.SVG)

    if payload.encoding == EncodingKind.RAW_BINARY:
        if not isinstance(content, bytes):
            raise InvalidEncoding("Raw binary payload must be bytes")
        return _encode(content, MimeKind.PNG)

    if isinstance(content, bytes):
        try:
            content = content.decode("ascii")
        except UnicodeDecodeError as exc:
            raise InvalidEncoding("Encoded payload is not ASCII text") from exc
    mime = _detect_mime(content)
    if mime is None:
        raise InvalidEncoding(
            "Encoded payload lacks a canonical data URI prefix",
            code="MISSING_PREFIX",
            detail={"head": content[:32]},
        )
    return EmbeddableImageReference(uri=content, mime=mime)
