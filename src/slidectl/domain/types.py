"""Classification enums shared across the pipeline.

Image encodings, MIME kinds, shape kinds, outcome kinds, and the tones
a status message can take in the action panel.
"""

from __future__ import annotations

from enum import StrEnum


class EncodingKind(StrEnum):
    """How an acquired image payload is represented."""

    VECTOR_MARKUP = "vector_markup"
    RAW_BINARY = "raw_binary"
    ALREADY_ENCODED = "already_encoded"


class MimeKind(StrEnum):
    """Image formats the host accepts as an embeddable data URI."""

    SVG = "svg"
    PNG = "png"


class ShapeKind(StrEnum):
    """Coarse shape classification exposed by the host document."""

    PICTURE = "picture"
    TEXT = "text"
    GROUP = "group"
    OTHER = "other"


class OutcomeKind(StrEnum):
    """Terminal classification of one user-triggered operation."""

    SUCCESS = "success"
    USER_ERROR = "user_error"
    TRANSIENT_FAILURE = "transient_failure"
    CONFIGURATION_MISSING = "configuration_missing"
    INVALID_ENCODING = "invalid_encoding"


class StatusTone(StrEnum):
    """Visual tone of a status message."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
