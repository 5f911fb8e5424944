"""Slide geometry, insertion targets, and shape descriptors.

All coordinates are in points, the unit the host document API uses for
shape placement.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from slidectl.domain.types import ShapeKind


class Geometry(BaseModel):
    """Position and size of a shape on a slide."""

    model_config = {"frozen": True}

    left: float
    top: float
    width: float = Field(gt=0)
    height: float = Field(gt=0)


class SlideTarget(BaseModel):
    """Where an inserted image goes. Resolved fresh for every insertion."""

    model_config = {"frozen": True}

    slide_index: int = Field(ge=0)
    geometry: Geometry
    created_slide: bool = False


class ShapeRef(BaseModel):
    """Stable locator for a shape: slide position plus host shape id."""

    model_config = {"frozen": True}

    slide_index: int = Field(ge=0)
    shape_id: int


class ShapeInfo(ShapeRef):
    """A shape as reported by the host, with kind and placement."""

    kind: ShapeKind
    name: str = ""
    geometry: Geometry

    def ref(self) -> ShapeRef:
        return ShapeRef(slide_index=self.slide_index, shape_id=self.shape_id)


class SlideInfo(BaseModel):
    """Summary of one slide in the deck."""

    model_config = {"frozen": True}

    index: int
    slide_id: int
    shape_count: int = 0
