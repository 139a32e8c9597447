"""API request models."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class CellContent(BaseModel):
    """One rectangle, in the {minX, minY, maxX, maxY} wire shape."""

    model_config = ConfigDict(populate_by_name=True)

    min_x: float = Field(..., alias="minX")
    min_y: float = Field(..., alias="minY")
    max_x: float = Field(..., alias="maxX")
    max_y: float = Field(..., alias="maxY")

    @field_validator("min_x", "min_y", "max_x", "max_y")
    @classmethod
    def _finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("coordinates must be finite")
        return v

    @model_validator(mode="after")
    def _non_empty(self) -> CellContent:
        if self.min_x >= self.max_x:
            raise ValueError(f"minX ({self.min_x}) must be < maxX ({self.max_x})")
        if self.min_y >= self.max_y:
            raise ValueError(f"minY ({self.min_y}) must be < maxY ({self.max_y})")
        return self


class BoundariesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cell_contents: list[CellContent] = Field(..., alias="cellContents", description="Rectangles to separate")
    container_width: float | None = Field(
        default=None, alias="containerWidth", ge=0, description="Overrides the computed bounds width"
    )
    container_height: float | None = Field(
        default=None, alias="containerHeight", ge=0, description="Overrides the computed bounds height"
    )

    def fingerprint(self) -> tuple:
        """Hashable, order-preserving key of the request for memoization."""
        return (
            tuple((c.min_x, c.min_y, c.max_x, c.max_y) for c in self.cell_contents),
            self.container_width,
            self.container_height,
        )
