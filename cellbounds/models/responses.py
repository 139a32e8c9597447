"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    transforms_registered: int = 0


class PointModel(BaseModel):
    x: float
    y: float


class LineModel(BaseModel):
    start: PointModel
    end: PointModel


class BoundariesResponse(BaseModel):
    boundaries: list[LineModel] = Field(default_factory=list)
    cell_count: int = 0
    processing_time_ms: float = 0.0


class DebugResponse(BaseModel):
    """Every intermediate stage, already serialized to plain dicts."""

    result: dict[str, Any] = Field(default_factory=dict)
    cell_count: int = 0
    processing_time_ms: float = 0.0
