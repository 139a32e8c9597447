"""Cell boundary engine — grid / region-merge pipeline."""

from cellbounds.engine.registry import transform, Layer, get_registry, load_transforms
from cellbounds.engine.context import PipelineContext, Rect, Line
from cellbounds.engine.pipeline import Pipeline, create_pipeline
from cellbounds.engine.errors import InvalidRectangleError, PipelineError
from cellbounds.engine.boundaries import calculate_cell_boundaries, compute_cell_boundaries

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "load_transforms",
    "PipelineContext",
    "Rect",
    "Line",
    "Pipeline",
    "create_pipeline",
    "InvalidRectangleError",
    "PipelineError",
    "calculate_cell_boundaries",
    "compute_cell_boundaries",
]
