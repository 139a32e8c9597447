"""POST /api/boundaries — cell boundary computation."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Request

from cellbounds.config import Settings
from cellbounds.dependencies import get_settings
from cellbounds.engine.boundaries import calculate_cell_boundaries, compute_cell_boundaries
from cellbounds.engine.config import PipelineConfig
from cellbounds.engine.context import Line, Rect
from cellbounds.engine.errors import InvalidRectangleError, PipelineError
from cellbounds.models.requests import BoundariesRequest
from cellbounds.models.responses import BoundariesResponse, DebugResponse, LineModel
from cellbounds.scene.serializer import replace_non_finite, result_to_dict

logger = logging.getLogger(__name__)

router = APIRouter()

BoundaryCache = Callable[[tuple, str], tuple[Line, ...]]


def _pipeline_config(orphan_policy: str) -> PipelineConfig:
    return PipelineConfig(orphan_policy=orphan_policy)


def _boundaries_for(fingerprint: tuple, orphan_policy: str) -> tuple[Line, ...]:
    rects, width, height = fingerprint
    lines = calculate_cell_boundaries(
        [Rect(*r) for r in rects], width, height, config=_pipeline_config(orphan_policy)
    )
    return tuple(lines)


def build_boundary_cache(maxsize: int) -> BoundaryCache:
    """Memoized boundary computation keyed on (request fingerprint, orphan policy)."""
    return lru_cache(maxsize=maxsize)(_boundaries_for)


def _http_error(e: InvalidRectangleError | PipelineError) -> HTTPException:
    if isinstance(e, InvalidRectangleError):
        return HTTPException(status_code=422, detail=str(e))
    logger.error("Boundary pipeline failed: %s", e.errors)
    return HTTPException(status_code=500, detail=str(e))


@router.post("/boundaries", response_model=BoundariesResponse)
def boundaries(
    body: BoundariesRequest,
    request: Request,
    app_settings: Settings = Depends(get_settings),
) -> BoundariesResponse:
    start = time.perf_counter()
    cache: BoundaryCache = request.app.state.boundary_cache
    try:
        lines = cache(body.fingerprint(), app_settings.orphan_policy)
    except (InvalidRectangleError, PipelineError) as e:
        raise _http_error(e) from e

    elapsed = (time.perf_counter() - start) * 1000
    return BoundariesResponse(
        boundaries=[LineModel.model_validate(line.as_dict()) for line in lines],
        cell_count=len(body.cell_contents),
        processing_time_ms=round(elapsed, 1),
    )


@router.post("/boundaries/debug", response_model=DebugResponse)
def boundaries_debug(
    body: BoundariesRequest, app_settings: Settings = Depends(get_settings)
) -> DebugResponse:
    """Uncached: returns every intermediate stage for visualization."""
    start = time.perf_counter()
    rects, width, height = body.fingerprint()
    try:
        result = compute_cell_boundaries(
            [Rect(*r) for r in rects], width, height, config=_pipeline_config(app_settings.orphan_policy)
        )
    except (InvalidRectangleError, PipelineError) as e:
        raise _http_error(e) from e

    elapsed = (time.perf_counter() - start) * 1000
    return DebugResponse(
        result=replace_non_finite(result_to_dict(result)),
        cell_count=len(rects),
        processing_time_ms=round(elapsed, 1),
    )
