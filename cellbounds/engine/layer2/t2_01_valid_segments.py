"""T2.01 — Segment Validity.

Drop every segment that enters a cell: an endpoint inside (borders included)
or a crossing of any of the cell's four edges. Survivors are the valid segments.
"""

from __future__ import annotations

import logging

from cellbounds.engine.context import PipelineContext, Rect, Segment
from cellbounds.engine.registry import Layer, transform
from cellbounds.engine.tolerance import DEFAULT_TOLERANCE, Tolerance
from cellbounds.utils.geometry import segment_intersects_rect

logger = logging.getLogger(__name__)


def filter_valid_segments(
    segments: list[Segment], cells: list[Rect], tol: Tolerance = DEFAULT_TOLERANCE
) -> list[Segment]:
    return [
        seg for seg in segments
        if not any(segment_intersects_rect(seg.start, seg.end, cell, tol) for cell in cells)
    ]


@transform(
    id="T2.01",
    layer=Layer.GRID,
    dependencies=["T1.03"],
    description="Discard segments that cut through a cell",
)
def valid_segments(ctx: PipelineContext) -> None:
    ctx.valid_segments = filter_valid_segments(ctx.segments, ctx.cell_rects(), ctx.tol)
    logger.debug("%d/%d segments valid", len(ctx.valid_segments), len(ctx.segments))
