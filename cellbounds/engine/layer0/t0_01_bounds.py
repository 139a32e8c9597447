"""T0.01 — Container Bounds.

Tight bounding box of all cells. The cells are translated so the box's min
corner sits at the origin, and the container size defaults to the box size.
Local cells are sorted by their rect, so group ids and every tie-break
downstream are independent of the caller's input order.
"""

from __future__ import annotations

import logging

from cellbounds.engine.context import Cell, PipelineContext
from cellbounds.engine.registry import Layer, transform
from cellbounds.utils.geometry import compute_bounds

logger = logging.getLogger(__name__)


@transform(
    id="T0.01",
    layer=Layer.INPUT,
    description="Compute container bounds and translate cells to the origin",
)
def container_bounds(ctx: PipelineContext) -> None:
    min_x, min_y, max_x, max_y = compute_bounds([c.rect for c in ctx.cells])

    ctx.offset = (min_x, min_y)
    if ctx.container_width is None:
        ctx.container_width = max_x - min_x
    if ctx.container_height is None:
        ctx.container_height = max_y - min_y

    ordered = sorted(ctx.cells, key=lambda c: c.rect.as_tuple())
    ctx.local_cells = [Cell(id=c.id, index=c.index, rect=c.rect.translate(-min_x, -min_y)) for c in ordered]

    logger.debug(
        "Container %.1f x %.1f, offset (%.1f, %.1f)",
        ctx.container_width,
        ctx.container_height,
        min_x,
        min_y,
    )
