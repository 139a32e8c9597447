"""T1.01 — Midline Construction.

For every pair of cells with a real gap on an axis, place one candidate
separator at the middle of that gap, spanning the whole container.
"""

from __future__ import annotations

import logging

from cellbounds.engine.context import Cell, Midline, Orientation, PipelineContext
from cellbounds.engine.registry import Layer, transform

logger = logging.getLogger(__name__)


def build_midlines(cells: list[Cell], width: float, height: float) -> list[Midline]:
    midlines: list[Midline] = []

    for i, cell_a in enumerate(cells):
        a = cell_a.rect
        for cell_b in cells[i + 1:]:
            b = cell_b.rect
            pair = (cell_a.id, cell_b.id)

            if a.max_x < b.min_x or b.max_x < a.min_x:
                mid_x = (a.max_x + b.min_x) / 2 if a.max_x < b.min_x else (b.max_x + a.min_x) / 2
                midlines.append(
                    Midline(len(midlines), Orientation.VERTICAL, (mid_x, 0.0), (mid_x, height), pair)
                )

            if a.max_y < b.min_y or b.max_y < a.min_y:
                mid_y = (a.max_y + b.min_y) / 2 if a.max_y < b.min_y else (b.max_y + a.min_y) / 2
                midlines.append(
                    Midline(len(midlines), Orientation.HORIZONTAL, (0.0, mid_y), (width, mid_y), pair)
                )

    return midlines


@transform(
    id="T1.01",
    layer=Layer.CONSTRUCTION,
    dependencies=["T0.01"],
    description="Place a container-spanning midline in every gap between two cells",
)
def midlines(ctx: PipelineContext) -> None:
    ctx.midlines = build_midlines(ctx.local_cells, ctx.width, ctx.height)
    logger.debug("%d midlines from %d cells", len(ctx.midlines), ctx.num_cells)
