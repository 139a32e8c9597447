"""T4.01 — Region Outline.

Every stretch of edge shared by two grid rects of different groups is a
boundary piece. Pieces are keyed canonically so each is emitted once.
"""

from __future__ import annotations

import logging

from cellbounds.engine.context import GridRect, Line, PipelineContext, Point
from cellbounds.engine.registry import Layer, transform
from cellbounds.engine.tolerance import DEFAULT_TOLERANCE, Tolerance, coord_key

logger = logging.getLogger(__name__)


def segment_key(p: Point, q: Point) -> tuple[tuple[float, float], tuple[float, float]]:
    a = (coord_key(p[0]), coord_key(p[1]))
    b = (coord_key(q[0]), coord_key(q[1]))
    return (a, b) if a <= b else (b, a)


def shared_edges(a: GridRect, b: GridRect, tol: Tolerance = DEFAULT_TOLERANCE) -> list[Line]:
    """Shared vertical and/or horizontal edge pieces of two rects (positive length only)."""
    ra, rb = a.rect, b.rect
    edges: list[Line] = []

    if tol.eq(ra.max_x, rb.min_x) or tol.eq(rb.max_x, ra.min_x):
        x = ra.max_x if tol.eq(ra.max_x, rb.min_x) else rb.max_x
        y0, y1 = max(ra.min_y, rb.min_y), min(ra.max_y, rb.max_y)
        if y1 - y0 > tol.point:
            edges.append(Line((x, y0), (x, y1)))

    if tol.eq(ra.max_y, rb.min_y) or tol.eq(rb.max_y, ra.min_y):
        y = ra.max_y if tol.eq(ra.max_y, rb.min_y) else rb.max_y
        x0, x1 = max(ra.min_x, rb.min_x), min(ra.max_x, rb.max_x)
        if x1 - x0 > tol.point:
            edges.append(Line((x0, y), (x1, y)))

    return edges


def build_outline(rects: list[GridRect], tol: Tolerance = DEFAULT_TOLERANCE) -> list[Line]:
    """Boundary pieces between grouped rects; rects without a group are ignored."""
    grouped = [r for r in rects if r.group_id is not None]
    pieces: dict[tuple, Line] = {}

    for i, a in enumerate(grouped):
        for b in grouped[i + 1:]:
            if a.group_id == b.group_id:
                continue
            for line in shared_edges(a, b, tol):
                pieces[segment_key(line.start, line.end)] = line

    return list(pieces.values())


@transform(
    id="T4.01",
    layer=Layer.OUTLINE,
    dependencies=["T3.01"],
    description="Extract edges shared by rects of different groups",
)
def outline(ctx: PipelineContext) -> None:
    ctx.outline = build_outline(ctx.grid_rects, ctx.tol)
    logger.debug("%d outline pieces", len(ctx.outline))
