"""T2.02 — Sparse Grid.

Valid segment coordinates plus the container edges cut the container into a
grid. Every grid cell clear of all cells becomes a grid rect. Each cell also
gets a containing rect, the smallest grid-aligned box around it, which later
seeds that cell's region.
"""

from __future__ import annotations

import bisect
import logging

from cellbounds.engine.context import GridRect, Orientation, PipelineContext, Rect, Segment
from cellbounds.engine.registry import Layer, transform
from cellbounds.engine.tolerance import DEFAULT_TOLERANCE, Tolerance
from cellbounds.utils.geometry import rects_overlap

logger = logging.getLogger(__name__)


def grid_lines(
    valid: list[Segment], width: float, height: float, tol: Tolerance = DEFAULT_TOLERANCE
) -> tuple[list[float], list[float]]:
    """Sorted, tolerance-deduplicated x and y grid coordinates."""
    xs = [0.0, width]
    ys = [0.0, height]
    for seg in valid:
        if seg.orientation is Orientation.VERTICAL:
            xs.append(seg.coord)
        else:
            ys.append(seg.coord)
    return tol.unique_sorted(xs), tol.unique_sorted(ys)


def containing_rect(cell: Rect, xs: list[float], ys: list[float]) -> Rect:
    """Snap a cell outward to the nearest grid lines (extreme lines when none qualify)."""

    def floor_line(lines: list[float], v: float) -> float:
        i = bisect.bisect_right(lines, v)
        return lines[i - 1] if i > 0 else lines[0]

    def ceil_line(lines: list[float], v: float) -> float:
        i = bisect.bisect_left(lines, v)
        return lines[i] if i < len(lines) else lines[-1]

    left, right = floor_line(xs, cell.min_x), ceil_line(xs, cell.max_x)
    top, bottom = floor_line(ys, cell.min_y), ceil_line(ys, cell.max_y)
    return Rect(left, top, max(left, right), max(top, bottom))


def build_grid(
    cells: list[Rect], xs: list[float], ys: list[float], tol: Tolerance = DEFAULT_TOLERANCE
) -> tuple[list[GridRect], list[int]]:
    """Grid rect arena plus, per cell, the arena id of its containing rect.

    Grid cells come first in column-major order; containing rects follow,
    unless an identical grid rect already exists.
    """
    arena: list[GridRect] = []
    for x0, x1 in zip(xs, xs[1:]):
        if x1 - x0 <= 0:
            continue
        for y0, y1 in zip(ys, ys[1:]):
            if y1 - y0 <= 0:
                continue
            candidate = Rect(x0, y0, x1, y1)
            if any(rects_overlap(candidate, c) for c in cells):
                continue
            arena.append(GridRect(id=len(arena), rect=candidate))

    containing: list[int] = []
    for index, cell in enumerate(cells):
        rect = containing_rect(cell, xs, ys)
        existing = next(
            (g for g in arena if g.cell_index is None and _same_rect(g.rect, rect, tol)),
            None,
        )
        if existing is None:
            existing = GridRect(id=len(arena), rect=rect)
            arena.append(existing)
        existing.cell_index = index
        containing.append(existing.id)

    return arena, containing


def _same_rect(a: Rect, b: Rect, tol: Tolerance) -> bool:
    return tol.points_equal((a.min_x, a.min_y), (b.min_x, b.min_y)) and tol.points_equal(
        (a.max_x, a.max_y), (b.max_x, b.max_y)
    )


@transform(
    id="T2.02",
    layer=Layer.GRID,
    dependencies=["T2.01"],
    description="Build the sparse grid and each cell's containing rect",
)
def grid(ctx: PipelineContext) -> None:
    ctx.xs, ctx.ys = grid_lines(ctx.valid_segments, ctx.width, ctx.height, ctx.tol)
    ctx.grid_rects, ctx.containing_rects = build_grid(ctx.cell_rects(), ctx.xs, ctx.ys, ctx.tol)
    logger.debug(
        "Grid %dx%d lines, %d rects (%d containing)",
        len(ctx.xs),
        len(ctx.ys),
        len(ctx.grid_rects),
        len(ctx.containing_rects),
    )
