"""Public entry points: rectangles in, boundary lines out."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from cellbounds.engine.config import PipelineConfig
from cellbounds.engine.context import Line, Midline, PipelineContext, Rect, Segment
from cellbounds.engine.errors import PipelineError
from cellbounds.engine.pipeline import create_pipeline
from cellbounds.scene.parser import build_context

logger = logging.getLogger(__name__)


@dataclass
class GroupView:
    group_id: int
    cell_id: str
    # [containing rect, original rectangle, *absorbed grid rects]
    rects: list[Rect]


@dataclass
class BoundaryResult:
    """Every intermediate stage in caller coordinates, for debugging and visualization."""

    boundaries: list[Line] = field(default_factory=list)
    container: Rect = field(default_factory=lambda: Rect(0.0, 0.0, 0.0, 0.0))
    cell_rects: list[Rect] = field(default_factory=list)
    midlines: list[Midline] = field(default_factory=list)
    segments: list[Segment] = field(default_factory=list)
    valid_segments: list[Segment] = field(default_factory=list)
    grid_rects: list[Rect] = field(default_factory=list)
    groups: list[GroupView] = field(default_factory=list)
    orphan_rects: list[Rect] = field(default_factory=list)
    partition: dict[str, Any] = field(default_factory=dict)


def run_boundary_pipeline(
    rectangles: Iterable[Any],
    container_width: float | None = None,
    container_height: float | None = None,
    config: PipelineConfig | None = None,
) -> PipelineContext:
    """Validate the input and run every stage. Raises instead of returning partial results."""
    ctx = build_context(rectangles, container_width, container_height)
    pipeline = create_pipeline(config)
    pipeline.run(ctx)
    if ctx.errors:
        raise PipelineError(ctx.errors)
    return ctx


def calculate_cell_boundaries(
    rectangles: Iterable[Any],
    container_width: float | None = None,
    container_height: float | None = None,
    config: PipelineConfig | None = None,
) -> list[Line]:
    """Boundary segments separating the empty space around each rectangle.

    rectangles: Rect instances or mappings in {minX, minY, maxX, maxY} or
    {x, y, width, height} form. Fewer than two rectangles give [].
    Raises InvalidRectangleError before any work when a rectangle is empty.
    """
    return run_boundary_pipeline(rectangles, container_width, container_height, config).boundaries


def compute_cell_boundaries(
    rectangles: Iterable[Any],
    container_width: float | None = None,
    container_height: float | None = None,
    config: PipelineConfig | None = None,
) -> BoundaryResult:
    """Same computation as calculate_cell_boundaries, keeping the intermediate stages."""
    ctx = run_boundary_pipeline(rectangles, container_width, container_height, config)
    return context_to_result(ctx)


def _shift_segment(seg: Segment, dx: float, dy: float) -> Segment:
    return Segment(
        id=seg.id,
        start=(seg.start[0] + dx, seg.start[1] + dy),
        end=(seg.end[0] + dx, seg.end[1] + dy),
        orientation=seg.orientation,
        cell_ids=seg.cell_ids,
        distance=seg.distance,
    )


def _shift_midline(m: Midline, dx: float, dy: float) -> Midline:
    return Midline(
        id=m.id,
        orientation=m.orientation,
        start=(m.start[0] + dx, m.start[1] + dy),
        end=(m.end[0] + dx, m.end[1] + dy),
        cell_ids=m.cell_ids,
    )


def context_to_result(ctx: PipelineContext) -> BoundaryResult:
    dx, dy = ctx.offset
    return BoundaryResult(
        boundaries=list(ctx.boundaries),
        container=Rect(dx, dy, dx + ctx.width, dy + ctx.height),
        cell_rects=[c.rect for c in ctx.cells],
        midlines=[_shift_midline(m, dx, dy) for m in ctx.midlines],
        segments=[_shift_segment(s, dx, dy) for s in ctx.segments],
        valid_segments=[_shift_segment(s, dx, dy) for s in ctx.valid_segments],
        grid_rects=[g.rect.translate(dx, dy) for g in ctx.grid_rects],
        groups=[
            GroupView(
                group_id=g.group_id,
                cell_id=g.cell.id,
                rects=[r.translate(dx, dy) for r in g.members],
            )
            for g in sorted(ctx.groups, key=lambda g: g.cell.index)
        ],
        orphan_rects=[ctx.grid_rects[i].rect.translate(dx, dy) for i in ctx.orphan_rect_ids],
        partition=dict(ctx.partition),
    )
