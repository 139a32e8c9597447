"""T1.03 — Segment Slicing.

Cut every midline at its intersection points. Each piece records its sampled
minimum distance to the nearest cell, which later ranks grid rects for merging.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from cellbounds.engine.context import Intersection, Midline, Orientation, PipelineContext, Point, Rect, Segment
from cellbounds.engine.registry import Layer, transform
from cellbounds.engine.tolerance import DEFAULT_TOLERANCE, Tolerance
from cellbounds.utils.geometry import rects_array, segment_distance_to_rects

logger = logging.getLogger(__name__)


def cut_points(midline: Midline, points: list[Point], tol: Tolerance = DEFAULT_TOLERANCE) -> list[Point]:
    """Midline endpoints plus its intersection points, ordered along the midline.

    Coincident points collapse so no zero-length piece is produced.
    """
    axis = 1 if midline.orientation is Orientation.VERTICAL else 0
    ordered = [midline.start, *sorted(points, key=lambda p: p[axis]), midline.end]

    result: list[Point] = []
    for p in ordered:
        if result and tol.points_equal(result[-1], p):
            continue
        result.append(p)
    # The midline end wins over an intersection sitting on it
    if len(result) > 1 and tol.points_equal(result[-1], midline.end):
        result[-1] = midline.end
    return result


def slice_midlines(
    midlines: list[Midline],
    intersections: list[Intersection],
    cells: list[Rect],
    tol: Tolerance = DEFAULT_TOLERANCE,
    samples: int = 10,
) -> list[Segment]:
    by_midline: dict[int, list[Point]] = defaultdict(list)
    for inter in intersections:
        for mid in inter.midline_ids:
            by_midline[mid].append(inter.point)

    boxes = rects_array(cells)
    segments: list[Segment] = []

    for midline in midlines:
        points = cut_points(midline, by_midline[midline.id], tol)
        for start, end in zip(points, points[1:]):
            segments.append(
                Segment(
                    id=len(segments),
                    start=start,
                    end=end,
                    orientation=midline.orientation,
                    cell_ids=midline.cell_ids,
                    distance=segment_distance_to_rects(start, end, boxes, samples),
                )
            )

    return segments


@transform(
    id="T1.03",
    layer=Layer.CONSTRUCTION,
    dependencies=["T1.02"],
    description="Slice midlines into segments at their intersections",
)
def segments(ctx: PipelineContext) -> None:
    ctx.segments = slice_midlines(
        ctx.midlines,
        ctx.intersections,
        ctx.cell_rects(),
        ctx.tol,
        ctx.config.distance_samples,
    )
    logger.debug("%d segments from %d midlines", len(ctx.segments), len(ctx.midlines))
