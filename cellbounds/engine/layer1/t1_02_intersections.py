"""T1.02 — Midline Intersections.

All-pairs parametric intersection test. Parallel and collinear pairs are
skipped. Crossings of a vertical and a horizontal midline are reported at
(vertical x, horizontal y) exactly, so later grid lines stay exact.
"""

from __future__ import annotations

import logging

from cellbounds.engine.context import Intersection, Midline, Orientation, PipelineContext
from cellbounds.engine.registry import Layer, transform
from cellbounds.engine.tolerance import DEFAULT_TOLERANCE, Tolerance
from cellbounds.utils.geometry import line_intersection

logger = logging.getLogger(__name__)


def find_intersections(midlines: list[Midline], tol: Tolerance = DEFAULT_TOLERANCE) -> list[Intersection]:
    intersections: list[Intersection] = []

    for i, m1 in enumerate(midlines):
        for m2 in midlines[i + 1:]:
            point = line_intersection(m1.start, m1.end, m2.start, m2.end, tol)
            if point is None:
                continue
            if m1.orientation is not m2.orientation:
                vertical, horizontal = (m1, m2) if m1.orientation is Orientation.VERTICAL else (m2, m1)
                point = (vertical.coord, horizontal.coord)
            intersections.append(Intersection(point=point, midline_ids=(m1.id, m2.id)))

    return intersections


@transform(
    id="T1.02",
    layer=Layer.CONSTRUCTION,
    dependencies=["T1.01"],
    description="Find pairwise midline intersections",
)
def intersections(ctx: PipelineContext) -> None:
    ctx.intersections = find_intersections(ctx.midlines, ctx.tol)
    logger.debug("%d intersections among %d midlines", len(ctx.intersections), len(ctx.midlines))
