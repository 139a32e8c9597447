"""T4.02 — Segment Normalization.

Merge collinear outline pieces that touch or overlap into maximal runs,
move them back to caller coordinates, and sort for deterministic output.
"""

from __future__ import annotations

import bisect
import logging
from collections import defaultdict

from cellbounds.engine.context import Line, PipelineContext, Point
from cellbounds.engine.registry import Layer, transform
from cellbounds.engine.tolerance import DEFAULT_TOLERANCE, Tolerance

logger = logging.getLogger(__name__)


def _merge_runs(spans: list[tuple[float, float]], tol: Tolerance) -> list[tuple[float, float]]:
    runs: list[tuple[float, float]] = []
    for lo, hi in sorted(spans):
        if runs and lo <= runs[-1][1] + tol.point:
            runs[-1] = (runs[-1][0], max(runs[-1][1], hi))
        else:
            runs.append((lo, hi))
    return runs


def _group_by_coord(
    entries: list[tuple[float, float, float]], tol: Tolerance
) -> dict[float, list[tuple[float, float]]]:
    """Bucket (coord, lo, hi) spans by fixed coordinate, equal within tolerance.

    Buckets are keyed by the first coordinate of each tolerance run.
    """
    reps = tol.unique_sorted([coord for coord, _, _ in entries])
    buckets: dict[float, list[tuple[float, float]]] = defaultdict(list)
    for coord, lo, hi in entries:
        buckets[reps[bisect.bisect_right(reps, coord) - 1]].append((lo, hi))
    return buckets


def merge_collinear(lines: list[Line], tol: Tolerance = DEFAULT_TOLERANCE) -> list[Line]:
    """Merge axis-aligned lines sharing a fixed coordinate. Slanted lines pass through."""
    horizontal: list[tuple[float, float, float]] = []
    vertical: list[tuple[float, float, float]] = []
    other: list[Line] = []

    for line in lines:
        (x0, y0), (x1, y1) = line.start, line.end
        if tol.eq(y0, y1):
            horizontal.append((y0, min(x0, x1), max(x0, x1)))
        elif tol.eq(x0, x1):
            vertical.append((x0, min(y0, y1), max(y0, y1)))
        else:
            other.append(line)

    merged: list[Line] = []
    for y, spans in _group_by_coord(horizontal, tol).items():
        merged.extend(Line((lo, y), (hi, y)) for lo, hi in _merge_runs(spans, tol))
    for x, spans in _group_by_coord(vertical, tol).items():
        merged.extend(Line((x, lo), (x, hi)) for lo, hi in _merge_runs(spans, tol))
    return merged + other


def canonicalize(lines: list[Line], offset: Point = (0.0, 0.0)) -> list[Line]:
    """Translate by offset, put the smaller endpoint first, sort by (start, end)."""
    dx, dy = offset
    moved = [line.translate(dx, dy).canonical() for line in lines]
    return sorted(moved, key=lambda line: (line.start, line.end))


def normalize_segments(
    lines: list[Line], offset: Point = (0.0, 0.0), tol: Tolerance = DEFAULT_TOLERANCE
) -> list[Line]:
    return canonicalize(merge_collinear(lines, tol), offset)


@transform(
    id="T4.02",
    layer=Layer.OUTLINE,
    dependencies=["T4.01"],
    description="Merge collinear outline pieces into canonical boundaries",
)
def normalize(ctx: PipelineContext) -> None:
    ctx.boundaries = normalize_segments(ctx.outline, ctx.offset, ctx.tol)
    logger.debug("%d outline pieces -> %d boundaries", len(ctx.outline), len(ctx.boundaries))
