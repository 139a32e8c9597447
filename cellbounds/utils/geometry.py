"""Leaf-node geometry helpers for axis-aligned rects and segments. No engine state."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from cellbounds.engine.tolerance import DEFAULT_TOLERANCE, Tolerance

if TYPE_CHECKING:
    from cellbounds.engine.context import Point, Rect


def _params(
    p1: Point, p2: Point, p3: Point, p4: Point, tol: Tolerance
) -> tuple[float, float] | None:
    """Parameters (t, u) where p1→p2 meets p3→p4, or None when parallel."""
    x1, y1 = p1
    x2, y2 = p2
    x3, y3 = p3
    x4, y4 = p4

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if tol.is_parallel(denom):
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom
    return t, u


def line_intersection(
    p1: Point, p2: Point, p3: Point, p4: Point, tol: Tolerance = DEFAULT_TOLERANCE
) -> Point | None:
    """Intersection point of segments p1→p2 and p3→p4, or None.

    Standard parametric form; both parameters must lie in [0, 1].
    """
    params = _params(p1, p2, p3, p4, tol)
    if params is None:
        return None
    t, u = params
    if 0 <= t <= 1 and 0 <= u <= 1:
        return (p1[0] + t * (p2[0] - p1[0]), p1[1] + t * (p2[1] - p1[1]))
    return None


def segments_intersect(
    p1: Point, p2: Point, p3: Point, p4: Point, tol: Tolerance = DEFAULT_TOLERANCE
) -> bool:
    return line_intersection(p1, p2, p3, p4, tol) is not None


def point_in_rect(p: Point, rect: Rect) -> bool:
    """Closed containment: points on the border count as inside."""
    return rect.min_x <= p[0] <= rect.max_x and rect.min_y <= p[1] <= rect.max_y


def rect_edges(rect: Rect) -> list[tuple[Point, Point]]:
    """The four edges, clockwise from the top-left corner."""
    x0, y0, x1, y1 = rect.min_x, rect.min_y, rect.max_x, rect.max_y
    return [
        ((x0, y0), (x1, y0)),
        ((x1, y0), (x1, y1)),
        ((x1, y1), (x0, y1)),
        ((x0, y1), (x0, y0)),
    ]


def segment_intersects_rect(
    start: Point, end: Point, rect: Rect, tol: Tolerance = DEFAULT_TOLERANCE
) -> bool:
    """True if the segment has an endpoint inside the rect or crosses one of its edges."""
    if point_in_rect(start, rect) or point_in_rect(end, rect):
        return True
    return any(segments_intersect(start, end, a, b, tol) for a, b in rect_edges(rect))


def point_rect_distance(p: Point, rect: Rect) -> float:
    """Euclidean distance from a point to the closest point of a rect (0 inside)."""
    cx = max(rect.min_x, min(p[0], rect.max_x))
    cy = max(rect.min_y, min(p[1], rect.max_y))
    return math.hypot(p[0] - cx, p[1] - cy)


def rects_array(rects: Sequence[Rect]) -> NDArray[np.float64]:
    """Stack rects into an Nx4 array of (min_x, min_y, max_x, max_y)."""
    if not rects:
        return np.empty((0, 4))
    return np.array([r.as_tuple() for r in rects], dtype=np.float64)


def sample_segment(start: Point, end: Point, samples: int = 10) -> NDArray[np.float64]:
    """samples + 1 evenly spaced points from start to end, endpoints included."""
    t = np.linspace(0.0, 1.0, samples + 1)[:, None]
    a = np.asarray(start, dtype=np.float64)
    b = np.asarray(end, dtype=np.float64)
    return a + t * (b - a)


def segment_distance_to_rects(
    start: Point,
    end: Point,
    boxes: NDArray[np.float64],
    samples: int = 10,
) -> float:
    """Minimum sampled distance from a segment to any of the boxes (Nx4 array).

    An approximation: the segment is probed at samples + 1 points and each
    probe is clamped into every box. Returns inf when there are no boxes.
    """
    if len(boxes) == 0:
        return float("inf")
    pts = sample_segment(start, end, samples)
    # (samples+1, N) clamped closest points
    cx = np.clip(pts[:, 0:1], boxes[None, :, 0], boxes[None, :, 2])
    cy = np.clip(pts[:, 1:2], boxes[None, :, 1], boxes[None, :, 3])
    dists = np.hypot(pts[:, 0:1] - cx, pts[:, 1:2] - cy)
    return float(np.min(dists))


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Proper overlap: positive-area intersection (shared edges don't count)."""
    return a.min_x < b.max_x and a.max_x > b.min_x and a.min_y < b.max_y and a.max_y > b.min_y


def edge_to_edge_distance(a: Rect, b: Rect) -> float:
    """Manhattan gap between two rects (0 when they touch or overlap)."""
    dx = max(a.min_x - b.max_x, b.min_x - a.max_x, 0.0)
    dy = max(a.min_y - b.max_y, b.min_y - a.max_y, 0.0)
    return dx + dy


def are_adjacent(a: Rect, b: Rect, tol: Tolerance = DEFAULT_TOLERANCE) -> bool:
    """Rects share (part of) an edge. Corner-only contact is not adjacency."""
    share_vertical = (
        tol.touching(a.max_x, b.min_x) or tol.touching(b.max_x, a.min_x)
    ) and not (a.max_y <= b.min_y or b.max_y <= a.min_y)

    share_horizontal = (
        tol.touching(a.max_y, b.min_y) or tol.touching(b.max_y, a.min_y)
    ) and not (a.max_x <= b.min_x or b.max_x <= a.min_x)

    return share_vertical or share_horizontal


def compute_bounds(rects: Sequence[Rect]) -> tuple[float, float, float, float]:
    """Tight (min_x, min_y, max_x, max_y) over all rects; all zeros when empty."""
    if not rects:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        min(r.min_x for r in rects),
        min(r.min_y for r in rects),
        max(r.max_x for r in rects),
        max(r.max_y for r in rects),
    )
