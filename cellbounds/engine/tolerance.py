"""Shared tolerance policy for every geometric comparison in the engine.

Coordinates are floats produced by midpoint and intersection arithmetic, so
equality, adjacency and collinearity are all decided within fixed bands.
"""

from __future__ import annotations

from dataclasses import dataclass

# Two points (or coordinates) closer than this on every axis are the same.
POINT_TOLERANCE = 1e-3

# Line pairs whose cross-product determinant is below this are parallel.
DETERMINANT_TOLERANCE = 1e-4

# Grid rects whose facing edges are this close share an edge.
ADJACENCY_TOLERANCE = 0.5

# Decimal places used when building dedup keys from coordinates.
KEY_PRECISION = 4


@dataclass(frozen=True)
class Tolerance:
    point: float = POINT_TOLERANCE
    determinant: float = DETERMINANT_TOLERANCE
    adjacency: float = ADJACENCY_TOLERANCE

    def eq(self, a: float, b: float) -> bool:
        return abs(a - b) < self.point

    def points_equal(self, p: tuple[float, float], q: tuple[float, float]) -> bool:
        return self.eq(p[0], q[0]) and self.eq(p[1], q[1])

    def is_parallel(self, det: float) -> bool:
        return abs(det) < self.determinant

    def touching(self, a: float, b: float) -> bool:
        """Edge coordinates close enough for two rects to be neighbours."""
        return abs(a - b) < self.adjacency

    def overlap_length(self, a0: float, a1: float, b0: float, b1: float) -> float:
        """Length of the overlap of [a0, a1] and [b0, b1] (0 when disjoint)."""
        return max(0.0, min(a1, b1) - max(a0, b0))

    def spans_overlap(self, a0: float, a1: float, b0: float, b1: float) -> bool:
        """True when the spans share more than a tolerance-sized piece."""
        return self.overlap_length(a0, a1, b0, b1) > self.point

    def unique_sorted(self, values: list[float]) -> list[float]:
        """Sort values, collapsing runs closer than the point tolerance.

        The first value of a run is kept, so exact inputs (container edges,
        midline coordinates) survive untouched.
        """
        result: list[float] = []
        for v in sorted(values):
            if result and self.eq(result[-1], v):
                continue
            result.append(v)
        return result


def coord_key(value: float) -> float:
    """Round a coordinate for use in dict keys."""
    return round(value, KEY_PRECISION) + 0.0


DEFAULT_TOLERANCE = Tolerance()
