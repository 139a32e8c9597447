"""Pipeline configuration — tolerances, sampling and merge policy."""

from __future__ import annotations

from dataclasses import dataclass, field

from cellbounds.engine.tolerance import Tolerance

ORPHAN_POLICIES = ("nearest", "ignore")


@dataclass
class PipelineConfig:
    """Controls the numeric policy and gating of the boundary pipeline."""

    # Shared comparison bands (point coincidence, parallel lines, adjacency)
    tolerance: Tolerance = field(default_factory=Tolerance)

    # Segment-to-cell distance is sampled at distance_samples + 1 points
    distance_samples: int = 10

    # What to do with grid rects no seed can reach:
    #   "nearest": join the group of the nearest cell (edge-to-edge distance)
    #   "ignore":  leave them ungrouped; they get no outline
    orphan_policy: str = "nearest"

    # Fewer cells than this: skip everything after layer 0
    min_cells: int = 2

    def __post_init__(self) -> None:
        if self.orphan_policy not in ORPHAN_POLICIES:
            raise ValueError(
                f"orphan_policy must be one of {ORPHAN_POLICIES}, got {self.orphan_policy!r}"
            )
        if self.distance_samples < 1:
            raise ValueError("distance_samples must be >= 1")
