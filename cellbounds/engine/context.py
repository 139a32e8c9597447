"""PipelineContext — the single mutable state object flowing through all transforms.

Per-stage results live in dedicated fields, filled in layer order:
cells → midlines → intersections → segments → valid_segments → grid → groups → boundaries.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from cellbounds.engine.config import PipelineConfig

Point = tuple[float, float]


class Orientation(str, enum.Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle. The only rectangle shape used inside the engine."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_xywh(cls, x: float, y: float, width: float, height: float) -> Rect:
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def area(self) -> float:
        return self.width * self.height

    def translate(self, dx: float, dy: float) -> Rect:
        return Rect(self.min_x + dx, self.min_y + dy, self.max_x + dx, self.max_y + dy)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)


@dataclass(frozen=True)
class Cell:
    """One input rectangle ("cell content"). Its index doubles as its group id."""

    id: str
    index: int
    rect: Rect


@dataclass(frozen=True)
class Midline:
    id: int
    orientation: Orientation
    start: Point
    end: Point
    cell_ids: tuple[str, str]

    @property
    def coord(self) -> float:
        """Fixed coordinate: x for vertical midlines, y for horizontal ones."""
        return self.start[0] if self.orientation is Orientation.VERTICAL else self.start[1]


@dataclass(frozen=True)
class Intersection:
    point: Point
    midline_ids: tuple[int, int]


@dataclass(frozen=True)
class Segment:
    """A piece of a midline between two consecutive cut points."""

    id: int
    start: Point
    end: Point
    orientation: Orientation
    cell_ids: tuple[str, str]
    # Sampled minimum distance from the segment to the nearest cell
    distance: float = float("inf")

    @property
    def coord(self) -> float:
        return self.start[0] if self.orientation is Orientation.VERTICAL else self.start[1]

    @property
    def span(self) -> tuple[float, float]:
        axis = 1 if self.orientation is Orientation.VERTICAL else 0
        a, b = self.start[axis], self.end[axis]
        return (min(a, b), max(a, b))

    @property
    def length(self) -> float:
        lo, hi = self.span
        return hi - lo


@dataclass
class GridRect:
    """Arena record for one grid cell (or containing rect) with its merge state."""

    id: int
    rect: Rect
    # Position in ctx.local_cells of the cell this containing rect seeds
    cell_index: int | None = None
    merged: bool = False
    group_id: int | None = None
    priority: float = float("inf")

    @property
    def is_seed(self) -> bool:
        return self.cell_index is not None


@dataclass
class MergedGroup:
    group_id: int
    cell: Cell
    containing: Rect
    rects: list[GridRect] = field(default_factory=list)

    @property
    def members(self) -> list[Rect]:
        """[containing rect, original rectangle, *absorbed grid rects]."""
        return [self.containing, self.cell.rect, *(r.rect for r in self.rects)]


@dataclass(frozen=True)
class Line:
    start: Point
    end: Point

    def translate(self, dx: float, dy: float) -> Line:
        return Line((self.start[0] + dx, self.start[1] + dy), (self.end[0] + dx, self.end[1] + dy))

    def canonical(self) -> Line:
        """Endpoint order with the lexicographically smaller point first."""
        if self.end < self.start:
            return Line(self.end, self.start)
        return self

    def as_dict(self) -> dict[str, dict[str, float]]:
        return {
            "start": {"x": self.start[0], "y": self.start[1]},
            "end": {"x": self.end[0], "y": self.end[1]},
        }


@dataclass
class PipelineContext:
    """Shared state flowing through the entire pipeline."""

    # Input cells in caller coordinates (converted once at entry)
    cells: list[Cell] = field(default_factory=list)
    # Optional container overrides; filled from the bounds when left as None
    container_width: float | None = None
    container_height: float | None = None
    config: PipelineConfig = field(default_factory=PipelineConfig)

    # --- Layer 0 ---
    # Translation applied to move the bounds' min corner to the origin
    offset: Point = (0.0, 0.0)
    # Cells in local (translated) coordinates, sorted by rect; list position is the group id
    local_cells: list[Cell] = field(default_factory=list)

    # --- Layer 1 ---
    midlines: list[Midline] = field(default_factory=list)
    intersections: list[Intersection] = field(default_factory=list)
    segments: list[Segment] = field(default_factory=list)

    # --- Layer 2 ---
    valid_segments: list[Segment] = field(default_factory=list)
    xs: list[float] = field(default_factory=list)
    ys: list[float] = field(default_factory=list)
    # Arena: grid_rects[i].id == i; containing rects are appended after grid cells
    grid_rects: list[GridRect] = field(default_factory=list)
    # containing_rects[k] is the arena id of the seed for cell k
    containing_rects: list[int] = field(default_factory=list)

    # --- Layer 3 ---
    groups: list[MergedGroup] = field(default_factory=list)
    orphan_rect_ids: list[int] = field(default_factory=list)

    # --- Layer 4 (local coordinates until T4.02 translates back) ---
    outline: list[Line] = field(default_factory=list)
    boundaries: list[Line] = field(default_factory=list)
    partition: dict[str, Any] = field(default_factory=dict)

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def num_cells(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> float:
        return self.container_width or 0.0

    @property
    def height(self) -> float:
        return self.container_height or 0.0

    @property
    def tol(self):
        return self.config.tolerance

    def cell_rects(self) -> list[Rect]:
        return [c.rect for c in self.local_cells]

    def grouped_rects(self) -> list[GridRect]:
        return [r for r in self.grid_rects if r.group_id is not None]
