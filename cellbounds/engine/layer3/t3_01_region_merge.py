"""T3.01 — Region Growing.

Seeds every cell's containing rect with the cell's position in ctx.local_cells
as group id, then absorbs the remaining grid rects one at a time, lowest
priority first, until a full pass merges nothing.

Priority of a grid rect: the smallest segment distance among the valid
segments lying on one of its edges (inf when none does).

Group choice for a rect with several merged neighbours: the group whose
*original cell* is closest edge-to-edge, ties to the smaller group id.

Grid rects no seed can reach are orphans; PipelineConfig.orphan_policy
decides whether they join the nearest cell's group or stay ungrouped.
"""

from __future__ import annotations

import logging

from cellbounds.engine.context import Cell, GridRect, MergedGroup, Orientation, PipelineContext, Rect, Segment
from cellbounds.engine.registry import Layer, transform
from cellbounds.engine.tolerance import DEFAULT_TOLERANCE, Tolerance
from cellbounds.utils.geometry import are_adjacent, edge_to_edge_distance

logger = logging.getLogger(__name__)


def bounds_rect(seg: Segment, rect: Rect, tol: Tolerance = DEFAULT_TOLERANCE) -> bool:
    """True when the segment lies on one of the rect's edges with real overlap."""
    lo, hi = seg.span
    if seg.orientation is Orientation.HORIZONTAL:
        on_edge = tol.eq(seg.coord, rect.min_y) or tol.eq(seg.coord, rect.max_y)
        return on_edge and tol.spans_overlap(lo, hi, rect.min_x, rect.max_x)
    on_edge = tol.eq(seg.coord, rect.min_x) or tol.eq(seg.coord, rect.max_x)
    return on_edge and tol.spans_overlap(lo, hi, rect.min_y, rect.max_y)


def rect_priority(rect: Rect, valid: list[Segment], tol: Tolerance = DEFAULT_TOLERANCE) -> float:
    return min((s.distance for s in valid if bounds_rect(s, rect, tol)), default=float("inf"))


def nearest_group(rect: Rect, group_ids: list[int], cells: list[Cell]) -> int:
    """Group whose cell is nearest to rect (edge-to-edge), ties to the smaller id."""
    return min(group_ids, key=lambda gid: (edge_to_edge_distance(rect, cells[gid].rect), gid))


def grow_regions(
    arena: list[GridRect],
    valid: list[Segment],
    cells: list[Cell],
    tol: Tolerance = DEFAULT_TOLERANCE,
) -> list[int]:
    """Run the merge loop in place on the arena. Returns ids of unreached rects."""
    for g in arena:
        g.priority = rect_priority(g.rect, valid, tol)
        if g.is_seed:
            g.merged = True
            g.group_id = g.cell_index

    pending = sorted((g.id for g in arena if not g.merged), key=lambda i: arena[i].priority)
    passes = 0
    while pending:
        passes += 1
        deferred: list[int] = []
        for rid in pending:
            current = arena[rid]
            neighbours = [
                other.group_id
                for other in arena
                if other.merged and other.id != rid and are_adjacent(current.rect, other.rect, tol)
            ]
            if not neighbours:
                deferred.append(rid)
                continue
            current.merged = True
            groups = sorted(set(neighbours))
            current.group_id = groups[0] if len(groups) == 1 else nearest_group(current.rect, groups, cells)

        if len(deferred) == len(pending):
            break
        pending = sorted(deferred, key=lambda i: arena[i].priority)

    logger.debug("Region growth converged after %d passes, %d unreached", passes, len(pending))
    return pending


def assign_orphans(arena: list[GridRect], orphan_ids: list[int], cells: list[Cell]) -> None:
    all_groups = list(range(len(cells)))
    for rid in orphan_ids:
        g = arena[rid]
        g.merged = True
        g.group_id = nearest_group(g.rect, all_groups, cells)


def collect_groups(arena: list[GridRect], containing: list[int], cells: list[Cell]) -> list[MergedGroup]:
    groups = [
        MergedGroup(group_id=gid, cell=cell, containing=arena[containing[gid]].rect)
        for gid, cell in enumerate(cells)
    ]
    for g in arena:
        if g.group_id is None or g.id == containing[g.group_id]:
            continue
        groups[g.group_id].rects.append(g)
    return groups


@transform(
    id="T3.01",
    layer=Layer.REGIONS,
    dependencies=["T2.02"],
    description="Grow each cell's region over adjacent grid rects",
)
def region_merge(ctx: PipelineContext) -> None:
    orphans = grow_regions(ctx.grid_rects, ctx.valid_segments, ctx.local_cells, ctx.tol)
    ctx.orphan_rect_ids = list(orphans)

    if orphans:
        logger.warning(
            "%d grid rect(s) unreachable from any cell (policy=%s): %s",
            len(orphans),
            ctx.config.orphan_policy,
            orphans,
        )
        if ctx.config.orphan_policy == "nearest":
            assign_orphans(ctx.grid_rects, orphans, ctx.local_cells)

    ctx.groups = collect_groups(ctx.grid_rects, ctx.containing_rects, ctx.local_cells)
