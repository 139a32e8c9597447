"""T4.03 — Partition Check.

Diagnostics only: union each group's rects into a region and confirm the
regions tile the container without overlapping. Results go to ctx.partition.
"""

from __future__ import annotations

import logging
from typing import Any

from shapely.geometry import box
from shapely.ops import unary_union

from cellbounds.engine.context import MergedGroup, PipelineContext
from cellbounds.engine.registry import Layer, transform

logger = logging.getLogger(__name__)

# Overlap area below this (in squared units) is float noise, not a real overlap.
_OVERLAP_AREA_EPS = 1e-6


def group_region(group: MergedGroup):
    return unary_union([box(*r.as_tuple()) for r in group.members])


def check_partition(groups: list[MergedGroup], width: float, height: float) -> dict[str, Any]:
    regions = [group_region(g) for g in groups]
    container_area = width * height

    overlaps: list[tuple[int, int]] = []
    for i, a in enumerate(regions):
        for j in range(i + 1, len(regions)):
            if a.intersection(regions[j]).area > _OVERLAP_AREA_EPS:
                overlaps.append((groups[i].group_id, groups[j].group_id))

    covered = unary_union(regions).area if regions else 0.0
    coverage = covered / container_area if container_area > 0 else 0.0

    return {
        "group_count": len(groups),
        "coverage": round(coverage, 6),
        "overlapping_groups": overlaps,
        "region_areas": [round(r.area, 3) for r in regions],
    }


@transform(
    id="T4.03",
    layer=Layer.OUTLINE,
    dependencies=["T3.01"],
    description="Verify that the merged regions tile the container",
)
def partition_check(ctx: PipelineContext) -> None:
    ctx.partition = check_partition(ctx.groups, ctx.width, ctx.height)
    if ctx.partition["overlapping_groups"]:
        logger.warning("Overlapping regions: %s", ctx.partition["overlapping_groups"])
    logger.debug("Partition coverage %.4f", ctx.partition["coverage"])
