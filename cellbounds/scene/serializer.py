"""Plain-dict / JSON output for boundary results."""

from __future__ import annotations

import json
import math
from typing import Any

from cellbounds.engine.boundaries import BoundaryResult
from cellbounds.engine.context import Line, Midline, Rect, Segment


def rect_to_dict(rect: Rect) -> dict[str, float]:
    return {"minX": rect.min_x, "minY": rect.min_y, "maxX": rect.max_x, "maxY": rect.max_y}


def lines_to_dicts(lines: list[Line]) -> list[dict[str, dict[str, float]]]:
    return [line.as_dict() for line in lines]


def _point(p: tuple[float, float]) -> dict[str, float]:
    return {"x": p[0], "y": p[1]}


def segment_to_dict(seg: Segment | Midline) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": seg.id,
        "orientation": seg.orientation.value,
        "start": _point(seg.start),
        "end": _point(seg.end),
        "cellIds": list(seg.cell_ids),
    }
    if isinstance(seg, Segment):
        data["distance"] = seg.distance
    return data


def result_to_dict(result: BoundaryResult) -> dict[str, Any]:
    return {
        "boundaries": lines_to_dicts(result.boundaries),
        "container": rect_to_dict(result.container),
        "cellRects": [rect_to_dict(r) for r in result.cell_rects],
        "midlines": [segment_to_dict(m) for m in result.midlines],
        "segments": [segment_to_dict(s) for s in result.segments],
        "validSegments": [segment_to_dict(s) for s in result.valid_segments],
        "gridRects": [rect_to_dict(r) for r in result.grid_rects],
        "groups": [
            {"groupId": g.group_id, "cellId": g.cell_id, "rects": [rect_to_dict(r) for r in g.rects]}
            for g in result.groups
        ],
        "orphanRects": [rect_to_dict(r) for r in result.orphan_rects],
        "partition": {
            **result.partition,
            "overlapping_groups": [list(p) for p in result.partition.get("overlapping_groups", [])],
        },
    }


def dumps(data: Any, indent: int | None = 2) -> str:
    # inf distances are not valid JSON
    return json.dumps(replace_non_finite(data), indent=indent)


def replace_non_finite(data: Any) -> Any:
    """Non-finite floats (unreachable distances) become None."""
    if isinstance(data, float) and not math.isfinite(data):
        return None
    if isinstance(data, dict):
        return {k: replace_non_finite(v) for k, v in data.items()}
    if isinstance(data, list):
        return [replace_non_finite(v) for v in data]
    return data
