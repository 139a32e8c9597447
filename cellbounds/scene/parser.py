"""Scene parser — converts caller rectangles into engine Cells.

Accepts both rectangle shapes seen in the wild:
  {"minX", "minY", "maxX", "maxY"}   (or snake_case min_x ...)
  {"x", "y", "width", "height"}
plus Rect instances and any object exposing min_x/min_y/max_x/max_y.
Validation happens here, before any geometry runs.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from cellbounds.engine.context import Cell, PipelineContext, Rect
from cellbounds.engine.errors import InvalidRectangleError

logger = logging.getLogger(__name__)

_MINMAX_KEYS = (("minX", "minY", "maxX", "maxY"), ("min_x", "min_y", "max_x", "max_y"))
_XYWH_KEYS = ("x", "y", "width", "height")
_SCENE_KEYS = ("cellContents", "cell_contents", "rectangles")


def _to_rect(index: int, item: Any) -> Rect:
    if isinstance(item, Rect):
        return item
    if isinstance(item, Mapping):
        for keys in _MINMAX_KEYS:
            if all(k in item for k in keys):
                return Rect(*(_number(index, item[k]) for k in keys))
        if all(k in item for k in _XYWH_KEYS):
            x, y, w, h = (_number(index, item[k]) for k in _XYWH_KEYS)
            return Rect.from_xywh(x, y, w, h)
        raise InvalidRectangleError(index, f"unrecognized keys {sorted(item)}")
    if all(hasattr(item, k) for k in _MINMAX_KEYS[1]):
        return Rect(*(_number(index, getattr(item, k)) for k in _MINMAX_KEYS[1]))
    raise InvalidRectangleError(index, f"unsupported rectangle type {type(item).__name__}")


def _number(index: int, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidRectangleError(index, f"coordinate {value!r} is not a number")
    return float(value)


def validate_rect(index: int, rect: Rect) -> None:
    """Reject non-finite coordinates and empty extents."""
    if not all(math.isfinite(v) for v in rect.as_tuple()):
        raise InvalidRectangleError(index, "coordinates must be finite")
    if rect.min_x >= rect.max_x:
        raise InvalidRectangleError(index, f"minX ({rect.min_x}) >= maxX ({rect.max_x})")
    if rect.min_y >= rect.max_y:
        raise InvalidRectangleError(index, f"minY ({rect.min_y}) >= maxY ({rect.max_y})")


def normalize_rectangles(rectangles: Iterable[Any]) -> list[Rect]:
    """Convert and validate every rectangle; the whole input fails on the first bad one."""
    rects = []
    for i, item in enumerate(rectangles):
        rect = _to_rect(i, item)
        validate_rect(i, rect)
        rects.append(rect)
    return rects


def parse_cells(rectangles: Iterable[Any]) -> list[Cell]:
    return [Cell(id=f"cell-{i}", index=i, rect=r) for i, r in enumerate(normalize_rectangles(rectangles))]


def build_context(
    rectangles: Iterable[Any],
    container_width: float | None = None,
    container_height: float | None = None,
) -> PipelineContext:
    """Parse rectangles into a fresh PipelineContext. Pipeline.run supplies the config."""
    for name, value in (("container_width", container_width), ("container_height", container_height)):
        if value is not None and (not math.isfinite(value) or value < 0):
            raise ValueError(f"{name} must be a finite non-negative number, got {value!r}")

    ctx = PipelineContext(
        cells=parse_cells(rectangles),
        container_width=container_width,
        container_height=container_height,
    )
    logger.debug("Parsed %d cells", ctx.num_cells)
    return ctx


def load_scene(text: str) -> list[Rect]:
    """Parse a JSON scene: either a bare list of rectangles or {"cellContents": [...]}."""
    data = json.loads(text)
    if isinstance(data, Mapping):
        for key in _SCENE_KEYS:
            if key in data:
                data = data[key]
                break
        else:
            raise ValueError(f"Scene object needs one of the keys {_SCENE_KEYS}")
    if not isinstance(data, list):
        raise ValueError("Scene must be a list of rectangles")
    return normalize_rectangles(data)
