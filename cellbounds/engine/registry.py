"""Transform registry — every pipeline stage is a standalone function registered via decorator.

Usage:
    @transform(id="T1.02", layer=Layer.CONSTRUCTION, dependencies=["T1.01"])
    def intersections(ctx: PipelineContext) -> None:
        ctx.intersections = find_intersections(ctx.midlines, ctx.tol)

Adding a stage = creating one module in a layer package. load_transforms()
imports them all so the decorators fire.
"""

from __future__ import annotations

import enum
import heapq
import importlib
import logging
import pkgutil
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from cellbounds.engine.context import PipelineContext

logger = logging.getLogger(__name__)

LAYER_PACKAGES = ("layer0", "layer1", "layer2", "layer3", "layer4")


class Layer(enum.IntEnum):
    INPUT = 0
    CONSTRUCTION = 1
    GRID = 2
    REGIONS = 3
    OUTLINE = 4


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["PipelineContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class TransformRegistry:
    """Registry of pipeline transforms keyed by id."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.layer.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._transforms[transform_id]

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        return sorted((s for s in self._transforms.values() if s.layer == layer), key=lambda s: s.id)

    def all(self) -> list[TransformSpec]:
        return sorted(self._transforms.values(), key=lambda s: (s.layer, s.id))

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[TransformSpec]:
        """Topological sort respecting dependencies. If requested_ids is None, run all.

        Requested ids pull in their transitive dependencies. Among ready
        transforms the smallest id runs first, so the order is stable.
        """
        pool = self._transforms
        if requested_ids is not None:
            expanded: set[str] = set()
            stack = list(requested_ids)
            while stack:
                tid = stack.pop()
                if tid in expanded:
                    continue
                expanded.add(tid)
                spec = pool.get(tid)
                if spec:
                    stack.extend(spec.dependencies)
            pool = {k: v for k, v in pool.items() if k in expanded}

        # Kahn's algorithm
        in_degree = {tid: sum(1 for d in spec.dependencies if d in pool) for tid, spec in pool.items()}
        dependents: dict[str, list[str]] = {tid: [] for tid in pool}
        for tid, spec in pool.items():
            for dep in spec.dependencies:
                if dep in pool:
                    dependents[dep].append(tid)

        ready = [tid for tid, d in in_degree.items() if d == 0]
        heapq.heapify(ready)
        ordered: list[TransformSpec] = []
        while ready:
            tid = heapq.heappop(ready)
            ordered.append(pool[tid])
            for other in dependents[tid]:
                in_degree[other] -= 1
                if in_degree[other] == 0:
                    heapq.heappush(ready, other)

        if len(ordered) != len(pool):
            missing = set(pool) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {missing}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._transforms)


# Module-level singleton
_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a transform function."""

    def decorator(fn: Callable[["PipelineContext"], None]):
        _registry.register(
            TransformSpec(
                id=id,
                layer=layer,
                fn=fn,
                dependencies=dependencies or [],
                description=description,
            )
        )
        return fn

    return decorator


def load_transforms() -> int:
    """Import every layer package so the @transform decorators fire.

    Safe to call repeatedly: modules are imported once. Returns the number
    of registered transforms.
    """
    for layer_name in LAYER_PACKAGES:
        package = importlib.import_module(f"cellbounds.engine.{layer_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")
    return _registry.count
