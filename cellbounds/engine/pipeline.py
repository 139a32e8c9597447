"""Pipeline orchestrator — runs transforms in dependency order with adaptive gating."""

from __future__ import annotations

import logging
import time

from cellbounds.engine.config import PipelineConfig
from cellbounds.engine.context import PipelineContext
from cellbounds.engine.registry import Layer, TransformRegistry, get_registry, load_transforms

logger = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates the transform pipeline."""

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()

    def run(self, ctx: PipelineContext) -> PipelineContext:
        """Run the full pipeline on the given context."""
        start = time.perf_counter()
        ctx.config = self.config

        skip_ids = self._adaptive_gate(ctx)
        requested = {s.id for s in self.registry.all()} - skip_ids
        ordered = self.registry.resolve_order(requested)

        logger.info(
            "Pipeline: %d transforms queued (%d skipped) for %d cells",
            len(ordered),
            len(skip_ids),
            ctx.num_cells,
        )

        for spec in ordered:
            missing = [d for d in spec.dependencies if d in ctx.errors]
            if missing:
                ctx.errors[spec.id] = f"skipped: dependency failed ({', '.join(missing)})"
                logger.warning("  %s SKIPPED: upstream %s failed", spec.id, ", ".join(missing))
                continue
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s completed in %.1fms", spec.id, elapsed)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d transforms in %.1fms",
            len(ctx.completed_transforms),
            len(ordered),
            total,
        )
        return ctx

    def run_layer(self, ctx: PipelineContext, layer: Layer) -> PipelineContext:
        """Run only transforms in a specific layer (earlier layers must already be done)."""
        ctx.config = self.config
        for spec in self.registry.resolve_order({s.id for s in self.registry.get_layer(layer)}):
            if spec.layer != layer or spec.id in ctx.completed_transforms:
                continue
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
        return ctx

    def _adaptive_gate(self, ctx: PipelineContext) -> set[str]:
        """Determine which transforms to skip.

        With fewer than min_cells cells there are no gaps to split, so only
        the INPUT layer runs and the boundary list stays empty.
        """
        if ctx.num_cells >= self.config.min_cells:
            return set()
        return {s.id for s in self.registry.all() if s.layer != Layer.INPUT}


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline instance with all transforms loaded."""
    load_transforms()
    return Pipeline(config=config)
