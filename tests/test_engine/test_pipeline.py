"""Tests for the pipeline orchestrator."""

from cellbounds.engine.config import PipelineConfig
from cellbounds.engine.context import Cell, PipelineContext, Rect
from cellbounds.engine.pipeline import Pipeline, create_pipeline
from cellbounds.engine.registry import Layer, TransformRegistry, TransformSpec


def _ctx(n: int) -> PipelineContext:
    return PipelineContext(cells=[Cell(f"cell-{i}", i, Rect(i * 20, 0, i * 20 + 10, 10)) for i in range(n)])


def test_pipeline_runs_transforms():
    reg = TransformRegistry()
    results = []

    def t1(ctx: PipelineContext) -> None:
        results.append("t1")

    def t2(ctx: PipelineContext) -> None:
        results.append("t2")

    reg.register(TransformSpec(id="T0.01", layer=Layer.INPUT, fn=t1))
    reg.register(TransformSpec(id="T1.01", layer=Layer.CONSTRUCTION, fn=t2, dependencies=["T0.01"]))

    ctx = Pipeline(registry=reg).run(_ctx(2))

    assert results == ["t1", "t2"]
    assert ctx.completed_transforms == {"T0.01", "T1.01"}


def test_pipeline_handles_errors():
    reg = TransformRegistry()

    def fail(ctx: PipelineContext) -> None:
        raise ValueError("test error")

    reg.register(TransformSpec(id="T0.01", layer=Layer.INPUT, fn=fail))

    ctx = Pipeline(registry=reg).run(_ctx(2))

    assert "T0.01" in ctx.errors
    assert "test error" in ctx.errors["T0.01"]


def test_failed_dependency_skips_dependents():
    reg = TransformRegistry()
    ran = []

    def fail(ctx: PipelineContext) -> None:
        raise RuntimeError("boom")

    reg.register(TransformSpec(id="T0.01", layer=Layer.INPUT, fn=fail))
    reg.register(
        TransformSpec(id="T1.01", layer=Layer.CONSTRUCTION, fn=lambda ctx: ran.append(1), dependencies=["T0.01"])
    )

    ctx = Pipeline(registry=reg).run(_ctx(2))

    assert ran == []
    assert ctx.errors["T1.01"].startswith("skipped")


def test_gate_skips_layers_for_single_cell():
    reg = TransformRegistry()
    ran = []
    reg.register(TransformSpec(id="T0.01", layer=Layer.INPUT, fn=lambda ctx: ran.append("T0.01")))
    reg.register(
        TransformSpec(
            id="T1.01", layer=Layer.CONSTRUCTION, fn=lambda ctx: ran.append("T1.01"), dependencies=["T0.01"]
        )
    )

    Pipeline(registry=reg).run(_ctx(1))
    assert ran == ["T0.01"]

    ran.clear()
    Pipeline(registry=reg, config=PipelineConfig(min_cells=1)).run(_ctx(1))
    assert ran == ["T0.01", "T1.01"]


def test_run_layer():
    reg = TransformRegistry()
    ran = []
    reg.register(TransformSpec(id="T0.01", layer=Layer.INPUT, fn=lambda ctx: ran.append("T0.01")))
    reg.register(
        TransformSpec(
            id="T1.01", layer=Layer.CONSTRUCTION, fn=lambda ctx: ran.append("T1.01"), dependencies=["T0.01"]
        )
    )

    Pipeline(registry=reg).run_layer(_ctx(2), Layer.CONSTRUCTION)
    assert ran == ["T1.01"]


def test_full_pipeline_completes():
    ctx = create_pipeline().run(_ctx(3))
    assert ctx.errors == {}
    assert len(ctx.completed_transforms) == 10
    # Three cells in a row: two vertical separators
    assert len(ctx.boundaries) == 2
