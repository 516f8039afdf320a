"""Tests for WorkflowFactory."""

import pytest

from stepflow import (
    PerformanceObserver,
    WorkflowConfigurationError,
    WorkflowEngine,
    WorkflowFactory,
    create_workflow,
)


def test_creates_engine_with_steps_and_observers(append_step, recorder):
    steps = [append_step("a"), append_step("b")]
    performance = PerformanceObserver()

    engine = WorkflowFactory.create_workflow(
        "wf",
        steps=steps,
        observers=[recorder, performance],
        continue_on_error=True,
        metadata={"seed": 1},
    )

    assert isinstance(engine, WorkflowEngine)
    assert engine.name == "wf"
    assert engine.steps == tuple(steps)
    assert engine.observers == (recorder, performance)
    assert engine.options.continue_on_error is True
    assert engine.options.metadata == {"seed": 1}


def test_without_steps_or_observers():
    engine = create_workflow("empty")

    assert engine.steps == ()
    assert engine.observers == ()


def test_invalid_options_raise():
    with pytest.raises(WorkflowConfigurationError):
        create_workflow("wf", max_concurrency=0)


def test_unknown_option_raises():
    with pytest.raises(TypeError):
        create_workflow("wf", retries=3)


@pytest.mark.asyncio
async def test_created_engine_runs(append_step, failing_step, recorder):
    engine = create_workflow(
        "wf",
        steps=[append_step("a"), failing_step("b"), append_step("c")],
        observers=[recorder],
    )

    context = await engine.execute()

    assert context.metadata["ran"] == ["a", "b"]
    assert [e.step for e in context.errors] == ["b"]
    assert recorder.events[-1] == ("workflow_complete",)
