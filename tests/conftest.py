"""Shared fixtures for stepflow tests."""

from typing import Any, List, Tuple

import pytest

from stepflow import BasicStep, WorkflowObserver


class RecordingObserver(WorkflowObserver):
    """Observer that records every event it receives."""

    def __init__(self) -> None:
        self.events: List[Tuple[Any, ...]] = []

    def on_workflow_start(self, context):
        self.events.append(("workflow_start",))

    def on_step_start(self, step_name, context):
        self.events.append(("step_start", step_name))

    def on_step_complete(self, step_name, context):
        self.events.append(("step_complete", step_name))

    def on_step_error(self, step_name, error, context):
        self.events.append(("step_error", step_name, str(error)))

    def on_workflow_complete(self, context):
        self.events.append(("workflow_complete",))

    def step_events(self, step_name: str) -> List[Tuple[Any, ...]]:
        return [e for e in self.events if len(e) > 1 and e[1] == step_name]


def make_append_step(name: str) -> BasicStep:
    """Step that appends its own name to metadata["ran"]."""

    def _run(context):
        context.metadata.setdefault("ran", []).append(name)

    return BasicStep(name, _run)


def make_failing_step(name: str, message: str = "boom") -> BasicStep:
    def _run(context):
        context.metadata.setdefault("ran", []).append(name)
        raise RuntimeError(message)

    return BasicStep(name, _run)


@pytest.fixture
def recorder() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def append_step():
    return make_append_step


@pytest.fixture
def failing_step():
    return make_failing_step
