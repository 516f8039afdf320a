"""Observer contract for workflow lifecycle events."""

from typing import Any

from .context import WorkflowContext


class WorkflowObserver:
    """Base class for observing workflow execution.

    Every callback is a no-op by default; subclasses override the ones they
    need, as plain methods or coroutines. Observers watch the run and may
    annotate ``context.metadata``, but cannot change control flow: anything
    they raise is logged by the engine and otherwise ignored.
    """

    def on_workflow_start(self, context: WorkflowContext) -> Any:
        """Called before the first step runs."""
        return None

    def on_step_start(self, step_name: str, context: WorkflowContext) -> Any:
        """Called when a step is about to run."""
        return None

    def on_step_complete(self, step_name: str, context: WorkflowContext) -> Any:
        """Called when a step finished without raising."""
        return None

    def on_step_error(self, step_name: str, error: Exception, context: WorkflowContext) -> Any:
        """Called when a step raised; the error is already in ``context.errors``."""
        return None

    def on_workflow_complete(self, context: WorkflowContext) -> Any:
        """Called after the run completed, successfully or with errors."""
        return None
