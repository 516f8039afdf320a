"""Factory for creating workflow engines."""

from typing import Any, Iterable, Optional

from .engine import WorkflowEngine
from .observer import WorkflowObserver
from .step import WorkflowStep


class WorkflowFactory:
    """Creates ready-to-run engines from a single configuration call.

    Example:
        engine = WorkflowFactory.create_workflow(
            "orders",
            steps=[load_order, charge_order],
            observers=[ConsoleObserver()],
            continue_on_error=True,
        )
    """

    @staticmethod
    def create_workflow(
        workflow_name: str,
        *,
        steps: Optional[Iterable[WorkflowStep]] = None,
        observers: Optional[Iterable[WorkflowObserver]] = None,
        **engine_options: Any,
    ) -> WorkflowEngine:
        """Create an engine with steps and observers already registered.

        Args:
            workflow_name: Name of the workflow
            steps: Steps in execution order
            observers: Observers in notification order
            **engine_options: Other WorkflowEngine keyword arguments

        Returns:
            The configured engine
        """
        engine = WorkflowEngine(workflow_name, **engine_options)

        if steps:
            engine.add_steps(steps)
        if observers:
            engine.add_observers(observers)

        return engine


create_workflow = WorkflowFactory.create_workflow
