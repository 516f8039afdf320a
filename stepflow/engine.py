"""Workflow engine: runs steps in order against a shared context."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .async_helpers import call_maybe_async
from .context import WorkflowContext
from .observer import WorkflowObserver
from .step import WorkflowStep
from .types import ObserverEvent, WorkflowConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class WorkflowEngineOptions:
    """Configuration for a WorkflowEngine.

    Attributes:
        workflow_name: Name given to every context the engine creates
        workflow_id: Fixed execution id; a new one is generated per run when None
        metadata: Initial metadata, copied into each run's context
        result: Initial result value for each run
        continue_on_error: Keep running the remaining steps after a failure
        max_concurrency: Accepted for forward compatibility; steps always
            run one at a time
    """

    workflow_name: str
    workflow_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    result: Any = None
    continue_on_error: bool = False
    max_concurrency: int = 1

    def validate(self) -> None:
        """Check the options.

        Raises:
            WorkflowConfigurationError: If any option is invalid
        """
        errors = []
        if not isinstance(self.workflow_name, str):
            errors.append("workflow_name must be a string")
        if self.workflow_id is not None and not isinstance(self.workflow_id, str):
            errors.append("workflow_id must be a string")
        if self.metadata is not None and not isinstance(self.metadata, dict):
            errors.append("metadata must be a dict")
        if (
            isinstance(self.max_concurrency, bool)
            or not isinstance(self.max_concurrency, int)
            or self.max_concurrency < 1
        ):
            errors.append("max_concurrency must be a positive integer")
        if errors:
            raise WorkflowConfigurationError(errors)


class WorkflowEngine:
    """Executes workflow steps sequentially and notifies observers.

    Each call to ``execute`` creates a fresh WorkflowContext, runs every
    registered step in order and returns the context. Step failures are
    recorded in ``context.errors`` instead of being raised; by default the
    first failure stops the run. Observer failures are logged and ignored.

    Example:
        engine = (
            WorkflowEngine("orders", continue_on_error=True)
            .add_step(BasicStep("load", load_order))
            .add_step(BasicStep("charge", charge_order))
            .add_observer(PerformanceObserver())
        )
        context = await engine.execute({"order_id": 7})
        if not context.successful:
            print(context.errors)
    """

    def __init__(
        self,
        workflow_name: str,
        *,
        workflow_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        result: Any = None,
        continue_on_error: bool = False,
        max_concurrency: int = 1,
    ):
        """Create an engine.

        Args:
            workflow_name: Name of the workflow
            workflow_id: Fixed execution id (generated per run when None)
            metadata: Initial metadata for each run
            result: Initial result for each run
            continue_on_error: Run remaining steps after a step fails
            max_concurrency: Currently inert, must be a positive integer

        Raises:
            WorkflowConfigurationError: If the options are invalid
        """
        options = WorkflowEngineOptions(
            workflow_name=workflow_name,
            workflow_id=workflow_id,
            metadata=metadata,
            result=result,
            continue_on_error=continue_on_error,
            max_concurrency=max_concurrency,
        )
        options.validate()
        self.options = options
        self._steps: List[WorkflowStep] = []
        self._observers: List[WorkflowObserver] = []

    @classmethod
    def from_options(cls, options: WorkflowEngineOptions) -> WorkflowEngine:
        """Create an engine from an options object."""
        return cls(
            options.workflow_name,
            workflow_id=options.workflow_id,
            metadata=options.metadata,
            result=options.result,
            continue_on_error=options.continue_on_error,
            max_concurrency=options.max_concurrency,
        )

    @property
    def name(self) -> str:
        return self.options.workflow_name

    @property
    def steps(self) -> Tuple[WorkflowStep, ...]:
        return tuple(self._steps)

    @property
    def observers(self) -> Tuple[WorkflowObserver, ...]:
        return tuple(self._observers)

    def add_step(self, step: WorkflowStep) -> WorkflowEngine:
        """Add a step. Steps run in the order they are added."""
        self._steps.append(step)
        return self

    def add_steps(self, steps: Iterable[WorkflowStep]) -> WorkflowEngine:
        """Add several steps, keeping their order."""
        self._steps.extend(steps)
        return self

    def add_observer(self, observer: WorkflowObserver) -> WorkflowEngine:
        """Add an observer. Observers are notified in the order they are added."""
        self._observers.append(observer)
        return self

    def add_observers(self, observers: Iterable[WorkflowObserver]) -> WorkflowEngine:
        """Add several observers, keeping their order."""
        self._observers.extend(observers)
        return self

    def create_context(self, input: Any = None) -> WorkflowContext:
        """Build the context for a new run."""
        metadata = self.options.metadata
        return WorkflowContext(
            workflow_name=self.options.workflow_name,
            workflow_id=self.options.workflow_id,
            input=input,
            result=self.options.result,
            metadata=dict(metadata) if metadata is not None else None,
        )

    async def execute(self, input: Any = None) -> WorkflowContext:
        """Run the workflow.

        Args:
            input: Input data, available to steps as ``context.input``

        Returns:
            The context of this run. Check ``context.successful`` and
            ``context.errors`` to find out whether steps failed.
        """
        context = self.create_context(input)

        await self._notify(ObserverEvent.WORKFLOW_START, context)

        for step in list(self._steps):
            context.current_step_name = step.name

            await self._notify(ObserverEvent.STEP_START, step.name, context)

            try:
                await step.execute(context)
            except Exception as e:
                context.add_error(step.name, e)
                await self._notify(ObserverEvent.STEP_ERROR, step.name, e, context)

                if not self.options.continue_on_error:
                    logger.debug(
                        "[%s] Step '%s' failed, skipping remaining steps",
                        context.workflow_id,
                        step.name,
                    )
                    break
            else:
                await self._notify(ObserverEvent.STEP_COMPLETE, step.name, context)

        context.complete()

        await self._notify(ObserverEvent.WORKFLOW_COMPLETE, context)

        return context

    async def _notify(self, event: ObserverEvent, *args: Any) -> None:
        """Call ``event`` on every observer that implements it.

        Each callback is awaited before the next; an exception from one
        observer is logged and does not affect the others or the run.
        """
        for observer in list(self._observers):
            callback = getattr(observer, event.value, None)
            if not callable(callback):
                continue
            try:
                await call_maybe_async(callback, *args)
            except Exception:
                logger.exception(
                    "Error in workflow observer %s (%s)",
                    type(observer).__name__,
                    event.value,
                )

    def __repr__(self) -> str:
        return (
            f"WorkflowEngine(name='{self.name}', steps={[s.name for s in self._steps]}, "
            f"observers={len(self._observers)})"
        )
