"""Function-wrapping step."""

from typing import Any

from ..async_helpers import call_maybe_async
from ..context import WorkflowContext
from ..step import WorkflowStep
from ..types import StepExecutor


class BasicStep(WorkflowStep):
    """Step whose work is a single function of the context.

    The function may be sync or async. Whatever it raises propagates
    unchanged, so the engine records it against this step.

    Example:
        >>> async def load_order(context):
        ...     context.result = await fetch(context.input["order_id"])
        >>> engine.add_step(BasicStep("load_order", load_order))
    """

    def __init__(self, name: str, executor: StepExecutor):
        """Create a basic step.

        Args:
            name: Step name
            executor: Function called with the context
        """
        self.name = name
        self.executor = executor

    async def execute(self, context: WorkflowContext) -> None:
        await call_maybe_async(self.executor, context)

    def __call__(self, context: WorkflowContext) -> Any:
        """Call the wrapped function directly (handy in tests)."""
        return self.executor(context)
