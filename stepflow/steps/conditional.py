"""Branching step."""

from typing import Optional

from ..async_helpers import call_maybe_async
from ..context import WorkflowContext
from ..step import WorkflowStep
from ..types import ConditionFn


class ConditionalStep(WorkflowStep):
    """Step that runs one of two child steps depending on a condition.

    The condition is evaluated against the context when the step runs.
    The chosen child receives the same context object. When the condition
    is false and no ``false_step`` is given, the step does nothing.

    Errors raised by a child are attributed by the engine to this step,
    since the engine only tracks the steps it was given.

    Example:
        >>> ConditionalStep(
        ...     "charge_or_skip",
        ...     lambda ctx: ctx.input["amount"] > 0,
        ...     BasicStep("charge", charge_card),
        ...     BasicStep("skip", mark_free),
        ... )
    """

    def __init__(
        self,
        name: str,
        condition: ConditionFn,
        true_step: WorkflowStep,
        false_step: Optional[WorkflowStep] = None,
    ):
        """Create a conditional step.

        Args:
            name: Step name
            condition: Predicate of the context (sync or async)
            true_step: Step to run when the condition holds
            false_step: Optional step to run otherwise
        """
        self.name = name
        self.condition = condition
        self.true_step = true_step
        self.false_step = false_step

    async def execute(self, context: WorkflowContext) -> None:
        if await call_maybe_async(self.condition, context):
            await self.true_step.execute(context)
        elif self.false_step is not None:
            await self.false_step.execute(context)
