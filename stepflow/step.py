"""Step contract."""

from abc import ABC, abstractmethod

from .context import WorkflowContext


class WorkflowStep(ABC):
    """Abstract base class for workflow steps.

    A step is a named unit of work. The engine awaits ``execute`` before
    moving on; raising an exception marks the step as failed.

    Attributes:
        name: Step identifier used in notifications and error records
    """

    name: str

    @abstractmethod
    async def execute(self, context: WorkflowContext) -> None:
        """Run the step against the context.

        Args:
            context: Context of the current run
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name='{self.name}')"
